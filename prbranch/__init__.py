"""Per-contributor branch creation for pull requests."""

__version__ = "0.1.0"
