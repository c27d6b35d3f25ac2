"""Git platform adapters."""

from prbranch.adapters.base import (
    GitPlatformAdapter,
    GitPlatformError,
    RefFound,
    RefLookup,
    RefLookupFailed,
    RefNotFound,
)
from prbranch.adapters.github import GitHubAdapter

__all__ = [
    "GitPlatformAdapter",
    "GitPlatformError",
    "GitHubAdapter",
    "RefFound",
    "RefLookup",
    "RefLookupFailed",
    "RefNotFound",
]
