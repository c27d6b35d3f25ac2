"""Root logger setup for the prbranch command.

The level comes from ``--log-level`` when given, otherwise from
config.yaml (logging.level) or env LOGGING_LEVEL. urllib3 is held at
WARNING unless the run is at DEBUG.
"""

import logging

from prbranch.config import LoggingConfig

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR")
FALLBACK_FORMAT = "%(levelname)s %(name)s: %(message)s"


def level_from_name(name: str | None) -> int:
    """Logging constant for ``name``; INFO for empty or unknown names."""
    key = (name or "").strip().upper()
    if key not in LEVEL_NAMES:
        return logging.INFO
    return logging.getLevelName(key)


def setup_logging(config: LoggingConfig, level: str | None = None) -> int:
    """Configure the root logger and return the effective level."""
    effective = level_from_name(level or config.level)
    logging.basicConfig(
        level=effective,
        format=config.format or FALLBACK_FORMAT,
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.DEBUG if effective <= logging.DEBUG else logging.WARNING)
    return effective
