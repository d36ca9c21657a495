"""Logging setup for applications embedding ctrlxt.

The library itself only creates module loggers; applications call
configure_logging() once at startup.
"""

from __future__ import annotations

import logging

from ctrlxt.config.settings import LoggingSettings


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure root logging from LoggingSettings.

    Args:
        settings: Logging settings; loaded from the environment if omitted.

    Raises:
        ValueError: If the configured level name is unknown.
    """
    settings = settings or LoggingSettings()
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.level}")
    logging.basicConfig(level=level, format=settings.format)
