"""Configuration module using Pydantic Settings.

Provides typed configuration for world defaults and logging with environment
variable support.

Usage:
    from ctrlxt.config import WorldSettings, LoggingSettings, configure_logging

    configure_logging(LoggingSettings(level="DEBUG"))
    settings = WorldSettings(composition="CosmicDustEntanglement")
"""

from ctrlxt.config.log import configure_logging
from ctrlxt.config.settings import LoggingSettings, WorldSettings

__all__ = [
    "WorldSettings",
    "LoggingSettings",
    "configure_logging",
]
