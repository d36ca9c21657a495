"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for world
defaults and logging.

Usage:
    from ctrlxt.config import WorldSettings, LoggingSettings

    # Load from environment variables (CTRLXT_*, CTRLXT_LOG_*)
    world_settings = WorldSettings()
    log_settings = LoggingSettings()

    # Or override with explicit values
    world_settings = WorldSettings(default_dimensions=(50, 50, 50))
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorldSettings(BaseSettings):  # type: ignore[misc]
    """Defaults for worlds created without explicit arguments.

    Also used for the World handed back when a snapshot cannot be restored.

    Attributes:
        default_dimensions: Extents (x, y, z) of default worlds.
        composition: Processor composition label.
        processing_model: Processing model label.
        data_sources: Data source names.

    Environment Variables:
        CTRLXT_DEFAULT_DIMENSIONS (JSON list, e.g. "[10, 10, 10]")
        CTRLXT_COMPOSITION
        CTRLXT_PROCESSING_MODEL
        CTRLXT_DATA_SOURCES (JSON list)
    """

    model_config = SettingsConfigDict(
        env_prefix="CTRLXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_dimensions: tuple[float, float, float] = (10.0, 10.0, 10.0)
    composition: str = "default"
    processing_model: str = "default"
    data_sources: list[str] = Field(default_factory=list)


class LoggingSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for ctrlxt logging.

    Attributes:
        level: Root log level name.
        format: logging format string.

    Environment Variables:
        CTRLXT_LOG_LEVEL
        CTRLXT_LOG_FORMAT
    """

    model_config = SettingsConfigDict(
        env_prefix="CTRLXT_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
