"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for the settings of the
ambient layers around the graph engine: logging, map rendering and the
reporting service. The graph itself has no tunables.

Configuration can be overridden via environment variables:
- PG_LOG_LEVEL=DEBUG
- PG_LOG_STRUCTURED=true
- PG_RENDER_ZOOM_START=8
- PG_REPORT_MAX_NEARBY_RESULTS=5
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with PG_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class RenderingConfig(BaseSettings):
    """Map rendering configuration.

    Environment variables prefixed with PG_RENDER_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_RENDER_")

    tiles: str = "OpenStreetMap"
    zoom_start: int = 6
    route_color: str = "blue"
    route_weight: int = 3
    output_dir: Path = Field(default_factory=lambda: Path.cwd() / "maps")

    def output_path(self, file_name: str) -> Path:
        """Full path for a rendered map file."""
        return self.output_dir / file_name


class ReportConfig(BaseSettings):
    """Reporting (GraphVisualizer) configuration.

    Environment variables prefixed with PG_REPORT_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_REPORT_")

    max_nearby_results: Optional[int] = None


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

        config = get_config()
        print(config.observability.level)
        print(config.rendering.output_dir)

    Environment variables prefixed with PG_.
    """

    model_config = SettingsConfigDict(env_prefix="PG_")

    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
