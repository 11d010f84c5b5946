"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- FLOWFINDER_ROUTING_CONGESTION_PENALTY=0.8
- FLOWFINDER_ROUTING_WALKING_SPEED=4.0
- FLOWFINDER_DATA_DATA_DIR=/path/to/data
- FLOWFINDER_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingConfig(BaseSettings):
    """Route planning policy.

    Environment variables prefixed with FLOWFINDER_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="FLOWFINDER_ROUTING_")

    # Maximum relative cost increase for a fully occupied destination
    congestion_penalty: float = Field(default=0.5, ge=0.0)
    # Distance units per hour, used for estimated walking time
    walking_speed: float = Field(default=5.0, gt=0.0)
    early_exit: bool = True


class DataConfig(BaseSettings):
    """Map record files.

    Environment variables prefixed with FLOWFINDER_DATA_.
    """

    model_config = SettingsConfigDict(env_prefix="FLOWFINDER_DATA_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    nodes_file: str = "nodes.csv"
    links_file: str = "links.csv"
    points_of_interest_file: str = "points_of_interest.csv"

    @property
    def nodes_path(self) -> Path:
        """Full path to nodes CSV file."""
        return self.data_dir / self.nodes_file

    @property
    def links_path(self) -> Path:
        """Full path to links CSV file."""
        return self.data_dir / self.links_file

    @property
    def points_of_interest_path(self) -> Path:
        """Full path to points of interest CSV file."""
        return self.data_dir / self.points_of_interest_file


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with FLOWFINDER_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="FLOWFINDER_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.routing.congestion_penalty)
        print(config.data.links_path)

    Environment variables prefixed with FLOWFINDER_.
    """

    model_config = SettingsConfigDict(env_prefix="FLOWFINDER_")

    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
