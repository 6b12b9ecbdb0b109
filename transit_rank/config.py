"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
data file locations, rank propagation parameters, report output and
logging.

Configuration can be overridden via environment variables:
- TRANSIT_GRAPH_DATA_DIR=/path/to/data
- TRANSIT_RANK_ITERATIONS=20
- TRANSIT_RANK_DAMPING=0.85
- TRANSIT_REPORT_OUTPUT_DIR=/tmp/reports
- TRANSIT_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphConfig(BaseSettings):
    """Graph data configuration.

    Environment variables prefixed with TRANSIT_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    stops_file: str = "stops.csv"
    edges_file: str = "edges.csv"
    routes_separator: str = "|"

    @property
    def stops_path(self) -> Path:
        """Full path to stops CSV file."""
        return self.data_dir / self.stops_file

    @property
    def edges_path(self) -> Path:
        """Full path to edges CSV file."""
        return self.data_dir / self.edges_file


class RankConfig(BaseSettings):
    """Rank propagation configuration.

    Environment variables prefixed with TRANSIT_RANK_.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_RANK_")

    damping: float = Field(default=1.0, ge=0.0, le=1.0)
    iterations: int = Field(default=10, ge=0)
    initial_rank: float = 1.0
    precision: int = Field(default=5, ge=0)
    merge_transfers: bool = True


class ReportConfig(BaseSettings):
    """Report output configuration.

    Environment variables prefixed with TRANSIT_REPORT_.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_REPORT_")

    output_dir: Path = Field(default_factory=Path.cwd)
    rank_file: str = "pageRank.csv"

    @property
    def rank_path(self) -> Path:
        """Full path to the rank report."""
        return self.output_dir / self.rank_file


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with TRANSIT_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    This is the main entry point for configuration. Sub-configurations
    can be accessed via attributes:

        config = get_config()
        print(config.rank.iterations)
        print(config.graph.stops_path)

    Environment variables prefixed with TRANSIT_.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    rank: RankConfig = Field(default_factory=RankConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the logging configuration to the root logger.

    Only entry points call this; library modules just create their
    loggers.
    """
    config = config or get_config().observability
    logging.basicConfig(level=config.level.upper(), format=config.format)
