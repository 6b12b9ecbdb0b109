"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    EdgeNotFoundError,
    GraphError,
    MergeInvariantError,
    NodeNotFoundError,
    ReportError,
    TransitRankError,
)
from .models import (
    MERGED_WEIGHT,
    Edge,
    EdgeType,
    GeoLocation,
    RankedStop,
    RankResult,
    ShortestPathResult,
    Stop,
)

__all__ = [
    # Models
    "MERGED_WEIGHT",
    "EdgeType",
    "GeoLocation",
    "Stop",
    "Edge",
    "ShortestPathResult",
    "RankedStop",
    "RankResult",
    # Errors
    "TransitRankError",
    "GraphError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "MergeInvariantError",
    "ReportError",
    "ConfigurationError",
]
