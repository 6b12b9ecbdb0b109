"""Services layer - Application orchestration.

This module contains the application services that orchestrate the
flow of data through adapters and the graph engine.

Available services:
- NetworkAnalysisService: Traversals, shortest paths and ranking
"""

from .network_analysis import NetworkAnalysisService

__all__ = ["NetworkAnalysisService"]
