"""Graph ports - Abstractions for graph loading.

The construction of the initial graph from stop and edge records is
delegated to a repository, so the algorithms never know where the
network comes from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Stop
    from ..graph.transit_graph import Graph


class GraphRepositoryPort(Protocol):
    """Port for loading graph data.

    Implementation: adapters/graph/csv_repository.py

    The repository is responsible for loading and caching the
    transit network graph from persistent storage.
    """

    def load(self) -> Graph:
        """Load the transit graph.

        Returns:
            The graph with stops indexed in load order.
        """
        ...

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        """Get stop details by identifier.

        Args:
            stop_id: The stop identifier to look up.

        Returns:
            The stop, or None if not found.
        """
        ...

    def list_stops(self) -> Sequence[Stop]:
        """List all stops in load order."""
        ...
