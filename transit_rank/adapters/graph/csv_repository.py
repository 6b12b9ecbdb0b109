"""CSV Graph Repository adapter.

Loads the transit network from two CSV files:

- stops: ``stop_id,stop_name,lat,lon,routes`` with routes separated by
  ``|`` (configurable);
- edges: ``origin,destination,type,weight`` where origin and destination
  are stop identifiers and type is ``route`` or ``transfer``.

Stops are indexed in file order. The loaded graph is cached until
``clear_cache`` is called.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError
from ...domain.models import Edge, EdgeType, GeoLocation, Stop
from ...graph.transit_graph import Graph


@dataclass
class CSVGraphRepository:
    """Graph repository that loads from CSV files.

    This adapter implements GraphRepositoryPort.

    Attributes:
        config: Graph configuration (paths, file names)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _graph: Optional[Graph] = field(default=None, repr=False)
    _stops: Optional[List[Stop]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> Graph:
        """Load the transit graph from CSV files.

        Returns:
            The graph with stops indexed in file order.

        Raises:
            GraphError: If the graph cannot be loaded.
        """
        if self._graph is not None:
            return self._graph

        self._logger.debug(
            "Loading graph",
            extra={
                "stops_path": str(self.config.stops_path),
                "edges_path": str(self.config.edges_path),
            },
        )

        stops = self._load_stops()
        try:
            edges = self._load_edges({stop.stop_id: i for i, stop in enumerate(stops)})
        except (OSError, KeyError, ValueError) as e:
            raise GraphError(
                f"Failed to load edges: {e}",
                file_path=str(self.config.edges_path),
                cause=e,
            )

        graph = Graph(stops, edges)
        self._graph = graph
        self._logger.info(
            "Graph loaded",
            extra={"nodes": graph.num_nodes, "edges": graph.num_edges},
        )
        return graph

    def _load_edges(self, index: Dict[str, int]) -> List[Edge]:
        """Internal method to read edges, resolving stop ids to indices."""
        edges: List[Edge] = []

        with self.config.edges_path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for row in reader:
                origin = (row.get("origin") or "").strip()
                destination = (row.get("destination") or "").strip()
                if not origin or not destination:
                    continue

                edge_type = EdgeType((row.get("type") or "route").strip().lower())
                weight_str = (row.get("weight") or "").strip()

                edges.append(
                    Edge(
                        origin=index[origin],
                        destination=index[destination],
                        type=edge_type,
                        weight=float(weight_str) if weight_str else 0.0,
                    )
                )

        return edges

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        """Get stop details by identifier.

        Args:
            stop_id: The stop identifier to look up.

        Returns:
            The stop, or None if not found.
        """
        for stop in self._load_stops():
            if stop.stop_id == stop_id:
                return stop
        return None

    def index_of(self, stop_id: str) -> Optional[int]:
        """Return the node index of a stop, or None if not found."""
        for i, stop in enumerate(self._load_stops()):
            if stop.stop_id == stop_id:
                return i
        return None

    def list_stops(self) -> Sequence[Stop]:
        """List all stops in file order."""
        return list(self._load_stops())

    def _load_stops(self) -> List[Stop]:
        """Load stop metadata from CSV."""
        if self._stops is not None:
            return self._stops

        stops: List[Stop] = []
        seen: set[str] = set()
        separator = self.config.routes_separator

        try:
            with self.config.stops_path.open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                for row in reader:
                    stop_id = (row.get("stop_id") or "").strip()
                    name = (row.get("stop_name") or "").strip()
                    lat_str = (row.get("lat") or "").strip()
                    lon_str = (row.get("lon") or "").strip()
                    routes_str = (row.get("routes") or "").strip()

                    if not stop_id:
                        continue
                    if stop_id in seen:
                        raise GraphError(
                            f"Duplicate stop id: {stop_id}",
                            file_path=str(self.config.stops_path),
                        )
                    seen.add(stop_id)

                    # Handle missing coordinates gracefully
                    lat = float(lat_str) if lat_str else 0.0
                    lon = float(lon_str) if lon_str else 0.0

                    routes = tuple(
                        route.strip() for route in routes_str.split(separator) if route.strip()
                    )

                    stops.append(
                        Stop(
                            stop_id=stop_id,
                            name=name or stop_id,
                            location=GeoLocation(latitude=lat, longitude=lon),
                            routes=routes,
                        )
                    )
        except (OSError, ValueError) as e:
            raise GraphError(
                f"Failed to load stops: {e}",
                file_path=str(self.config.stops_path),
                cause=e,
            )

        self._stops = stops
        return stops

    def clear_cache(self) -> None:
        """Clear cached graph and stop data."""
        self._graph = None
        self._stops = None
        self._logger.debug("Graph cache cleared")
