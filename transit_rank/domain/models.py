"""Immutable domain models for the transit ranking engine.

All models are frozen dataclasses with slots for memory efficiency.
These models have no external dependencies and represent the core
concepts of a transit network: stops, typed edges between them and
the results produced by the graph algorithms.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

# Weight carried by edges produced when two nodes are merged. Weights are
# not numerically composable across a merge.
MERGED_WEIGHT = -1.0


class EdgeType(Enum):
    """Kind of relation between two stops."""

    ROUTE = "route"
    TRANSFER = "transfer"


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    def midpoint(self, other: GeoLocation) -> GeoLocation:
        """Return the point halfway between two locations."""
        return GeoLocation(
            latitude=(self.latitude + other.latitude) / 2,
            longitude=(self.longitude + other.longitude) / 2,
        )


@dataclass(frozen=True, slots=True)
class Stop:
    """A station or platform of the transit network.

    Attributes:
        stop_id: Stable stop identifier (e.g., 'R16N')
        name: Human-readable stop name
        location: GPS coordinates of the stop
        routes: Identifiers of the routes serving the stop
        rank: Transient rank computed by an algorithm, not part of identity
    """

    stop_id: str
    name: str
    location: GeoLocation
    routes: tuple[str, ...] = field(default_factory=tuple)
    rank: Optional[float] = field(default=None, compare=False)

    @property
    def routes_text(self) -> str:
        """Routes rendered as a comma-separated list."""
        return ",".join(self.routes)

    def merge_with(self, other: Stop) -> Stop:
        """Return a new stop representing the union of two stops.

        Neither stop is modified. The merged stop sits halfway between
        the originals and is served by the routes of both.
        """
        if self.name == other.name:
            name = self.name
        else:
            name = f"{self.name} / {other.name}"

        routes = tuple(dict.fromkeys(self.routes + other.routes))

        return Stop(
            stop_id=f"{self.stop_id}+{other.stop_id}",
            name=name,
            location=self.location.midpoint(other.location),
            routes=routes,
        )

    def with_rank(self, rank: float) -> Stop:
        """Return a copy of this stop carrying the given rank."""
        return replace(self, rank=rank)


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed relation between two node indices.

    Attributes:
        origin: Index of the node the edge starts from
        destination: Index of the node the edge points to
        type: Route or transfer relation
        weight: Cost of the edge; ``MERGED_WEIGHT`` for merged edges
    """

    origin: int
    destination: int
    type: EdgeType = EdgeType.ROUTE
    weight: float = 1.0

    @property
    def is_transfer(self) -> bool:
        """Check if this edge is an interchange between stations."""
        return self.type is EdgeType.TRANSFER

    @property
    def is_merged(self) -> bool:
        """Check if this edge was produced by a node merge."""
        return self.weight == MERGED_WEIGHT

    def reversed(self) -> Edge:
        """Return the same relation pointing the other way."""
        return replace(self, origin=self.destination, destination=self.origin)


@dataclass(frozen=True, slots=True)
class ShortestPathResult:
    """Result of a single-source shortest path computation.

    Attributes:
        source: Index of the departure node
        target: Index of the arrival node
        distances: Tentative distance of every node from the source
        path: Edges from source to target, in travel order
    """

    source: int
    target: int
    distances: tuple[float, ...]
    path: tuple[Edge, ...] = field(default_factory=tuple)

    @property
    def length(self) -> float:
        """Total length of the path, ``inf`` when unreachable."""
        return self.distances[self.target]

    @property
    def is_reachable(self) -> bool:
        """Check if the target could be reached from the source."""
        return self.length != float("inf")

    @property
    def nodes(self) -> tuple[int, ...]:
        """Node indices along the path, source first."""
        if not self.path:
            return (self.source,) if self.source == self.target else ()
        return (self.path[0].origin,) + tuple(edge.destination for edge in self.path)


@dataclass(frozen=True, slots=True)
class RankedStop:
    """A stop with its position in the ranking table."""

    position: int
    node: int
    stop: Stop
    rank: float


@dataclass(frozen=True, slots=True)
class RankResult:
    """Result of rank propagation over a graph.

    Attributes:
        ranks: Raw rank of every node, indexed by node
        stops: Stops of the ranked graph, carrying their rank
        ranked: Stops ordered from most to least important
    """

    ranks: tuple[float, ...]
    stops: tuple[Stop, ...] = field(default_factory=tuple)
    ranked: tuple[RankedStop, ...] = field(default_factory=tuple)

    @property
    def top(self) -> Optional[RankedStop]:
        """Return the most important stop, if any."""
        return self.ranked[0] if self.ranked else None
