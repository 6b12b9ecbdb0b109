"""In-memory representation of a transit network.

A Graph holds ``num_nodes`` stops, addressed by contiguous indices
``[0, num_nodes)``, and a symmetric relation storing at most one Edge
per unordered pair of nodes. Edges are built with an origin and a
destination, but queries answer the same regardless of order.

Graphs are never mutated after construction. Structural changes such
as node merges build a brand-new Graph.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..domain.errors import EdgeNotFoundError, GraphError, NodeNotFoundError
from ..domain.models import Edge, EdgeType, Stop

logger = logging.getLogger(__name__)

Pair = Tuple[int, int]


def _pair(u: int, v: int) -> Pair:
    return (u, v) if u < v else (v, u)


class Graph:
    """Transit graph of stops and typed, weighted edges.

    Args:
        stops: Stops in node-index order.
        edges: Edges between node indices. A later edge between the
            same pair of nodes replaces an earlier one.

    Raises:
        NodeNotFoundError: If an edge references a node outside the graph.
        GraphError: If an edge connects a node to itself.
    """

    __slots__ = ("_stops", "_links", "_neighbors")

    def __init__(self, stops: Sequence[Stop], edges: Iterable[Edge] = ()) -> None:
        self._stops: Tuple[Stop, ...] = tuple(stops)
        self._links: Dict[Pair, Edge] = {}

        for edge in edges:
            self.check_node(edge.origin)
            self.check_node(edge.destination)
            if edge.origin == edge.destination:
                raise GraphError(f"Stop {edge.origin} cannot connect to itself")

            key = _pair(edge.origin, edge.destination)
            if key in self._links:
                logger.debug("Replacing edge", extra={"pair": key})
            self._links[key] = edge

        neighbors: List[List[int]] = [[] for _ in self._stops]
        for u, v in self._links:
            neighbors[u].append(v)
            neighbors[v].append(u)
        self._neighbors: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(sorted(adjacent)) for adjacent in neighbors
        )

    def __len__(self) -> int:
        return len(self._stops)

    def __repr__(self) -> str:
        return f"Graph(num_nodes={self.num_nodes}, num_edges={len(self._links)})"

    @property
    def num_nodes(self) -> int:
        """Number of nodes in the graph."""
        return len(self._stops)

    def length(self) -> int:
        """Number of nodes in the graph."""
        return len(self._stops)

    @property
    def stops(self) -> Tuple[Stop, ...]:
        """Stops indexed by node."""
        return self._stops

    @property
    def num_edges(self) -> int:
        """Number of stored relations, each unordered pair counted once."""
        return len(self._links)

    def edge_exists(self, u: int, v: int) -> bool:
        """Check whether an edge connects ``u`` and ``v`` in either direction."""
        return _pair(u, v) in self._links

    def get_weight(self, u: int, v: int) -> float:
        """Return the weight stored between ``u`` and ``v``.

        Raises:
            EdgeNotFoundError: If the nodes are not connected.
        """
        return self._lookup(u, v).weight

    def get_type(self, u: int, v: int) -> EdgeType:
        """Return the type of the edge stored between ``u`` and ``v``."""
        return self._lookup(u, v).type

    def create_edge(self, u: int, v: int) -> Edge:
        """Materialize the stored relation as an edge from ``u`` to ``v``.

        Raises:
            EdgeNotFoundError: If the nodes are not connected.
        """
        stored = self._lookup(u, v)
        return Edge(origin=u, destination=v, type=stored.type, weight=stored.weight)

    def neighbors(self, u: int) -> Tuple[int, ...]:
        """Indices of the nodes connected to ``u``, in increasing order."""
        self.check_node(u)
        return self._neighbors[u]

    def degree(self, u: int) -> int:
        """Number of nodes connected to ``u``."""
        return len(self.neighbors(u))

    def edges(self) -> Iterator[Edge]:
        """Yield every stored relation once, lower index as origin."""
        for u, v in sorted(self._links):
            yield self.create_edge(u, v)

    def get_transfer_edges(self) -> List[Edge]:
        """Return every transfer edge, each pair reported once."""
        return [edge for edge in self.edges() if edge.is_transfer]

    def get_edge(self, u: int, v: int) -> Optional[Edge]:
        """Return the relation between ``u`` and ``v``, or None."""
        if not self.edge_exists(u, v):
            return None
        return self.create_edge(u, v)

    def subgraph(self, edges: Iterable[Edge]) -> Graph:
        """Build a graph over the same stops restricted to ``edges``."""
        return Graph(self._stops, edges)

    def _lookup(self, u: int, v: int) -> Edge:
        try:
            return self._links[_pair(u, v)]
        except KeyError:
            raise EdgeNotFoundError(
                f"No edge between {u} and {v}",
                origin=u,
                destination=v,
            ) from None

    def check_node(self, node: int) -> None:
        """Raise NodeNotFoundError unless ``node`` indexes a stop of this graph."""
        if not 0 <= node < len(self._stops):
            raise NodeNotFoundError(
                f"Node {node} is not in a graph of {len(self._stops)} stops",
                node=node,
            )
