"""Shortest-path computation using Dijkstra's algorithm.

This is the array-based O(V^2) variant: on every iteration the undone
node with the smallest tentative distance is selected by a linear scan.
Transit graphs analysed here are small and dense enough that a heap
brings little.

An unreachable target is not an error. The distance to it stays at
``math.inf``, which callers are expected to check.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from ..domain.errors import GraphError
from ..domain.models import Edge, ShortestPathResult
from ..ports.traverser import TraverserPort
from .transit_graph import Graph

logger = logging.getLogger(__name__)


def dijkstra(
    graph: Graph,
    start: int,
    end: int,
    traverser: Optional[TraverserPort] = None,
) -> ShortestPathResult:
    """Compute the shortest path between two nodes.

    Parameters
    ----------
    graph:
        Transit graph with non-negative edge weights.
    start:
        Index of the departure node.
    end:
        Index of the arrival node.
    traverser:
        Optional observer. Every edge of the path is reported through
        ``visit`` in travel order, followed by a ``path_length`` summary.

    Returns
    -------
    ShortestPathResult
        Distances from ``start`` to every node and the edges of the path
        to ``end``. The path is empty when ``end`` is unreachable.

    Raises
    ------
    NodeNotFoundError
        If ``start`` or ``end`` is not a node of the graph.
    GraphError
        If a negative weight, such as the weight of a merged edge, is met.
    """
    graph.check_node(start)
    graph.check_node(end)

    n = graph.num_nodes
    distance: List[float] = [math.inf] * n
    done: List[bool] = [False] * n
    predecessor: List[Optional[int]] = [None] * n
    distance[start] = 0.0

    for _ in range(n):
        current: Optional[int] = None
        for i in range(n):
            if not done[i] and distance[i] < math.inf:
                if current is None or distance[i] < distance[current]:
                    current = i
        if current is None:
            break
        done[current] = True

        for i in graph.neighbors(current):
            weight = graph.get_weight(current, i)
            if weight < 0:
                raise GraphError(
                    f"Negative weight {weight} between {current} and {i}"
                )
            if distance[i] > distance[current] + weight:
                distance[i] = distance[current] + weight
                predecessor[i] = current

    if distance[end] == math.inf:
        logger.info(f"No path between {start} and {end}.")
    else:
        logger.info(f"Path length between {start} and {end} is {distance[end]}.")

    path: List[Edge] = []
    node, parent = end, predecessor[end]
    while parent is not None:
        path.append(graph.create_edge(parent, node))
        node, parent = parent, predecessor[parent]
    path.reverse()

    if traverser is not None:
        for edge in path:
            traverser.visit(edge)
        traverser.summary({"path_length": distance[end]})

    return ShortestPathResult(
        source=start,
        target=end,
        distances=tuple(distance),
        path=tuple(path),
    )
