"""Depth-first exploration of a transit graph.

The exploration reports, for every node reached, the tree edge taken
to reach it, the node itself, and, once the node's whole subtree is
done, the tree edge leading back to its parent. Neighbours are taken
in increasing index order.

The traversal keeps its own stack of frames instead of recursing, so
its depth is bounded by memory rather than by the interpreter's
recursion limit.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from ..ports.traverser import TraverserPort
from .transit_graph import Graph

logger = logging.getLogger(__name__)

# node, parent (None for the start node), pending neighbours
_Frame = Tuple[int, Optional[int], Iterator[int]]


def dfs(
    graph: Graph,
    start: int,
    traverser: Optional[TraverserPort] = None,
) -> List[int]:
    """Explore every node reachable from ``start``.

    Args:
        graph: Graph to explore.
        start: Index of the node to start from.
        traverser: Optional observer receiving the traversal events.

    Returns:
        Node indices in the order they were entered.
    """
    graph.check_node(start)

    visited = [False] * graph.num_nodes
    order: List[int] = []

    def enter(node: int, parent: Optional[int]) -> _Frame:
        visited[node] = True
        order.append(node)
        if traverser is not None:
            if parent is not None:
                traverser.visit(graph.create_edge(parent, node))
            traverser.visit_node(node)
        return node, parent, iter(graph.neighbors(node))

    stack: List[_Frame] = [enter(start, None)]

    while stack:
        node, parent, pending = stack[-1]

        child = next((i for i in pending if not visited[i]), None)
        if child is not None:
            stack.append(enter(child, node))
            continue

        stack.pop()
        if traverser is not None and parent is not None:
            traverser.leave(graph.create_edge(node, parent))

    logger.debug("dfs done", extra={"start": start, "visited": len(order)})

    if traverser is not None:
        traverser.summary({"stations_visited": len(traverser.visited_nodes)})

    return order
