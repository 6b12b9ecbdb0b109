"""Collapsing of transfer clusters into single logical stations.

Transit stations are often split into several nodes (one per platform
or per line) linked to each other only by transfer edges. Ranking is
more meaningful when such a cluster counts as one station, so the merge
engine repeatedly collapses two transfer-linked nodes into one until no
transfer edge is left.

Each pass discovers the clusters from scratch, since node indices
shift after every collapse:

1. keep only the transfer edges of the graph;
2. run a depth-first search from every node not seen yet, each run
   yielding one cluster;
3. collapse the first two nodes of the first cluster holding more than
   one node.

A collapse removes both nodes, appends the merged stop as the last
node and gives it the union of their relations. Relations of the
merged node carry ``MERGED_WEIGHT`` since weights cannot be combined
meaningfully. Every other relation is carried over unchanged, relabelled
to the new indices. The input graph is never modified.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from ..adapters.traversal.basic import BasicTraverser
from ..domain.errors import GraphError, MergeInvariantError
from ..domain.models import MERGED_WEIGHT, Edge, EdgeType
from .dfs import dfs
from .transit_graph import Graph

logger = logging.getLogger(__name__)


def merge_transfer_nodes(graph: Graph) -> Optional[Graph]:
    """Collapse transfer clusters until no transfer edge remains.

    Args:
        graph: Graph to simplify. It is left untouched.

    Returns:
        The merged graph, or None when the graph has no transfer edge
        and there is nothing to merge.

    Raises:
        MergeInvariantError: If transfer edges remain but no cluster of
            two or more nodes can be found.
    """
    transfer_edges = graph.get_transfer_edges()
    if not transfer_edges:
        logger.info("No transfer edges to merge", extra={"nodes": graph.num_nodes})
        return None

    merges = 0
    while transfer_edges:
        clusters = [c for c in find_transfer_clusters(graph, transfer_edges) if len(c) > 1]
        if not clusters:
            raise MergeInvariantError(
                f"{len(transfer_edges)} transfer edges but no transfer cluster",
                transfer_edges=len(transfer_edges),
            )

        a, b = clusters[0][0], clusters[0][1]
        logger.debug(
            "Merging nodes",
            extra={"a": a, "b": b, "clusters": len(clusters)},
        )
        graph = merge_pair(graph, a, b)
        merges += 1
        transfer_edges = graph.get_transfer_edges()

    logger.info("Transfer nodes merged", extra={"merges": merges, "nodes": graph.num_nodes})
    return graph


def find_transfer_clusters(
    graph: Graph,
    transfer_edges: Optional[Sequence[Edge]] = None,
) -> List[List[int]]:
    """Partition the nodes into clusters linked by transfer edges.

    Every node belongs to exactly one cluster; nodes without a transfer
    edge form clusters of their own. Clusters list their nodes in
    depth-first visit order and are ordered by their first node.
    """
    if transfer_edges is None:
        transfer_edges = graph.get_transfer_edges()
    transfer_graph = graph.subgraph(transfer_edges)

    seen = [False] * transfer_graph.num_nodes
    clusters: List[List[int]] = []

    for node in range(transfer_graph.num_nodes):
        if seen[node]:
            continue
        traverser = BasicTraverser()
        dfs(transfer_graph, node, traverser)
        clusters.append(traverser.visited_nodes)
        for visited in traverser.visited_nodes:
            seen[visited] = True

    return clusters


def merge_edges(a: Optional[Edge], b: Optional[Edge]) -> Optional[EdgeType]:
    """Type of the union of two relations, or None if both are absent."""
    if a is None and b is None:
        return None
    if (a is not None and a.is_transfer) or (b is not None and b.is_transfer):
        return EdgeType.TRANSFER
    return EdgeType.ROUTE


def merge_pair(graph: Graph, a: int, b: int) -> Graph:
    """Collapse nodes ``a`` and ``b`` into one.

    The returned graph has one node less. Nodes other than ``a`` and
    ``b`` keep their relative order and the merged node comes last.

    Raises:
        GraphError: If ``a`` and ``b`` are the same node.
    """
    graph.check_node(a)
    graph.check_node(b)
    if a == b:
        raise GraphError(f"Cannot merge node {a} with itself")
    lo, hi = (a, b) if a < b else (b, a)

    def relabel(node: int) -> int:
        return node - (node > lo) - (node > hi)

    stops = [stop for node, stop in enumerate(graph.stops) if node not in (lo, hi)]
    stops.append(graph.stops[lo].merge_with(graph.stops[hi]))
    union_index = len(stops) - 1

    edges: List[Edge] = []
    for node in range(graph.num_nodes):
        if node in (lo, hi):
            continue

        for neighbor in graph.neighbors(node):
            if neighbor > node and neighbor not in (lo, hi):
                stored = graph.create_edge(node, neighbor)
                edges.append(
                    Edge(
                        origin=relabel(node),
                        destination=relabel(neighbor),
                        type=stored.type,
                        weight=stored.weight,
                    )
                )

        union_type = merge_edges(graph.get_edge(lo, node), graph.get_edge(hi, node))
        if union_type is not None:
            edges.append(
                Edge(
                    origin=union_index,
                    destination=relabel(node),
                    type=union_type,
                    weight=MERGED_WEIGHT,
                )
            )

    return Graph(stops, edges)


def merge_summary(before: Graph, after: Optional[Graph]) -> Dict[str, int]:
    """Describe the effect of a merge for logging and reporting."""
    if after is None:
        return {"nodes_before": before.num_nodes, "nodes_after": before.num_nodes, "merged": 0}
    return {
        "nodes_before": before.num_nodes,
        "nodes_after": after.num_nodes,
        "merged": before.num_nodes - after.num_nodes,
    }
