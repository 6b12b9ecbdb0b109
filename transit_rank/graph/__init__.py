"""Graph engine for the transit network.

This subpackage holds the in-memory graph of stops and the algorithms
run on top of it: depth-first and breadth-first traversal, Dijkstra's
shortest path, rank propagation and the merging of transfer clusters.
"""

from .bfs import BreadthFirstSearch, bfs, bfs_async
from .dfs import dfs
from .dijkstra import dijkstra
from .merge import find_transfer_clusters, merge_pair, merge_transfer_nodes
from .page_rank import format_rank_report, page_rank, rank_stops
from .transit_graph import Graph

__all__ = [
    "Graph",
    "dfs",
    "bfs",
    "bfs_async",
    "BreadthFirstSearch",
    "dijkstra",
    "page_rank",
    "format_rank_report",
    "rank_stops",
    "merge_transfer_nodes",
    "merge_pair",
    "find_transfer_clusters",
]
