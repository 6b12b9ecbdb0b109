"""Network analysis service - Main orchestrator.

This service wires the graph repository, the graph algorithms and the
report writer together: it loads the network, optionally collapses
transfer clusters, and runs traversals, shortest paths and rankings
with a fresh traverser for every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..adapters.traversal.basic import BasicTraverser
from ..config import RankConfig, get_config
from ..domain.models import RankResult, ShortestPathResult
from ..graph.bfs import BreadthFirstSearch
from ..graph.dfs import dfs
from ..graph.dijkstra import dijkstra
from ..graph.merge import merge_summary, merge_transfer_nodes
from ..graph.page_rank import page_rank, rank_stops
from ..graph.transit_graph import Graph
from ..ports.graph import GraphRepositoryPort
from ..ports.report import RankReportWriterPort


@dataclass
class NetworkAnalysisService:
    """Main service for analysing a transit network.

    Traversals and shortest paths run on the graph as loaded. Ranking
    runs on the merged graph when ``config.merge_transfers`` is set, so
    that a station split into several platforms counts once.

    Attributes:
        graph_repository: Loads the transit graph
        report_writer: Optional destination of the rank report
        config: Rank propagation settings
    """

    graph_repository: GraphRepositoryPort
    report_writer: Optional[RankReportWriterPort] = None
    config: RankConfig = field(default_factory=lambda: get_config().rank)

    _logger: logging.Logger = field(init=False, repr=False)
    _merged: Optional[Graph] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def graph(self) -> Graph:
        """Return the graph as loaded by the repository."""
        return self.graph_repository.load()

    def merged_graph(self) -> Graph:
        """Return the graph with transfer clusters collapsed.

        The graph as loaded is returned when it has no transfer edge.
        """
        if self._merged is not None:
            return self._merged

        graph = self.graph()
        merged = merge_transfer_nodes(graph)
        self._logger.info("Merge finished", extra=merge_summary(graph, merged))

        self._merged = merged if merged is not None else graph
        return self._merged

    def explore(self, start: int) -> BasicTraverser:
        """Run a depth-first exploration from ``start``."""
        traverser = BasicTraverser()
        dfs(self.graph(), start, traverser)
        return traverser

    def breadth_first(self, start: int) -> BasicTraverser:
        """Run a breadth-first exploration from ``start`` synchronously."""
        traverser = BasicTraverser()
        BreadthFirstSearch(self.graph(), start, traverser).run()
        return traverser

    async def breadth_first_async(self, start: int) -> BasicTraverser:
        """Run a breadth-first exploration, yielding between nodes."""
        traverser = BasicTraverser()
        await BreadthFirstSearch(self.graph(), start, traverser).run_async()
        return traverser

    def shortest_path(self, start: int, end: int) -> ShortestPathResult:
        """Compute the shortest path between two nodes of the loaded graph."""
        self._logger.debug("Solving path", extra={"start": start, "end": end})
        return dijkstra(self.graph(), start, end, BasicTraverser())

    def rank(self) -> RankResult:
        """Rank every station and write the rank report.

        Raises:
            ReportError: If the report writer fails.
        """
        graph = self.merged_graph() if self.config.merge_transfers else self.graph()

        ranks = page_rank(
            graph,
            BasicTraverser(),
            self.report_writer,
            damping=self.config.damping,
            iterations=self.config.iterations,
            initial_rank=self.config.initial_rank,
        )
        ranked = rank_stops(graph.stops, ranks, precision=self.config.precision)

        result = RankResult(
            ranks=tuple(ranks),
            stops=tuple(stop.with_rank(rank) for stop, rank in zip(graph.stops, ranks)),
            ranked=tuple(ranked),
        )

        if result.top is not None:
            self._logger.info(
                "Ranking done",
                extra={"nodes": graph.num_nodes, "top": result.top.stop.stop_id},
            )
        return result
