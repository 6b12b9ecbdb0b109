"""Iterative rank propagation (PageRank) over a transit graph.

Every node starts with the same rank. On each sweep a node's new rank
is the sum of the ranks of its neighbours, each divided by that
neighbour's number of outgoing edges, blended with a uniform base rank
through the damping factor::

    rank[v] = (1 - d) / N + d * sum(rank[u] / out_degree[u] for u -> v)

Sweeps are synchronous: every read within a sweep sees the ranks of
the previous sweep.

The default damping factor is 1, which removes the random-restart
term. Ranks are then a pure linear propagation and are not normalised
to sum to one; on a symmetric graph the total rank is preserved
instead.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from ..domain.errors import ConfigurationError
from ..domain.models import RankedStop, Stop
from ..ports.report import RankReportWriterPort
from ..ports.traverser import TraverserPort
from .transit_graph import Graph

logger = logging.getLogger(__name__)

DEFAULT_DAMPING = 1.0
DEFAULT_ITERATIONS = 10
DEFAULT_INITIAL_RANK = 1.0

REPORT_HEADER = "sep=;"
REPORT_SEPARATOR = ";"


def page_rank(
    graph: Graph,
    traverser: Optional[TraverserPort] = None,
    writer: Optional[RankReportWriterPort] = None,
    *,
    damping: float = DEFAULT_DAMPING,
    iterations: int = DEFAULT_ITERATIONS,
    initial_rank: float = DEFAULT_INITIAL_RANK,
) -> List[float]:
    """Rank every node of the graph.

    Args:
        graph: Graph to rank.
        traverser: Optional observer receiving ``record_ranks`` and a
            ``ranks`` summary.
        writer: Optional report writer receiving the text report.
        damping: Weight of the propagated rank against the base rank.
        iterations: Number of synchronous sweeps.
        initial_rank: Rank of every node before the first sweep.

    Returns:
        The rank of every node, indexed by node.

    Raises:
        ConfigurationError: If damping or iterations are out of range.
        ReportError: If the writer fails to persist the report.
    """
    if not 0.0 <= damping <= 1.0:
        raise ConfigurationError(
            f"Damping must be between 0 and 1, got {damping}",
            setting_name="damping",
            expected_type="float in [0, 1]",
        )
    if iterations < 0:
        raise ConfigurationError(
            f"Iterations must be non-negative, got {iterations}",
            setting_name="iterations",
            expected_type="int >= 0",
        )

    n = graph.length()
    out_degree = [graph.degree(node) for node in range(n)]
    incoming: List[List[int]] = [[] for _ in range(n)]
    for node in range(n):
        for neighbor in graph.neighbors(node):
            incoming[neighbor].append(node)

    ranks = [initial_rank] * n
    base = (1 - damping) / n if n else 0.0

    for _ in range(iterations):
        previous = ranks
        ranks = [
            base + damping * sum(previous[u] / out_degree[u] for u in incoming[node])
            for node in range(n)
        ]

    if traverser is not None:
        traverser.record_ranks(list(ranks))
        traverser.summary({"ranks": ranks})

    for node, rank in enumerate(ranks):
        logger.info(f"Rank of node {node} ({graph.stops[node].name}) is {rank}")

    if writer is not None:
        path = writer.write(format_rank_report(graph.stops, ranks))
        logger.info("Results saved to file", extra={"path": str(path)})

    return ranks


def format_rank(rank: float) -> str:
    """Render a rank as a plain decimal, without exponent.

    >>> format_rank(1.0)
    '1'
    >>> format_rank(1e-07)
    '0.0000001'
    """
    return format(Decimal(repr(rank)).normalize(), "f")


def format_rank_report(stops: Sequence[Stop], ranks: Sequence[float]) -> str:
    """Render the rank report.

    The report starts with a ``sep=;`` line, followed by one line per
    node in node order: ``index;stop_id;name;routes;rank``.
    """
    lines = [REPORT_HEADER]
    for node, rank in enumerate(ranks):
        stop = stops[node]
        fields = (str(node), stop.stop_id, stop.name, stop.routes_text, format_rank(rank))
        lines.append(REPORT_SEPARATOR.join(fields))
    return "\n".join(lines) + "\n"


def rank_stops(
    stops: Sequence[Stop],
    ranks: Sequence[float],
    precision: int = 5,
) -> List[RankedStop]:
    """Order stops from most to least important.

    Ranks are rounded to ``precision`` decimals; stops with equal
    rounded ranks keep their node order.
    """
    rounded = [round(rank, precision) for rank in ranks]
    order = sorted(range(len(rounded)), key=lambda node: -rounded[node])
    return [
        RankedStop(
            position=position,
            node=node,
            stop=stops[node].with_rank(rounded[node]),
            rank=rounded[node],
        )
        for position, node in enumerate(order, start=1)
    ]
