"""Recording traverser.

BasicTraverser keeps every event it receives, in order, so callers
can inspect what an algorithm did once it returns. It implements
TraverserPort and is the traverser used for component discovery when
merging transfer clusters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ...domain.models import Edge


@dataclass
class BasicTraverser:
    """Traverser accumulating the events reported by an algorithm.

    A traverser is single-use: create a fresh one for every call.

    Attributes:
        visited_nodes: Nodes reported through visit_node, in order
        visited_edges: Edges reported through visit, in order
        left_edges: Edges reported through leave, in order
        ranks: Rank vector reported through record_ranks, if any
        summaries: Summary records, in order
        events: Every event as a ``(kind, payload)`` pair, in order
    """

    visited_nodes: List[int] = field(default_factory=list)
    visited_edges: List[Edge] = field(default_factory=list)
    left_edges: List[Edge] = field(default_factory=list)
    ranks: Optional[List[float]] = None
    summaries: List[Dict[str, Any]] = field(default_factory=list)
    events: List[Tuple[str, Any]] = field(default_factory=list, repr=False)

    def visit_node(self, node: int) -> None:
        self.visited_nodes.append(node)
        self.events.append(("visit_node", node))

    def visit(self, edge: Edge) -> None:
        self.visited_edges.append(edge)
        self.events.append(("visit", edge))

    def leave(self, edge: Edge) -> None:
        self.left_edges.append(edge)
        self.events.append(("leave", edge))

    def record_ranks(self, ranks: Sequence[float]) -> None:
        self.ranks = list(ranks)
        self.events.append(("record_ranks", self.ranks))

    def summary(self, stats: Mapping[str, Any]) -> None:
        self.summaries.append(dict(stats))
        self.events.append(("summary", dict(stats)))

    @property
    def last_summary(self) -> Optional[Dict[str, Any]]:
        """Return the most recent summary, if any."""
        return self.summaries[-1] if self.summaries else None
