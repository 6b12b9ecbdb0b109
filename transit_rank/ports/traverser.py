"""Traverser port - Observer contract for graph algorithms.

Every algorithm reports its progress and results through a traverser.
A traverser is created fresh for each algorithm invocation and is
never shared or reused across calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Edge


class TraverserPort(Protocol):
    """Port for observing traversals and rankings.

    Implementations:
    - adapters/traversal/basic.py (BasicTraverser)

    Attributes:
        visited_nodes: Node indices reported through visit_node, in order
    """

    visited_nodes: List[int]

    def visit_node(self, node: int) -> None:
        """A node was entered."""
        ...

    def visit(self, edge: Edge) -> None:
        """A tree or path edge was discovered or taken."""
        ...

    def leave(self, edge: Edge) -> None:
        """A subtree was fully explored; the edge points back to the parent."""
        ...

    def record_ranks(self, ranks: Sequence[float]) -> None:
        """Final rank vector, indexed by node."""
        ...

    def summary(self, stats: Mapping[str, Any]) -> None:
        """Terminal event of an algorithm.

        Args:
            stats: Open record such as ``{"stations_visited": 4}``,
                ``{"ranks": [...]}`` or ``{"path_length": 12.0}``.
        """
        ...
