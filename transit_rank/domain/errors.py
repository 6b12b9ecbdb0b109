"""Typed domain errors for the transit ranking engine.

All errors inherit from TransitRankError and can optionally wrap a
root cause exception for debugging.

Informational conditions (such as an unreachable target during a
shortest path search) are logged, not raised. Errors are reserved for
programming errors, violated invariants and I/O failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TransitRankError(Exception):
    """Base error for the transit ranking domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class GraphError(TransitRankError):
    """Graph loading or data integrity error.

    Attributes:
        file_path: Path to the graph data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class NodeNotFoundError(TransitRankError):
    """Node index outside of the graph.

    Attributes:
        node: The offending node index
    """

    node: Optional[int] = None


@dataclass
class EdgeNotFoundError(TransitRankError):
    """No edge is stored between two nodes.

    Attributes:
        origin: First node of the queried pair
        destination: Second node of the queried pair
    """

    origin: Optional[int] = None
    destination: Optional[int] = None


@dataclass
class MergeInvariantError(TransitRankError):
    """Transfer edges exist but no transfer cluster could be found.

    This signals a defect in the graph or the merge engine and is never
    recovered from.

    Attributes:
        transfer_edges: Number of transfer edges left in the graph
    """

    transfer_edges: int = 0


@dataclass
class ReportError(TransitRankError):
    """Writing a report failed.

    Attributes:
        output_path: Path where writing was attempted
    """

    output_path: Optional[str] = None


@dataclass
class ConfigurationError(TransitRankError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
