"""Report port - Abstraction over where rank reports are persisted."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class RankReportWriterPort(Protocol):
    """Port for persisting the rank report.

    Implementation: adapters/report/csv_report.py

    Writing is fire-and-forget for the caller: failures are fatal and
    surfaced as ReportError, never retried.
    """

    def write(self, content: str) -> Path:
        """Persist the report text.

        Args:
            content: The complete report, already formatted.

        Returns:
            The location the report was written to.
        """
        ...
