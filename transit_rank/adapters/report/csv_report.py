"""CSV rank report writer.

Persists the text produced by ``format_rank_report``. The file starts
with a ``sep=;`` line so spreadsheet tools pick up the separator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ...config import ReportConfig, get_config
from ...domain.errors import ReportError


@dataclass
class CsvRankReportWriter:
    """Report writer storing the rank report in a file.

    This adapter implements RankReportWriterPort.

    Attributes:
        output_path: File the report is written to
    """

    output_path: Path = field(default_factory=lambda: get_config().report.rank_path)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.output_path = Path(self.output_path)

    @classmethod
    def from_config(cls, config: ReportConfig) -> CsvRankReportWriter:
        """Create a writer targeting the configured report path."""
        return cls(output_path=config.rank_path)

    def write(self, content: str) -> Path:
        """Write the report, replacing any previous one.

        Raises:
            ReportError: If the file cannot be written.
        """
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ReportError(
                "Failed to write rank report",
                output_path=str(self.output_path),
                cause=e,
            ) from e

        self._logger.info(
            "Report written",
            extra={"path": str(self.output_path), "bytes": len(content)},
        )
        return self.output_path
