"""Report adapters - Implementations of RankReportWriterPort.

Available implementations:
- CsvRankReportWriter: Writes the rank report to a CSV file
"""

from .csv_report import CsvRankReportWriter

__all__ = ["CsvRankReportWriter"]
