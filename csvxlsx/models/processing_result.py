from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for batch CSV -> XLSX conversion.

Aggregates per-file outcomes into the metrics printed on the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (internal helper for ProcessingResult)."""
    file_name: str
    status: str  # success/failed
    data_rows: int
    warnings: int
    elapsed_seconds: float
    output_name: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary output for a conversion run."""
    success_files: int
    failed_files: int
    total_rows: int  # Data rows written across successful files
    total_warnings: int  # Cells degraded to plain text
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
