from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .cell_warning import CellWarning

"""ConversionOutcome domain model and FileStatus enum.

The ConversionOutcome represents the processing context for a single CSV
file, tracking its status from pending to success/failed. A failed outcome
never has an output workbook.
"""

__all__ = [
    "FileStatus",
    "ConversionOutcome",
]


class FileStatus(Enum):
    """Status enum for one CSV file.

    State transitions: pending → processing → (success | failed)
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionOutcome:
    """Result of converting one CSV file into one workbook."""
    source: Path
    output: Path | None                  # None when the conversion failed
    status: FileStatus = FileStatus.PENDING
    data_rows: int = 0                   # Data rows written (header excluded)
    warnings: list[CellWarning] = field(default_factory=list)
    dropped_tokens: list[str] = field(default_factory=list)  # Column spec tokens that matched nothing
    start_time: datetime | None = None
    end_time: datetime | None = None
    error: str | None = None             # Failure reason summary
    mime_type: str | None = None         # Content type of the output workbook

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
