from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.cell_warning import CellWarning

"""Cell warning log buffering.

Warnings from one run are buffered per source file and flushed together as
JSON Lines into `logs/warnings-YYYYMMDD-HHMMSS.log` (UTC). The file is only
created when there is something to write.
"""

__all__ = [
    "CellWarning",
    "WarningLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class WarningLogBuffer:
    """In-memory buffer of (source file, CellWarning). Flush writes JSON Lines.

    No thread safety: a run converts files serially.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[tuple[str | None, CellWarning]] = []
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"warnings-{stamp}.log"
        return self._file_path

    def append(self, warning: CellWarning, source: str | None = None) -> None:
        self._records.append((source, warning))

    def extend(self, warnings: list[CellWarning], source: str | None = None) -> None:
        for w in warnings:
            self.append(w, source)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered warnings to the log file; None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for source, w in self._records:
                f.write(w.to_json_line(source) + "\n")
        self._records.clear()
        return fp
