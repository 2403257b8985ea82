from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime

"""CellWarning model for recoverable per-cell conversion failures.

A cell configured as currency/numeric/integer whose text cannot be normalized
is kept verbatim as plain text. The run continues; the failure is reported as
a CellWarning so callers can log it or persist it as JSON Lines.
"""

__all__ = [
    "CellWarning",
]


@dataclass(frozen=True)
class CellWarning:
    """Structured warning for one cell that failed numeric normalization.

    Attributes:
        row: Data row number (1-based, header excluded)
        column: Zero-based column position
        header: Header label of the column
        treatment: Treatment that was requested (currency/numeric/integer)
        raw_value: Original cell text, kept in the output as plain text
    """
    row: int
    column: int
    header: str
    treatment: str
    raw_value: str

    @property
    def message(self) -> str:
        return f"non-numeric value in {self.treatment} column '{self.header}': {self.raw_value}"

    def to_json_line(self, source: str | None = None) -> str:
        """Serialize to a JSON line with a UTC timestamp and the source file name."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        payload = {
            "timestamp": ts,
            "file": source,
            "row": self.row,
            "column": self.column,
            "header": self.header,
            "treatment": self.treatment,
            "raw_value": self.raw_value,
        }
        return json.dumps(payload, ensure_ascii=False)
