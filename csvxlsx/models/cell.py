from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Cell-level domain models for CSV -> XLSX conversion.

A conversion run turns every raw CSV cell into a FormattedCell: the value the
workbook writer stores plus the treatment that selects its display format.
"""

__all__ = [
    "Treatment",
    "FormattedCell",
    "ColumnClassification",
]


class Treatment(Enum):
    """Formatting category assigned to a cell.

    - PLAIN: text written verbatim, no number format
    - CURRENCY: accounting format with currency glyph
    - NUMERIC: grouped number with fixed decimals
    - INTEGER: whole number, no grouping
    """
    PLAIN = "plain"
    CURRENCY = "currency"
    NUMERIC = "numeric"
    INTEGER = "integer"

    @property
    def is_numeric(self) -> bool:
        return self is not Treatment.PLAIN


@dataclass(frozen=True)
class FormattedCell:
    """Unit consumed by the workbook writer."""
    value: str | float | int | None
    treatment: Treatment = Treatment.PLAIN


@dataclass(frozen=True)
class ColumnClassification:
    """Zero-based column positions per treatment for one conversion run.

    A position may appear in more than one set; the transformer resolves the
    overlap with currency > numeric > integer precedence.
    """
    currency: frozenset[int] = frozenset()
    numeric: frozenset[int] = frozenset()
    integer: frozenset[int] = frozenset()

    def is_empty(self) -> bool:
        return not (self.currency or self.numeric or self.integer)
