from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ..models.cell import ColumnClassification, FormattedCell, Treatment
from ..models.cell_warning import CellWarning
from .numeric import NumericNormalizationError, normalize_numeric
from .rounding import round_half_away, round_to_integer

"""Table transformation: raw CSV cells -> formatted cells.

Each cell goes through two pure steps:

1. classify(position, classification) picks the treatment, with precedence
   currency > numeric > integer > plain
2. format_cell(treatment, raw, decimal_places) normalizes and rounds numeric
   treatments, degrading to plain text when normalization fails

Empty cells are never coerced to zero: they stay plain and raise no warning.
"""

__all__ = [
    "CellOutcome",
    "TransformResult",
    "classify",
    "format_cell",
    "transform",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellOutcome:
    cell: FormattedCell
    failed: bool = False  # numeric treatment requested but text did not normalize


@dataclass(frozen=True)
class TransformResult:
    """Output table (header row first) and the recoverable per-cell failures."""
    rows: list[list[FormattedCell]]
    warnings: list[CellWarning] = field(default_factory=list)

    @property
    def data_rows(self) -> int:
        return max(len(self.rows) - 1, 0)


def classify(position: int, classification: ColumnClassification) -> Treatment:
    if position in classification.currency:
        return Treatment.CURRENCY
    if position in classification.numeric:
        return Treatment.NUMERIC
    if position in classification.integer:
        return Treatment.INTEGER
    return Treatment.PLAIN


def format_cell(treatment: Treatment, raw: str | None, decimal_places: int) -> CellOutcome:
    if treatment is Treatment.PLAIN or raw is None or not raw.strip():
        return CellOutcome(FormattedCell(raw, Treatment.PLAIN))

    try:
        number = normalize_numeric(raw)
    except NumericNormalizationError:
        return CellOutcome(FormattedCell(raw, Treatment.PLAIN), failed=True)

    if treatment is Treatment.INTEGER:
        return CellOutcome(FormattedCell(round_to_integer(number), treatment))
    return CellOutcome(FormattedCell(round_half_away(number, decimal_places), treatment))


def transform(
    header_map: Mapping[str, int],
    rows: Sequence[Sequence[str | None]],
    classification: ColumnClassification,
    decimal_places: int,
) -> TransformResult:
    """Format every cell of the table.

    The first output row mirrors header_map in position order. Data rows keep
    the same column order; cells missing from short rows are treated as empty.
    """
    columns = sorted(header_map.items(), key=lambda item: item[1])
    treatments = [(name, pos, classify(pos, classification)) for name, pos in columns]

    out: list[list[FormattedCell]] = [[FormattedCell(name, Treatment.PLAIN) for name, _ in columns]]
    warnings: list[CellWarning] = []

    for row_number, row in enumerate(rows, start=1):
        formatted: list[FormattedCell] = []
        for name, pos, treatment in treatments:
            raw = row[pos] if pos < len(row) else None
            outcome = format_cell(treatment, raw, decimal_places)
            if outcome.failed:
                warning = CellWarning(
                    row=row_number,
                    column=pos,
                    header=name,
                    treatment=treatment.value,
                    raw_value=raw if raw is not None else "",
                )
                logger.warning(warning.message)
                warnings.append(warning)
            formatted.append(outcome.cell)
        out.append(formatted)

    return TransformResult(rows=out, warnings=warnings)
