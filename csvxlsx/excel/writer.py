from __future__ import annotations

from collections.abc import Sequence
from io import BytesIO
from pathlib import Path
from typing import IO

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, NamedStyle
from openpyxl.utils import get_column_letter

from ..models.cell import FormattedCell, Treatment
from ..services.format_spec import FormatTemplates

"""XLSX workbook writer.

Writes the transformer output into a single worksheet:
- one named style per numeric treatment actually present, carrying its number
  format, right alignment and no wrapping
- plain cells are written as text without style (never as formulas)
- column widths estimated from the rendered content of each column
"""

__all__ = [
    "write_workbook",
    "workbook_bytes",
]

DEFAULT_SHEET_NAME = "Datos"

MIN_COLUMN_WIDTH = 6
MAX_COLUMN_WIDTH = 80

_STYLE_NAMES = {
    Treatment.CURRENCY: "csvxlsx currency",
    Treatment.NUMERIC: "csvxlsx numeric",
    Treatment.INTEGER: "csvxlsx integer",
}


def _named_style(treatment: Treatment, templates: FormatTemplates) -> NamedStyle:
    return NamedStyle(
        name=_STYLE_NAMES[treatment],
        number_format=templates.for_treatment(treatment),
        alignment=Alignment(horizontal="right", wrap_text=False),
    )


def _estimate_width(cell: FormattedCell, decimal_places: int) -> int:
    """Best-effort display width of a cell in characters."""
    value = cell.value
    if value is None:
        return 0
    if cell.treatment is Treatment.INTEGER:
        return len(str(value))
    if cell.treatment is Treatment.NUMERIC:
        return len(f"{value:,.{decimal_places}f}")
    if cell.treatment is Treatment.CURRENCY:
        # "$" plus padding, parentheses for negatives
        return len(f"{abs(value):,.{decimal_places}f}") + 4
    return max((len(line) for line in str(value).splitlines()), default=0)


def _column_widths(rows: Sequence[Sequence[FormattedCell]], decimal_places: int) -> list[int]:
    widths: list[int] = []
    for row in rows:
        for idx, cell in enumerate(row):
            if idx >= len(widths):
                widths.append(0)
            widths[idx] = max(widths[idx], _estimate_width(cell, decimal_places))
    return [min(max(w + 2, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH) for w in widths]


def write_workbook(
    rows: Sequence[Sequence[FormattedCell]],
    templates: FormatTemplates,
    destination: Path | str | IO[bytes],
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> None:
    """Write formatted rows (header row first) to an .xlsx path or binary stream."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    registered: set[Treatment] = set()
    for r_idx, row in enumerate(rows, start=1):
        for c_idx, cell in enumerate(row, start=1):
            target = ws.cell(row=r_idx, column=c_idx)
            if not cell.treatment.is_numeric:
                if cell.value is None:
                    continue
                text = ILLEGAL_CHARACTERS_RE.sub("", str(cell.value))
                target.value = text
                # Text starting with "=" must stay text
                target.data_type = "s"
                continue

            if cell.treatment not in registered:
                wb.add_named_style(_named_style(cell.treatment, templates))
                registered.add(cell.treatment)
            target.value = cell.value
            target.style = _STYLE_NAMES[cell.treatment]

    for idx, width in enumerate(_column_widths(rows, templates.decimal_places), start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width

    wb.save(destination)


def workbook_bytes(
    rows: Sequence[Sequence[FormattedCell]],
    templates: FormatTemplates,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> bytes:
    buffer = BytesIO()
    write_workbook(rows, templates, buffer, sheet_name=sheet_name)
    return buffer.getvalue()
