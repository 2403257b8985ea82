from __future__ import annotations

import re

"""Output file naming for converted workbooks."""

__all__ = [
    "XLSX_EXTENSION",
    "XLSX_MIME_TYPE",
    "xlsx_filename",
]

XLSX_EXTENSION = ".xlsx"
XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_LAST_EXTENSION_RE = re.compile(r"\.[^.]+$")


def xlsx_filename(name: str) -> str:
    """Return name with its last extension replaced by .xlsx.

    Names already ending in .xlsx (any case) are returned unchanged:
    "sales.csv" -> "sales.xlsx", "archive.2024.txt" -> "archive.2024.xlsx",
    "data" -> "data.xlsx".
    """
    if name.lower().endswith(XLSX_EXTENSION):
        return name
    return _LAST_EXTENSION_RE.sub("", name) + XLSX_EXTENSION
