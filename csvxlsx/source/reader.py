from __future__ import annotations

import csv
from pathlib import Path
from typing import IO, Any

import pandas as pd

from ..config.loader import ConfigError
from ..models.table_data import TableData

"""CSV table reader.

The first record is the header row; every following record is a data row.
All cells are read as raw text (no dtype inference, "NA"/"null" stay text) so
that numeric interpretation happens only in the formatting pipeline.
"""

__all__ = [
    "TableSourceError",
    "MissingHeaderError",
    "EmptyTableError",
    "DuplicateHeaderError",
    "TableReadError",
    "parse_separator",
    "read_table",
]

# Characters that cannot delimit fields
_FORBIDDEN_SEPARATORS = {'"', "\r", "\n"}


class TableSourceError(Exception):
    """Base class for fatal input errors."""


class MissingHeaderError(TableSourceError):
    """Raised when the input has no header row at all."""


class EmptyTableError(TableSourceError):
    """Raised when the input has a header row but zero data rows."""


class DuplicateHeaderError(TableSourceError):
    """Raised when two header cells carry the same name."""


class TableReadError(TableSourceError):
    """Raised when the input cannot be decoded or tokenized."""


def parse_separator(value: str | None) -> str:
    """Return the single separator character; the escape "\\t" means TAB."""
    if value is None or value == "":
        raise ConfigError("csv_separator must not be empty")
    if value == "\\t":
        return "\t"
    if len(value) != 1:
        raise ConfigError(f"csv_separator must be a single character, got {value!r}")
    if value in _FORBIDDEN_SEPARATORS:
        raise ConfigError(f"csv_separator cannot be {value!r}")
    return value


def _read_frame(source: Any, separator: str, encoding: str, **kwargs: Any) -> pd.DataFrame:
    # dtype=object keeps cells as the parsed strings and padding as missing
    # values; the python engine is required for a callable on_bad_lines
    return pd.read_csv(
        source,
        sep=separator,
        header=None,
        dtype=object,
        keep_default_na=False,
        encoding=encoding,
        skip_blank_lines=True,
        engine="python",
        **kwargs,
    )


def read_table(
    source: Path | str | IO[str] | IO[bytes],
    separator: str = ";",
    encoding: str = "utf-8-sig",
) -> TableData:
    """Read a delimited text table.

    Parameters
    ----------
    source: CSV path or open file object
    separator: single field delimiter character
    encoding: text encoding (utf-8-sig drops a leading BOM)

    Raises
    ------
    MissingHeaderError: no records at all
    EmptyTableError: header row without data rows
    DuplicateHeaderError: repeated header name
    TableReadError: decoding or tokenizing failure

    Fields past the header width (e.g. a trailing separator) are ignored.
    """
    try:
        width = _read_frame(source, separator, encoding, nrows=1, on_bad_lines="skip").shape[1]
        if hasattr(source, "seek"):
            source.seek(0)
        df = _read_frame(source, separator, encoding, on_bad_lines=lambda fields: fields[:width])
    except pd.errors.EmptyDataError as e:
        raise MissingHeaderError("csv has no header row") from e
    except (pd.errors.ParserError, csv.Error, UnicodeDecodeError) as e:
        raise TableReadError(f"cannot parse csv: {e}") from e

    if df.shape[0] < 1:
        raise MissingHeaderError("csv has no header row")

    headers = ["" if pd.isna(c) else str(c) for c in df.iloc[0].tolist()]
    seen: set[str] = set()
    duplicates: set[str] = set()
    for h in headers:
        if h in seen:
            duplicates.add(h)
        seen.add(h)
    if duplicates:
        raise DuplicateHeaderError(f"duplicate header names: {sorted(duplicates)}")
    header_map = {name: pos for pos, name in enumerate(headers)}

    data_part = df.iloc[1:]
    if data_part.shape[0] == 0:
        raise EmptyTableError("empty table: csv has a header but no data rows")

    rows: list[list[str | None]] = []
    for raw in data_part.itertuples(index=False, name=None):
        # Short rows are padded by pandas with NaN
        rows.append([None if pd.isna(v) else str(v) for v in raw])

    return TableData(header_map=header_map, rows=rows)
