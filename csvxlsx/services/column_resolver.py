from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

"""Column specification resolution.

A column spec is a comma-separated list of tokens. Each token is either a
spreadsheet column letter sequence (A, B, ..., Z, AA, ...) or a header name:

- a letters-only token that decodes to a column inside the table is
  positional, even when a header carries the same name ("A,B" never looks up
  headers called "A" or "B")
- a letters-only token that decodes past the last column is looked up by
  exact header name instead ("Total", "Qty")
- other tokens are looked up by exact header name
- tokens matching nothing are dropped and reported in ColumnResolution.dropped
"""

__all__ = [
    "ColumnResolution",
    "column_letter_to_index",
    "resolve_columns",
    "resolve",
]

_LETTERS_RE = re.compile(r"[A-Za-z]+")


@dataclass(frozen=True)
class ColumnResolution:
    positions: frozenset[int] = frozenset()
    dropped: list[str] = field(default_factory=list)


def column_letter_to_index(letters: str) -> int:
    """Convert a column letter sequence to a zero-based position (A=0, AA=26).

    Raises:
        ValueError: if letters is empty or contains anything but ASCII letters
    """
    if not _LETTERS_RE.fullmatch(letters):
        raise ValueError(f"not a column letter sequence: {letters!r}")
    index = 0
    for c in letters.upper():
        index = index * 26 + (ord(c) - ord("A") + 1)
    return index - 1


def resolve_columns(spec: str | None, header_map: Mapping[str, int]) -> ColumnResolution:
    if spec is None or not spec.strip():
        return ColumnResolution()

    width = max(header_map.values(), default=-1) + 1
    positions: set[int] = set()
    dropped: list[str] = []
    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue
        if _LETTERS_RE.fullmatch(token):
            index = column_letter_to_index(token)
            if index < width:
                positions.add(index)
                continue
        if token in header_map:
            positions.add(header_map[token])
        else:
            dropped.append(token)
    return ColumnResolution(positions=frozenset(positions), dropped=dropped)


def resolve(spec: str | None, header_map: Mapping[str, int]) -> frozenset[int]:
    """Resolve a column spec to positions only, discarding dropped tokens."""
    return resolve_columns(spec, header_map).positions
