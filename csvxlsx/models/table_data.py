from __future__ import annotations

from dataclasses import dataclass, field

"""TableData model: the parsed CSV as handed to the transformer."""

__all__ = [
    "TableData",
]


@dataclass(frozen=True)
class TableData:
    """Header map plus raw data rows of one CSV input.

    header_map keeps header order (name -> zero-based position). Each row is a
    list of raw cell texts aligned to header positions; cells missing from a
    short row are None.
    """
    header_map: dict[str, int]
    rows: list[list[str | None]] = field(default_factory=list)

    @property
    def headers(self) -> list[str]:
        return sorted(self.header_map, key=self.header_map.__getitem__)

    @property
    def row_count(self) -> int:
        return len(self.rows)
