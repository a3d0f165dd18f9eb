"""app/sheets/types.py

Raw grid shape shared by the fetcher and the framework parsers.

A Row maps column index -> trimmed cell text. Columns that were never filled
are simply missing keys; callers treat missing and "" the same way.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

Row = dict[int, str]


def to_row(cells: Sequence[Any] | Mapping[int, Any]) -> Row:
    """Build a Row from a list of cells or an index->cell mapping."""
    items = cells.items() if isinstance(cells, Mapping) else enumerate(cells)
    row: Row = {}
    for idx, value in items:
        if value is None:
            continue
        row[int(idx)] = str(value).strip()
    return row


def to_rows(grid: Iterable[Sequence[Any] | Mapping[int, Any]]) -> list[Row]:
    return [to_row(r) for r in grid]
