"""
header.py
- Purpose: Locate the column-header row near the top of a grid.
- Tolerates leading blank rows and sheet titles; never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from app.frameworks.rows import is_empty_row, is_header_row
from app.sheets.types import Row

HEADER_SCAN_ROWS = 10


@dataclass(frozen=True)
class HeaderMatch:
    row: Row
    index: int


def find_header_row(rows: Sequence[Row], max_scan: int = HEADER_SCAN_ROWS) -> HeaderMatch | None:
    for idx, row in enumerate(rows[:max_scan]):
        if is_empty_row(row):
            continue
        if is_header_row(row):
            return HeaderMatch(row=row, index=idx)
    return None


def first_data_row(rows: Sequence[Row], start: int = 0) -> tuple[int, Row] | None:
    for idx in range(start, len(rows)):
        if not is_empty_row(rows[idx]):
            return idx, rows[idx]
    return None
