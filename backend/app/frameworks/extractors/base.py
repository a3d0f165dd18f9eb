"""
extractors/base.py
- Purpose: Helpers shared by the per-layout extractors.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from app.constants.statuses import SheetFormatType
from app.frameworks.errors import EmptySheetError, ExtractionMismatchError
from app.frameworks.header import HeaderMatch
from app.frameworks.levels import LevelScale
from app.frameworks.rows import clean_cell, is_empty_row
from app.schemas.framework_schema import ParsedCoreCompetency, ParsedLevel
from app.sheets.types import Row


class Extractor(Protocol):
    def __call__(
        self,
        rows: Sequence[Row],
        format_type: SheetFormatType,
        header: HeaderMatch | None = None,
    ) -> list[ParsedCoreCompetency]: ...


def ensure_format(expected: SheetFormatType, actual: SheetFormatType) -> None:
    if SheetFormatType(actual) != expected:
        raise ExtractionMismatchError(expected, actual)


def data_rows(rows: Sequence[Row], header: HeaderMatch | None) -> list[Row]:
    """Rows after the header (all rows when there is none). Fails if nothing is left."""
    start = header.index + 1 if header else 0
    body = list(rows[start:])
    if not body or all(is_empty_row(r) for r in body):
        raise EmptySheetError("Sheet has no data rows")
    return body


def build_levels(row: Row, level_cols: Sequence[int], scale: LevelScale) -> list[ParsedLevel]:
    """Only levels with a non-empty description are kept."""
    levels: list[ParsedLevel] = []
    for position, col in enumerate(level_cols):
        description = clean_cell(row.get(col))
        if not description:
            continue
        levels.append(
            ParsedLevel(
                level=scale.number(position),
                name=scale.names[position],
                description=description,
            )
        )
    return levels
