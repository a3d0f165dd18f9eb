"""
extractors/extended.py
- Two layouts share EXTENDED_5_LEVEL:
  * values:  [value, value definition, competency, definition, 5 x level]
  * matrix:  [function, objective, core, sub, 5 x level]
- In the values layout the value is the only grouping tier, so it is both
  the core competency name and its function area.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from app.constants.statuses import SheetFormatType
from app.frameworks.columns import (
    VALUES_COLUMNS,
    VALUES_FIRST_LEVEL_COLUMN,
    cell_at,
    resolve_columns,
    resolve_level_columns,
)
from app.frameworks.extractors.base import build_levels, data_rows, ensure_format
from app.frameworks.extractors.standard import extract_matrix
from app.frameworks.grouping import GroupingState, RowStep, fold_rows
from app.frameworks.header import HeaderMatch
from app.frameworks.levels import LevelScale, get_level_scale
from app.frameworks.rows import clean_cell
from app.schemas.framework_schema import ParsedCoreCompetency, ParsedSubCompetency
from app.sheets.types import Row

logger = logging.getLogger("app.frameworks.extended")

VALUES_CATEGORY = "Company Values"

_VALUE_RE = re.compile(r"\bvalues?\b")


def is_values_layout(header: HeaderMatch | None) -> bool:
    if header is None:
        return False
    return any(_VALUE_RE.search(clean_cell(v).lower()) for v in header.row.values())


def values_step(cols: dict[str, int | None], level_cols: Sequence[int], scale: LevelScale) -> RowStep:
    def step(state: GroupingState, row: Row) -> None:
        value = cell_at(row, cols["value"])
        if value:
            state.carry_label(value)
            state.open_core(
                value,
                description=cell_at(row, cols["value_definition"]) or None,
                function_area=value,
                category=VALUES_CATEGORY,
            )

        competency = cell_at(row, cols["competency"])
        if not competency:
            return
        state.add_sub(
            ParsedSubCompetency(
                name=competency,
                description=cell_at(row, cols["definition"]) or None,
                levels=build_levels(row, level_cols, scale),
            )
        )

    return step


def extract_extended_5_level(
    rows: Sequence[Row],
    format_type: SheetFormatType,
    header: HeaderMatch | None = None,
) -> list[ParsedCoreCompetency]:
    ensure_format(SheetFormatType.EXTENDED_5_LEVEL, format_type)
    scale = get_level_scale(SheetFormatType.EXTENDED_5_LEVEL)

    if not is_values_layout(header):
        return extract_matrix(rows, header, scale)

    header_row = header.row if header else None
    cols, claimed = resolve_columns(header_row, VALUES_COLUMNS)
    level_cols = resolve_level_columns(header_row, scale, VALUES_FIRST_LEVEL_COLUMN, claimed)
    logger.debug("columns.resolved", extra={"layout": "values", "columns": cols, "level_columns": level_cols})

    return fold_rows(data_rows(rows, header), values_step(cols, level_cols, scale))
