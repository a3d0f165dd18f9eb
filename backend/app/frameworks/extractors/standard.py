"""
extractors/standard.py
- Layout: [function, function objective, core competency, sub competency,
  basic, intermediate, proficient, advanced]
- Function and core competency carry forward; the objective becomes the
  core competency description.
"""

from __future__ import annotations

import logging
from typing import Sequence

from app.constants.statuses import SheetFormatType
from app.frameworks.columns import (
    MATRIX_COLUMNS,
    MATRIX_FIRST_LEVEL_COLUMN,
    cell_at,
    resolve_columns,
    resolve_level_columns,
)
from app.frameworks.extractors.base import build_levels, data_rows, ensure_format
from app.frameworks.grouping import GroupingState, RowStep, fold_rows
from app.frameworks.header import HeaderMatch
from app.frameworks.levels import LevelScale, get_level_scale
from app.schemas.framework_schema import ParsedCoreCompetency, ParsedSubCompetency
from app.sheets.types import Row

logger = logging.getLogger("app.frameworks.standard")


def matrix_step(cols: dict[str, int | None], level_cols: Sequence[int], scale: LevelScale) -> RowStep:
    """Row step for function/objective/core/sub matrices (4- or 5-level)."""

    def step(state: GroupingState, row: Row) -> None:
        state.carry_label(cell_at(row, cols["function"]))

        core_name = cell_at(row, cols["core"])
        if core_name:
            state.open_core(core_name, description=cell_at(row, cols["objective"]) or None)

        sub_name = cell_at(row, cols["sub"])
        if not sub_name:
            return
        state.add_sub(
            ParsedSubCompetency(
                name=sub_name,
                levels=build_levels(row, level_cols, scale),
            )
        )

    return step


def extract_matrix(rows: Sequence[Row], header: HeaderMatch | None, scale: LevelScale) -> list[ParsedCoreCompetency]:
    header_row = header.row if header else None
    cols, claimed = resolve_columns(header_row, MATRIX_COLUMNS)
    level_cols = resolve_level_columns(header_row, scale, MATRIX_FIRST_LEVEL_COLUMN, claimed)
    logger.debug("columns.resolved", extra={"columns": cols, "level_columns": level_cols})

    return fold_rows(data_rows(rows, header), matrix_step(cols, level_cols, scale))


def extract_standard_4_level(
    rows: Sequence[Row],
    format_type: SheetFormatType,
    header: HeaderMatch | None = None,
) -> list[ParsedCoreCompetency]:
    ensure_format(SheetFormatType.STANDARD_4_LEVEL, format_type)
    return extract_matrix(rows, header, get_level_scale(SheetFormatType.STANDARD_4_LEVEL))
