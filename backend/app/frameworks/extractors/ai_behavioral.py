"""
extractors/ai_behavioral.py
- Layout: [competency, unacceptable, basic, intermediate, proficient, advanced]
- No carry-forward: every data row is one core competency holding a single
  sub-competency of the same name. Level cells hold bullet lists that are
  split into behavioral indicators.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from app.constants.statuses import SheetFormatType
from app.frameworks.columns import AI_COLUMNS, AI_FIRST_LEVEL_COLUMN, cell_at, resolve_columns, resolve_level_columns
from app.frameworks.extractors.base import build_levels, data_rows, ensure_format
from app.frameworks.header import HeaderMatch
from app.frameworks.levels import LEVEL_KEYWORDS, get_level_scale
from app.frameworks.rows import clean_cell, is_empty_row, is_header_row
from app.schemas.framework_schema import ParsedBehavioralIndicator, ParsedCoreCompetency, ParsedSubCompetency
from app.sheets.types import Row

logger = logging.getLogger("app.frameworks.ai_behavioral")

AI_CATEGORY = "AI Competencies"

_SPLIT_RE = re.compile(r"\r?\n|\r|[•☑☐▪◦]")

# A fragment that only repeats a level label ("Basic", "2. Intermediate", "Level 3:").
_LEVEL_ECHO_RE = re.compile(
    rf"^(?:level\s*\d+\s*[:.\-]?\s*|[0-5]\s*\.\s*)?(?:{'|'.join(LEVEL_KEYWORDS)})?\s*[:.\-]?$",
    re.IGNORECASE,
)


def split_behavioral_indicators(cell: str | None) -> list[str]:
    if not cell:
        return []
    out: list[str] = []
    for fragment in _SPLIT_RE.split(cell):
        text = clean_cell(fragment)
        if not text or _LEVEL_ECHO_RE.match(text):
            continue
        out.append(text)
    return out


def extract_ai_behavioral(
    rows: Sequence[Row],
    format_type: SheetFormatType,
    header: HeaderMatch | None = None,
) -> list[ParsedCoreCompetency]:
    ensure_format(SheetFormatType.AI_BEHAVIORAL, format_type)
    scale = get_level_scale(SheetFormatType.AI_BEHAVIORAL)

    header_row = header.row if header else None
    cols, claimed = resolve_columns(header_row, AI_COLUMNS)
    level_cols = resolve_level_columns(header_row, scale, AI_FIRST_LEVEL_COLUMN, claimed)
    logger.debug("columns.resolved", extra={"columns": cols, "level_columns": level_cols})

    cores: list[ParsedCoreCompetency] = []
    for row in data_rows(rows, header):
        if is_empty_row(row) or is_header_row(row):
            continue

        name = cell_at(row, cols["competency"])
        if not name:
            continue

        bundles: list[ParsedBehavioralIndicator] = []
        for position, col in enumerate(level_cols):
            indicators = split_behavioral_indicators(row.get(col))
            if indicators:
                bundles.append(
                    ParsedBehavioralIndicator(
                        level=scale.number(position),
                        level_name=scale.names[position],
                        indicators=indicators,
                    )
                )

        sub = ParsedSubCompetency(
            name=name,
            levels=build_levels(row, level_cols, scale),
            has_behavioral_indicators=bool(bundles),
            behavioral_indicators=bundles or None,
        )
        cores.append(ParsedCoreCompetency(name=name, category=AI_CATEGORY, sub_competencies=[sub]))

    return cores
