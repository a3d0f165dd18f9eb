"""
classify.py
- Purpose: Decide which of the known sheet layouts a row describes.
- Design: FORMAT_RULES is an ordered list; first matching rule wins. New
  layouts are appended as new rules without touching the existing ones.

detect_sheet_format() works on a header row. infer_sheet_format() is the
best-effort guess used when a sheet has no header at all; callers should
treat its answer as unverified.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from app.constants.statuses import SheetFormatType
from app.frameworks.errors import UnrecognizedFormatError
from app.frameworks.rows import NUMBERED_LEVEL_RE, cells, populated_count, row_text
from app.sheets.types import Row

_COMPETENCY_RE = re.compile(r"competenc")
_VALUE_RE = re.compile(r"\bvalues?\b")
_VALUE_DEFINITION_RE = re.compile(r"value definition|\bdefinitions\b")
_FUNCTION_OR_ROLE_RE = re.compile(r"\bfunctions?\b|\broles?\b")
_EXPERT_RE = re.compile(r"\bexpert\b")

# Content hints used only when no header row exists.
_TOOLING_RE = re.compile(
    r"\b(ai|prompts?|prompting|chatgpt|gpt|llms?|copilot|tools?|tooling|automat\w*|workflows?)\b"
)
LONG_CELL_CHARS = 100
WIDE_ROW_COLUMNS = 8


@dataclass(frozen=True)
class FormatRule:
    name: str
    matches: Callable[[str], bool]
    resolve: Callable[[str], SheetFormatType]


def _is_ai_behavioral(text: str) -> bool:
    if NUMBERED_LEVEL_RE.search(text):
        return True
    return bool(_COMPETENCY_RE.search(text)) and "unacceptable" in text


def _is_values(text: str) -> bool:
    return (
        bool(_VALUE_RE.search(text))
        and bool(_VALUE_DEFINITION_RE.search(text))
        and bool(_COMPETENCY_RE.search(text))
    )


def _is_competency_matrix(text: str) -> bool:
    return bool(_FUNCTION_OR_ROLE_RE.search(text)) or bool(_COMPETENCY_RE.search(text))


def _matrix_depth(text: str) -> SheetFormatType:
    if _EXPERT_RE.search(text):
        return SheetFormatType.EXTENDED_5_LEVEL
    return SheetFormatType.STANDARD_4_LEVEL


FORMAT_RULES: tuple[FormatRule, ...] = (
    FormatRule("ai_behavioral", _is_ai_behavioral, lambda _t: SheetFormatType.AI_BEHAVIORAL),
    FormatRule("values", _is_values, lambda _t: SheetFormatType.EXTENDED_5_LEVEL),
    FormatRule("competency_matrix", _is_competency_matrix, _matrix_depth),
)


def detect_sheet_format(row: Row) -> SheetFormatType:
    text = row_text(row)
    for rule in FORMAT_RULES:
        if rule.matches(text):
            return rule.resolve(text)
    raise UnrecognizedFormatError(row)


def infer_sheet_format(row: Row | None) -> SheetFormatType:
    """Guess a layout from a data row. Never raises; defaults to 4-level."""
    if not row:
        return SheetFormatType.STANDARD_4_LEVEL
    if _TOOLING_RE.search(row_text(row)):
        return SheetFormatType.AI_BEHAVIORAL
    if any(len(c) > LONG_CELL_CHARS for c in cells(row)):
        return SheetFormatType.EXTENDED_5_LEVEL
    if populated_count(row) >= WIDE_ROW_COLUMNS:
        return SheetFormatType.EXTENDED_5_LEVEL
    return SheetFormatType.STANDARD_4_LEVEL
