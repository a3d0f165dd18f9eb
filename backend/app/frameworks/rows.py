"""
rows.py
- Purpose: Row predicates shared by the header locator and every extractor.
- Design: Pure functions over Row (dict[int, str]); missing == empty.

Authors type headers by hand, so "is this a header?" is a layered judgement:
phrase patterns first, then level-name labels, then structural keywords.
"""

from __future__ import annotations

import re
from typing import Mapping

from app.frameworks.levels import LEVEL_KEYWORDS
from app.sheets.types import Row

MAX_HEADER_CELL_CHARS = 150
MAX_LABEL_CHARS = 50

_WS_RE = re.compile(r"\s+")

_LEVEL_ALT = "|".join(LEVEL_KEYWORDS)

# Numbered level markers: "0. Unacceptable", "1. Basic", ...
NUMBERED_LEVEL_RE = re.compile(rf"(?:^|\|)\s*[0-4]\s*\.\s*(?:{_LEVEL_ALT})\b")

# A cell holding nothing but a numbered level marker.
_NUMBERED_LABEL_RE = re.compile(rf"^[0-4]\s*\.\s*(?:{_LEVEL_ALT})\s*[:.\-]?$")

# Phrases are matched against cells joined with " | ", so "[^|]*\|" means
# "then a later cell".
HEADER_PHRASES = (
    re.compile(r"\bfunctions?\b[^|]*\|.*\bcore competenc"),
    re.compile(r"\bcore competenc[^|]*\|.*\bsub[- ]?competenc"),
    re.compile(r"\bvalues?\b[^|]*\|.*\bvalue definitions?\b"),
    re.compile(r"\bcompetenc[^|]*\|.*\bdefinitions?\b"),
)

_LEVEL_LABEL_RE = re.compile(rf"^(?:[0-5]\s*\.\s*)?({_LEVEL_ALT})\b")

# Bullet glyphs mark indicator lists, which are content even when they open
# with a level echo ("1. Basic\n• checks output").
_BULLET_RE = re.compile(r"[•☑☐▪◦]")

STRUCTURAL_KEYWORDS = {
    "function": re.compile(r"\bfunctions?\b"),
    "competency": re.compile(r"\bcompetenc\w*"),
    "value": re.compile(r"\bvalues?\b"),
    "objective": re.compile(r"\bobjectives?\b"),
    "definition": re.compile(r"\bdefinitions?\b"),
    "sub": re.compile(r"\bsub\b"),
}


def clean_cell(value: str | None) -> str:
    """Trim and collapse internal whitespace. None/missing -> ""."""
    if not value:
        return ""
    return _WS_RE.sub(" ", value.strip())


def cells(row: Mapping[int, str]) -> list[str]:
    """Non-empty cleaned cells in column order."""
    out: list[str] = []
    for idx in sorted(row):
        c = clean_cell(row.get(idx))
        if c:
            out.append(c)
    return out


def row_text(row: Mapping[int, str]) -> str:
    """Lowercase " | "-joined text of the non-empty cells."""
    return " | ".join(cells(row)).lower()


def populated_count(row: Mapping[int, str]) -> int:
    return len(cells(row))


def is_empty_row(row: Mapping[int, str]) -> bool:
    return not any((v or "").strip() for v in row.values())


def level_label(cell: str) -> str | None:
    """Level keyword if the (short) cell reads like a level column label."""
    c = clean_cell(cell).lower()
    if not c or len(c) > MAX_LABEL_CHARS:
        return None
    m = _LEVEL_LABEL_RE.match(c)
    return m.group(1) if m else None


def _label_cells(row: Mapping[int, str]) -> list[tuple[str, str]]:
    """(raw, cleaned) for cells that may act as labels; bulleted cells are content."""
    out: list[tuple[str, str]] = []
    for idx in sorted(row):
        raw = row.get(idx) or ""
        if _BULLET_RE.search(raw):
            continue
        c = clean_cell(raw)
        if c:
            out.append((raw, c))
    return out


def is_header_row(row: Row) -> bool:
    values = cells(row)
    if not values:
        return False

    # Long text is content, not a label.
    if any(len(v) > MAX_HEADER_CELL_CHARS for v in values):
        return False

    labels = _label_cells(row)
    text = " | ".join(c for _raw, c in labels).lower()
    if any(p.search(text) for p in HEADER_PHRASES):
        return True

    # Level names only count from one-line cells; a level name followed by
    # more lines is an echo in front of a level description.
    one_line = [c.lower() for raw, c in labels if len(raw.strip().splitlines()) == 1]
    if any(_NUMBERED_LABEL_RE.match(c) for c in one_line):
        return True
    found = {lbl for lbl in (level_label(c) for c in one_line) if lbl}
    if len(found) >= 2:
        return True

    hits: set[str] = set()
    for _raw, v in labels:
        if len(v) > MAX_LABEL_CHARS:
            continue
        lv = v.lower()
        for key, pattern in STRUCTURAL_KEYWORDS.items():
            if pattern.search(lv):
                hits.add(key)
    return len(hits) >= 2
