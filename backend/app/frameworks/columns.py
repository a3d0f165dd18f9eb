"""
columns.py
- Purpose: Map layout fields (function, core, sub, levels...) to column indices.
- Design: Each layout declares fields with header needles and a positional
  default. With a header row the first unclaimed matching cell wins;
  without one the default position is used. A label-less field never takes
  a column that is labelled as another field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from app.frameworks.levels import LevelScale
from app.frameworks.rows import clean_cell, level_label
from app.sheets.types import Row


@dataclass(frozen=True)
class ColumnSpec:
    field: str
    needles: tuple[str, ...]
    default: int

    def matches(self, cell: str) -> bool:
        c = clean_cell(cell).lower()
        return bool(c) and any(re.search(n, c) for n in self.needles)


def _is_labelled(cell: str, specs: Sequence[ColumnSpec]) -> bool:
    return any(spec.matches(cell) for spec in specs) or level_label(cell) is not None


def resolve_columns(header: Row | None, specs: Sequence[ColumnSpec]) -> tuple[dict[str, int | None], set[int]]:
    """
    Returns (field -> column index, claimed column indices).

    Header labels are matched first. A field with no label of its own falls
    back to its default position only if that column is not labelled as
    something else; otherwise it stays None and callers treat it as absent.
    """
    resolved: dict[str, int | None] = {}
    claimed: set[int] = set()

    if header:
        for spec in specs:
            for col in sorted(header):
                if col not in claimed and spec.matches(header.get(col, "")):
                    resolved[spec.field] = col
                    claimed.add(col)
                    break

    for spec in specs:
        if spec.field in resolved:
            continue
        idx = spec.default
        if idx in claimed or (header and _is_labelled(header.get(idx, ""), specs)):
            resolved[spec.field] = None
            continue
        resolved[spec.field] = idx
        claimed.add(idx)

    return resolved, claimed


def cell_at(row: Row, col: int | None) -> str:
    """Cleaned cell value; "" for an unresolved column."""
    if col is None:
        return ""
    return clean_cell(row.get(col))


def resolve_level_columns(
    header: Row | None,
    scale: LevelScale,
    first_default: int,
    claimed: set[int] | None = None,
) -> list[int]:
    """One column index per level name in scale order."""
    taken = set(claimed or ())
    out: list[int] = []

    for position, name in enumerate(scale.names):
        key = name.lower()
        idx = None
        if header:
            for col in sorted(header):
                if col in taken:
                    continue
                if level_label(header.get(col, "")) == key:
                    idx = col
                    break
        if idx is None:
            idx = first_default + position
        out.append(idx)
        taken.add(idx)

    return out


# ----------------------------
# Layout declarations
# ----------------------------
# Order matters: "objective" is claimed before "function" so that
# "Function Objective" does not win the function column.
MATRIX_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("objective", (r"\bobjectives?\b",), 1),
    ColumnSpec("function", (r"\bfunctions?\b", r"\broles?\b"), 0),
    ColumnSpec("core", (r"\bcore\b",), 2),
    ColumnSpec("sub", (r"\bsub\b", r"\bsub-?competenc"), 3),
)
MATRIX_FIRST_LEVEL_COLUMN = 4

VALUES_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("value_definition", (r"\bvalue definitions?\b",), 1),
    ColumnSpec("value", (r"\bvalues?\b",), 0),
    ColumnSpec("competency", (r"competenc",), 2),
    ColumnSpec("definition", (r"\bdefinitions?\b",), 3),
)
VALUES_FIRST_LEVEL_COLUMN = 4

AI_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("competency", (r"competenc",), 0),
)
AI_FIRST_LEVEL_COLUMN = 1
