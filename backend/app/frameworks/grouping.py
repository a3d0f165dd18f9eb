"""
grouping.py
- Purpose: Carry-forward accumulator for layouts with grouping columns.

Authors fill a grouping column (function, value, core competency) on the
first row of a group and leave it blank below. GroupingState holds the
"current" label and core while rows are folded through it; a core is only
emitted once it holds at least one sub-competency.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from app.frameworks.rows import is_empty_row, is_header_row
from app.schemas.framework_schema import ParsedCoreCompetency, ParsedSubCompetency
from app.sheets.types import Row


@dataclass
class GroupingState:
    current_label: str = ""
    current_core: ParsedCoreCompetency | None = None
    cores: list[ParsedCoreCompetency] = field(default_factory=list)

    def carry_label(self, value: str) -> None:
        if value:
            self.current_label = value

    def open_core(
        self,
        name: str,
        *,
        description: str | None = None,
        function_area: str | None = None,
        category: str | None = None,
    ) -> ParsedCoreCompetency:
        area = function_area if function_area is not None else (self.current_label or None)
        core = self.current_core

        # Same group repeated on a continuation row: keep accumulating.
        if core is not None and core.name == name and core.function_area == area:
            if description and not core.description:
                core.description = description
            return core

        self.flush()
        self.current_core = ParsedCoreCompetency(
            name=name,
            description=description or None,
            function_area=area,
            category=category,
        )
        return self.current_core

    def add_sub(self, sub: ParsedSubCompetency) -> bool:
        if self.current_core is None:
            return False
        self.current_core.sub_competencies.append(sub)
        return True

    def flush(self) -> None:
        core = self.current_core
        if core is not None and core.sub_competencies:
            self.cores.append(core)
        self.current_core = None

    def finish(self) -> list[ParsedCoreCompetency]:
        self.flush()
        return self.cores


RowStep = Callable[[GroupingState, Row], None]


def fold_rows(rows: Iterable[Row], step: RowStep, state: GroupingState | None = None) -> list[ParsedCoreCompetency]:
    """Blank and header-like rows are skipped without touching state."""
    st = state or GroupingState()
    for row in rows:
        if is_empty_row(row) or is_header_row(row):
            continue
        step(st, row)
    return st.finish()
