"""
competency/write.py
- Purpose: Replace a source's core/sub competency tree.
- Design: Flush only. delete_tree + insert_tree must run inside the caller's
  transaction so readers never see a half-replaced tree.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.core_competency import CoreCompetency
from app.models.sub_competency import SubCompetency
from app.schemas.framework_schema import ParsedCoreCompetency, ParsedSubCompetency


def level_descriptions(sub: ParsedSubCompetency) -> dict[str, str]:
    return {str(lvl.level): lvl.description for lvl in sub.levels}


def behavioral_indicators(sub: ParsedSubCompetency) -> dict[str, list[str]] | None:
    if not sub.behavioral_indicators:
        return None
    return {str(b.level): list(b.indicators) for b in sub.behavioral_indicators}


class CompetencyWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def delete_tree(self, source_id) -> None:
        # Subs first; SQLite does not enforce ON DELETE CASCADE by default.
        core_ids = select(CoreCompetency.id).where(CoreCompetency.source_id == source_id)
        (
            self.db.query(SubCompetency)
            .filter(SubCompetency.core_competency_id.in_(core_ids))
            .delete(synchronize_session=False)
        )
        (
            self.db.query(CoreCompetency)
            .filter(CoreCompetency.source_id == source_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()

    def insert_tree(self, source_id, cores: list[ParsedCoreCompetency]) -> int:
        """Returns the number of rows written (cores + subs)."""
        written = 0
        sort_order = 0
        for core in cores:
            core_row = CoreCompetency(
                source_id=source_id,
                name=core.name,
                description=core.description,
                function_area=core.function_area,
                category=core.category,
                sort_order=sort_order,
            )
            sort_order += 1
            self.db.add(core_row)
            self.db.flush()
            written += 1

            for sub in core.sub_competencies:
                self.db.add(
                    SubCompetency(
                        core_competency_id=core_row.id,
                        name=sub.name,
                        description=sub.description,
                        level_descriptions=level_descriptions(sub),
                        has_behavioral_indicators=sub.has_behavioral_indicators,
                        behavioral_indicators=behavioral_indicators(sub),
                        is_active=True,
                        sort_order=sort_order,
                    )
                )
                sort_order += 1
                written += 1

        self.db.flush()
        return written
