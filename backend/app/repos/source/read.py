"""
source/read.py
- Purpose: Read-side DB operations for CompetencyFrameworkSource.
- Design: Keeps query access patterns centralized.
"""

from sqlalchemy.orm import Session, selectinload

from app.models.core_competency import CoreCompetency
from app.models.source import CompetencyFrameworkSource


class SourceReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, source_id) -> CompetencyFrameworkSource | None:
        return (
            self.db.query(CompetencyFrameworkSource)
            .filter(CompetencyFrameworkSource.id == source_id)
            .first()
        )

    def get_with_tree(self, source_id) -> CompetencyFrameworkSource | None:
        return (
            self.db.query(CompetencyFrameworkSource)
            .options(
                selectinload(CompetencyFrameworkSource.core_competencies)
                .selectinload(CoreCompetency.sub_competencies)
            )
            .filter(CompetencyFrameworkSource.id == source_id)
            .first()
        )

    def list_sources(self, *, active_only: bool = True, type: str | None = None) -> list[CompetencyFrameworkSource]:
        q = self.db.query(CompetencyFrameworkSource)
        if active_only:
            q = q.filter(CompetencyFrameworkSource.is_active.is_(True))
        if type:
            q = q.filter(CompetencyFrameworkSource.type == type)
        return q.order_by(CompetencyFrameworkSource.type.asc(), CompetencyFrameworkSource.name.asc()).all()

    def find_by_type_department(self, type: str, department: str | None) -> CompetencyFrameworkSource | None:
        q = self.db.query(CompetencyFrameworkSource).filter(CompetencyFrameworkSource.type == type)
        # NULL department never equals NULL in SQL
        if department is None:
            q = q.filter(CompetencyFrameworkSource.department.is_(None))
        else:
            q = q.filter(CompetencyFrameworkSource.department == department)
        return q.first()
