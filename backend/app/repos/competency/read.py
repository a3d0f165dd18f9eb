"""
competency/read.py
- Purpose: Read-side DB operations for the core/sub competency tree.
"""

from sqlalchemy.orm import Session

from app.models.core_competency import CoreCompetency
from app.models.sub_competency import SubCompetency


class CompetencyReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_cores(self, source_id) -> list[CoreCompetency]:
        return (
            self.db.query(CoreCompetency)
            .filter(CoreCompetency.source_id == source_id)
            .order_by(CoreCompetency.sort_order.asc())
            .all()
        )

    def list_subs(self, source_id) -> list[SubCompetency]:
        return (
            self.db.query(SubCompetency)
            .join(CoreCompetency, SubCompetency.core_competency_id == CoreCompetency.id)
            .filter(CoreCompetency.source_id == source_id)
            .order_by(SubCompetency.sort_order.asc())
            .all()
        )

    def count_records(self, source_id) -> int:
        cores = self.db.query(CoreCompetency).filter(CoreCompetency.source_id == source_id).count()
        subs = (
            self.db.query(SubCompetency)
            .join(CoreCompetency, SubCompetency.core_competency_id == CoreCompetency.id)
            .filter(CoreCompetency.source_id == source_id)
            .count()
        )
        return cores + subs
