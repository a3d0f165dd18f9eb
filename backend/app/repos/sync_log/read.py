"""
sync_log/read.py
- Purpose: Read-side DB operations for CompetencySyncLog.
"""

from sqlalchemy.orm import Session

from app.models.sync_log import CompetencySyncLog


class SyncLogReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_recent(self, *, source_id=None, limit: int = 50) -> list[CompetencySyncLog]:
        q = self.db.query(CompetencySyncLog)
        if source_id is not None:
            q = q.filter(CompetencySyncLog.source_id == source_id)
        return q.order_by(CompetencySyncLog.created_at.desc()).limit(limit).all()
