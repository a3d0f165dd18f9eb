"""
sync_log/write.py
- Purpose: Append sync attempts. Rows are never updated or deleted.
"""

from sqlalchemy.orm import Session

from app.models.sync_log import CompetencySyncLog


class SyncLogWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def append(
        self,
        source_id,
        status: str,
        *,
        records_synced: int = 0,
        records_failed: int = 0,
        error_message: str | None = None,
        duration_ms: int | None = None,
        format_detection: str | None = None,
    ) -> CompetencySyncLog:
        log = CompetencySyncLog(
            source_id=source_id,
            status=status.value if hasattr(status, "value") else status,
            records_synced=records_synced,
            records_failed=records_failed,
            error_message=error_message,
            sync_duration_ms=duration_ms,
            format_detection=format_detection.value if hasattr(format_detection, "value") else format_detection,
        )
        self.db.add(log)
        self.db.flush()
        return log
