"""
sync_log.py
- Purpose: Append-only audit row per sync attempt (success, cache hit or failure).
"""

import uuid
from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.models.base import Base, utcnow


class CompetencySyncLog(Base):
    __tablename__ = "competency_sync_logs"
    __table_args__ = (
        Index("ix_sync_logs_source_created_at", "source_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    source_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("competency_framework_sources.id", ondelete="CASCADE"),
        nullable=False,
    )

    status: Mapped[str] = mapped_column(String(16), nullable=False)  # SUCCESS | FAILED
    records_synced: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    records_failed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    sync_duration_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    format_detection: Mapped[str | None] = mapped_column(String(16), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)

    source: Mapped["CompetencyFrameworkSource"] = relationship(back_populates="sync_logs")
