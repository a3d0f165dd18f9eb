"""
source.py
- Purpose: One registered competency framework tab (a "source") plus the
  format metadata and cache state left by its last sync.
"""

import uuid
from datetime import datetime
from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.models.base import Base, JSONType, utcnow


class CompetencyFrameworkSource(Base):
    __tablename__ = "competency_framework_sources"

    __table_args__ = (
        # initialize_sources upserts on this pair
        Index("ix_framework_sources_type_department", "type", "department"),
        Index("ix_framework_sources_active", "is_active"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    type: Mapped[str] = mapped_column(String(16), nullable=False)  # DEPARTMENT | AI | VALUES
    name: Mapped[str] = mapped_column(Text, nullable=False)
    department: Mapped[str | None] = mapped_column(Text, nullable=True)

    sheet_url: Mapped[str] = mapped_column(Text, nullable=False)
    sheet_id: Mapped[str] = mapped_column(String(128), nullable=False)
    tab_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    format_type: Mapped[str] = mapped_column(String(32), nullable=False, default="STANDARD_4_LEVEL")
    level_names: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    min_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    max_level: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    format_detection: Mapped[str | None] = mapped_column(String(16), nullable=True)  # HEADER | INFERRED

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
    last_sync_status: Mapped[str] = mapped_column(String(16), nullable=False, default="PENDING")
    last_sync_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    cache_valid_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    core_competencies: Mapped[list["CoreCompetency"]] = relationship(
        back_populates="source",
        cascade="all, delete-orphan",
        order_by="CoreCompetency.sort_order",
    )
    sync_logs: Mapped[list["CompetencySyncLog"]] = relationship(
        back_populates="source",
        cascade="all, delete-orphan",
        order_by="CompetencySyncLog.created_at.desc()",
    )
