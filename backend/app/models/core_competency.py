"""
core_competency.py
- Purpose: Top tier of a source's tree (function area / value / AI skill).
"""

import uuid
from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.models.base import Base, utcnow


class CoreCompetency(Base):
    __tablename__ = "core_competencies"
    __table_args__ = (
        Index("ix_core_competencies_source_sort", "source_id", "sort_order"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    source_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("competency_framework_sources.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    function_area: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)

    source: Mapped["CompetencyFrameworkSource"] = relationship(back_populates="core_competencies")
    sub_competencies: Mapped[list["SubCompetency"]] = relationship(
        back_populates="core_competency",
        cascade="all, delete-orphan",
        order_by="SubCompetency.sort_order",
    )
