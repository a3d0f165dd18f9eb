"""
sub_competency.py
- Purpose: Leaf of the tree; carries per-level descriptions and (AI
  layout only) behavioral indicator bullets.
- level_descriptions / behavioral_indicators are keyed by str(level).
"""

import uuid
from datetime import datetime
from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.models.base import Base, JSONType, utcnow


class SubCompetency(Base):
    __tablename__ = "sub_competencies"
    __table_args__ = (
        Index("ix_sub_competencies_core_sort", "core_competency_id", "sort_order"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    core_competency_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("core_competencies.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    level_descriptions: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    has_behavioral_indicators: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    behavioral_indicators: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utcnow, nullable=False)

    core_competency: Mapped["CoreCompetency"] = relationship(back_populates="sub_competencies")
