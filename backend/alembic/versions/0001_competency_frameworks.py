"""competency framework sources, tree and sync logs

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "competency_framework_sources",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("department", sa.Text(), nullable=True),
        sa.Column("sheet_url", sa.Text(), nullable=False),
        sa.Column("sheet_id", sa.String(128), nullable=False),
        sa.Column("tab_name", sa.Text(), nullable=True),
        sa.Column("format_type", sa.String(32), nullable=False),
        sa.Column("level_names", JSONType, nullable=False),
        sa.Column("min_level", sa.Integer(), nullable=False),
        sa.Column("max_level", sa.Integer(), nullable=False),
        sa.Column("format_detection", sa.String(16), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_synced_at", sa.DateTime(timezone=False), nullable=True),
        sa.Column("last_sync_status", sa.String(16), nullable=False),
        sa.Column("last_sync_error", sa.Text(), nullable=True),
        sa.Column("cache_valid_until", sa.DateTime(timezone=False), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=False), nullable=False),
    )
    op.create_index("ix_framework_sources_type_department", "competency_framework_sources", ["type", "department"])
    op.create_index("ix_framework_sources_active", "competency_framework_sources", ["is_active"])

    op.create_table(
        "core_competencies",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "source_id",
            sa.Uuid(),
            sa.ForeignKey("competency_framework_sources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("function_area", sa.Text(), nullable=True),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
    )
    op.create_index("ix_core_competencies_source_sort", "core_competencies", ["source_id", "sort_order"])

    op.create_table(
        "sub_competencies",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "core_competency_id",
            sa.Uuid(),
            sa.ForeignKey("core_competencies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("level_descriptions", JSONType, nullable=False),
        sa.Column("has_behavioral_indicators", sa.Boolean(), nullable=False),
        sa.Column("behavioral_indicators", JSONType, nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
    )
    op.create_index("ix_sub_competencies_core_sort", "sub_competencies", ["core_competency_id", "sort_order"])

    op.create_table(
        "competency_sync_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "source_id",
            sa.Uuid(),
            sa.ForeignKey("competency_framework_sources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("records_synced", sa.Integer(), nullable=False),
        sa.Column("records_failed", sa.Integer(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("sync_duration_ms", sa.Integer(), nullable=True),
        sa.Column("format_detection", sa.String(16), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
    )
    op.create_index("ix_sync_logs_source_created_at", "competency_sync_logs", ["source_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_sync_logs_source_created_at", table_name="competency_sync_logs")
    op.drop_table("competency_sync_logs")
    op.drop_index("ix_sub_competencies_core_sort", table_name="sub_competencies")
    op.drop_table("sub_competencies")
    op.drop_index("ix_core_competencies_source_sort", table_name="core_competencies")
    op.drop_table("core_competencies")
    op.drop_index("ix_framework_sources_active", table_name="competency_framework_sources")
    op.drop_index("ix_framework_sources_type_department", table_name="competency_framework_sources")
    op.drop_table("competency_framework_sources")
