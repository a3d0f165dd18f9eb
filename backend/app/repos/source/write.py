"""
source/write.py
- Purpose: Write-side DB operations for CompetencyFrameworkSource.
- Design: No business logic and no commits; the service owns the transaction.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from app.constants.statuses import SyncStatus
from app.models.source import CompetencyFrameworkSource
from app.schemas.framework_schema import ParsedCompetencyFramework, SheetMetadata


def _value(v):
    return v.value if hasattr(v, "value") else v


class SourceWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_source(self, metadata: SheetMetadata) -> CompetencyFrameworkSource:
        # Placeholder format metadata until the first sync parses the sheet.
        source = CompetencyFrameworkSource(
            type=_value(metadata.type),
            name=metadata.name,
            department=metadata.department,
            sheet_url=metadata.sheet_url,
            sheet_id=metadata.sheet_id,
            tab_name=metadata.tab_name,
            format_type="STANDARD_4_LEVEL",
            level_names=[],
            min_level=1,
            max_level=4,
            is_active=True,
            last_sync_status=SyncStatus.PENDING.value,
        )
        self.db.add(source)
        self.db.flush()
        self.db.refresh(source)
        return source

    def update_locator(self, source: CompetencyFrameworkSource, metadata: SheetMetadata) -> CompetencyFrameworkSource:
        """Only the display name and where to read from; parsed data and cache stay."""
        source.name = metadata.name
        source.sheet_url = metadata.sheet_url
        source.sheet_id = metadata.sheet_id
        source.tab_name = metadata.tab_name
        self.db.flush()
        return source

    def update_fields(self, source: CompetencyFrameworkSource, **fields) -> CompetencyFrameworkSource:
        for key, value in fields.items():
            setattr(source, key, _value(value))
        self.db.flush()
        return source

    def mark_synced(
        self,
        source: CompetencyFrameworkSource,
        framework: ParsedCompetencyFramework,
        *,
        synced_at: datetime,
        cache_valid_until: datetime,
    ) -> None:
        source.format_type = framework.format_type.value
        source.level_names = list(framework.level_names)
        source.min_level = framework.min_level
        source.max_level = framework.max_level
        source.format_detection = framework.format_detection.value
        source.last_synced_at = synced_at
        source.last_sync_status = SyncStatus.SUCCESS.value
        source.last_sync_error = None
        source.cache_valid_until = cache_valid_until
        self.db.flush()

    def mark_failed(self, source_id, error_message: str, *, synced_at: datetime) -> bool:
        updated = (
            self.db.query(CompetencyFrameworkSource)
            .filter(CompetencyFrameworkSource.id == source_id)
            .update(
                {
                    "last_sync_status": SyncStatus.FAILED.value,
                    "last_sync_error": error_message,
                    "last_synced_at": synced_at,
                    "updated_at": synced_at,
                },
                synchronize_session=False,
            )
        )
        return updated == 1
