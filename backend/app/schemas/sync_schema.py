"""
sync_schema.py
- Purpose: Results returned by the sync orchestrator (service, API, Celery).
- Design: Plain pydantic so Celery can ship them as JSON (model_dump).
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.constants.statuses import FormatDetection


class SyncResult(BaseModel):
    success: bool
    records_synced: int = 0
    records_failed: int = 0
    error: Optional[str] = None
    duration_ms: int = 0

    # True when the cache window short-circuited the run (nothing fetched).
    cached: bool = False
    format_detection: Optional[FormatDetection] = None


class SourceSyncResult(BaseModel):
    source_id: UUID
    source_name: Optional[str] = None
    result: SyncResult


class BulkSyncResult(BaseModel):
    total_synced: int = 0
    total_failed: int = 0
    results: List[SourceSyncResult] = Field(default_factory=list)
