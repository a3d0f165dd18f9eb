"""
source_schema.py (schemas)
- Purpose: Request/response DTOs for framework source administration.
- Design: from_orm-style classmethods keep router code free of mapping.
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.constants.statuses import FrameworkType
from app.frameworks.levels import level_score_map


class SourceCreateRequest(BaseModel):
    type: FrameworkType
    name: str = Field(min_length=2, max_length=100)
    department: Optional[str] = None
    sheet_url: str
    # Tab title or gid. When omitted, a gid in sheet_url is used.
    tab_name: Optional[str] = None


class SourceUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    sheet_url: Optional[str] = None
    tab_name: Optional[str] = None
    is_active: Optional[bool] = None


class SourceInitializeRequest(BaseModel):
    sources: List[SourceCreateRequest]


class SourceOut(BaseModel):
    id: UUID
    type: str
    name: str
    department: Optional[str] = None
    sheet_url: str
    sheet_id: str
    tab_name: Optional[str] = None

    format_type: str
    level_names: List[str] = Field(default_factory=list)
    min_level: int
    max_level: int
    # level number -> 0-100 score on this source's scale
    level_scores: Dict[str, int] = Field(default_factory=dict)
    format_detection: Optional[str] = None

    is_active: bool
    last_synced_at: Optional[datetime] = None
    last_sync_status: str
    last_sync_error: Optional[str] = None
    cache_valid_until: Optional[datetime] = None

    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_source(cls, s) -> "SourceOut":
        return cls(
            id=s.id,
            type=s.type,
            name=s.name,
            department=s.department,
            sheet_url=s.sheet_url,
            sheet_id=s.sheet_id,
            tab_name=s.tab_name,
            format_type=s.format_type,
            level_names=list(s.level_names or []),
            min_level=s.min_level,
            max_level=s.max_level,
            level_scores=level_score_map(s.format_type),
            format_detection=s.format_detection,
            is_active=s.is_active,
            last_synced_at=s.last_synced_at,
            last_sync_status=s.last_sync_status,
            last_sync_error=s.last_sync_error,
            cache_valid_until=s.cache_valid_until,
            created_at=s.created_at,
            updated_at=s.updated_at,
        )


class SubCompetencyOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    level_descriptions: Dict[str, str] = Field(default_factory=dict)
    has_behavioral_indicators: bool = False
    behavioral_indicators: Optional[Dict[str, List[str]]] = None
    sort_order: int


class CoreCompetencyOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    function_area: Optional[str] = None
    category: Optional[str] = None
    sort_order: int
    sub_competencies: List[SubCompetencyOut] = Field(default_factory=list)


class SourceDetailOut(SourceOut):
    core_competencies: List[CoreCompetencyOut] = Field(default_factory=list)

    @classmethod
    def from_source(cls, s) -> "SourceDetailOut":
        base = SourceOut.from_source(s).model_dump()
        cores = [
            CoreCompetencyOut(
                id=c.id,
                name=c.name,
                description=c.description,
                function_area=c.function_area,
                category=c.category,
                sort_order=c.sort_order,
                sub_competencies=[
                    SubCompetencyOut(
                        id=sc.id,
                        name=sc.name,
                        description=sc.description,
                        level_descriptions=dict(sc.level_descriptions or {}),
                        has_behavioral_indicators=sc.has_behavioral_indicators,
                        behavioral_indicators=sc.behavioral_indicators,
                        sort_order=sc.sort_order,
                    )
                    for sc in c.sub_competencies
                    if sc.is_active
                ],
            )
            for c in s.core_competencies
        ]
        return cls(**base, core_competencies=cores)


class SyncLogOut(BaseModel):
    id: UUID
    source_id: UUID
    status: str
    records_synced: int
    records_failed: int
    error_message: Optional[str] = None
    sync_duration_ms: Optional[int] = None
    format_detection: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_log(cls, log) -> "SyncLogOut":
        return cls(
            id=log.id,
            source_id=log.source_id,
            status=log.status,
            records_synced=log.records_synced,
            records_failed=log.records_failed,
            error_message=log.error_message,
            sync_duration_ms=log.sync_duration_ms,
            format_detection=log.format_detection,
            created_at=log.created_at,
        )
