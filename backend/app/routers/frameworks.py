"""
frameworks.py
- Purpose: API routes for competency framework sources, their parsed trees,
  sync logs and on-demand sync.
- Design: Keep router thin. Reads are open; every write and every sync
  requires the admin bearer token.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_framework_service, get_sync_service
from app.auth.deps import require_admin_token
from app.constants.statuses import FrameworkType
from app.core import AppError, ErrorCode, ErrorReason
from app.schemas.source_schema import (
    SourceCreateRequest,
    SourceDetailOut,
    SourceInitializeRequest,
    SourceOut,
    SourceUpdateRequest,
    SyncLogOut,
)
from app.schemas.sync_schema import BulkSyncResult, SyncResult
from app.services.framework_service import FrameworkService, metadata_from_request
from app.services.sync_service import SyncService

router = APIRouter(prefix="/api/frameworks", tags=["Frameworks"])


# ---------- reads ----------
@router.get("", response_model=list[SourceOut])
def list_sources(
    include_inactive: bool = False,
    svc: FrameworkService = Depends(get_framework_service),
):
    return svc.list_sources(include_inactive=include_inactive)


@router.get("/logs", response_model=list[SyncLogOut])
def list_sync_logs(
    source_id: UUID | None = None,
    limit: int = Query(50, ge=1, le=500),
    svc: FrameworkService = Depends(get_framework_service),
):
    return svc.list_sync_logs(source_id=source_id, limit=limit)


@router.get("/type/{framework_type}", response_model=list[SourceDetailOut])
def get_by_type(framework_type: FrameworkType, svc: FrameworkService = Depends(get_framework_service)):
    return svc.get_by_type(framework_type)


@router.get("/{source_id}", response_model=SourceDetailOut)
def get_source(source_id: UUID, svc: FrameworkService = Depends(get_framework_service)):
    return svc.get_source(source_id)


# ---------- admin ----------
@router.post(
    "",
    response_model=SourceOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin_token)],
)
def create_source(req: SourceCreateRequest, svc: FrameworkService = Depends(get_framework_service)):
    return svc.create_source(req)


@router.post("/initialize", response_model=list[SourceOut], dependencies=[Depends(require_admin_token)])
def initialize_sources(req: SourceInitializeRequest, sync: SyncService = Depends(get_sync_service)):
    metadata = [metadata_from_request(s) for s in req.sources]
    return [SourceOut.from_source(s) for s in sync.initialize_sources(metadata)]


@router.post("/sync", response_model=BulkSyncResult, dependencies=[Depends(require_admin_token)])
def sync_all_sources(force_refresh: bool = False, sync: SyncService = Depends(get_sync_service)):
    return sync.sync_all_sources(force_refresh=force_refresh)


@router.patch("/{source_id}", response_model=SourceOut, dependencies=[Depends(require_admin_token)])
def update_source(
    source_id: UUID,
    req: SourceUpdateRequest,
    svc: FrameworkService = Depends(get_framework_service),
):
    return svc.update_source(source_id, req)


@router.delete("/{source_id}", response_model=SourceOut, dependencies=[Depends(require_admin_token)])
def deactivate_source(source_id: UUID, svc: FrameworkService = Depends(get_framework_service)):
    return svc.deactivate_source(source_id)


@router.post("/{source_id}/sync", response_model=SyncResult, dependencies=[Depends(require_admin_token)])
def sync_source(
    source_id: UUID,
    force_refresh: bool = False,
    svc: FrameworkService = Depends(get_framework_service),
    sync: SyncService = Depends(get_sync_service),
):
    svc.get_source_record(source_id)

    result = sync.sync_source(source_id, force_refresh=force_refresh)
    if not result.success:
        raise AppError(
            code=ErrorCode.SYNC_FAILED,
            reason=ErrorReason.SYNC_FAILED.value,
            message=result.error,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=result.model_dump(mode="json"),
        )
    return result
