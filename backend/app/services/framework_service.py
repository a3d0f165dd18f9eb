# app/services/framework_service.py
"""
framework_service.py
- Purpose: Read and administer competency framework sources for the API.
- Owns: validation of admin input, 404 mapping, source CRUD (soft delete).
- Design: Thick service; routers stay thin. Syncing itself lives in
  SyncService, which runs outside the request session.
"""

import logging

from sqlalchemy.orm import Session

from app.constants.statuses import FrameworkType
from app.core import bad_request, not_found
from app.core.errors import conflict
from app.repos.source.read import SourceReadRepo
from app.repos.source.write import SourceWriteRepo
from app.repos.sync_log.read import SyncLogReadRepo
from app.schemas.framework_schema import SheetMetadata
from app.schemas.source_schema import (
    SourceCreateRequest,
    SourceDetailOut,
    SourceOut,
    SourceUpdateRequest,
    SyncLogOut,
)
from app.validations.source_validators import extract_gid, extract_spreadsheet_id, validate_source_name

logger = logging.getLogger("app.framework_service")


def metadata_from_request(req: SourceCreateRequest) -> SheetMetadata:
    sheet_url = req.sheet_url.strip()
    return SheetMetadata(
        type=req.type,
        name=validate_source_name(req.name),
        department=(req.department or "").strip() or None,
        sheet_url=sheet_url,
        sheet_id=extract_spreadsheet_id(sheet_url),
        tab_name=(req.tab_name or "").strip() or extract_gid(sheet_url),
    )


class FrameworkService:
    def __init__(self, db: Session):
        self.db = db
        self.source_read = SourceReadRepo(db)
        self.source_write = SourceWriteRepo(db)
        self.log_read = SyncLogReadRepo(db)

    def get_source_record(self, source_id):
        source = self.source_read.get_by_id(source_id)
        if not source:
            raise not_found(message="Competency framework source not found", details={"source_id": str(source_id)})
        return source

    # ---------- reads ----------
    def list_sources(self, *, include_inactive: bool = False) -> list[SourceOut]:
        sources = self.source_read.list_sources(active_only=not include_inactive)
        return [SourceOut.from_source(s) for s in sources]

    def get_source(self, source_id) -> SourceDetailOut:
        source = self.source_read.get_with_tree(source_id)
        if not source:
            raise not_found(message="Competency framework source not found", details={"source_id": str(source_id)})
        return SourceDetailOut.from_source(source)

    def get_by_type(self, type: FrameworkType) -> list[SourceDetailOut]:
        sources = self.source_read.list_sources(active_only=True, type=type.value)
        return [SourceDetailOut.from_source(self.source_read.get_with_tree(s.id)) for s in sources]

    def list_sync_logs(self, *, source_id=None, limit: int = 50) -> list[SyncLogOut]:
        if source_id is not None:
            self.get_source_record(source_id)
        logs = self.log_read.list_recent(source_id=source_id, limit=limit)
        return [SyncLogOut.from_log(log) for log in logs]

    # ---------- admin writes ----------
    def create_source(self, req: SourceCreateRequest) -> SourceOut:
        metadata = metadata_from_request(req)

        if self.source_read.find_by_type_department(metadata.type.value, metadata.department):
            raise conflict(
                message="A source for this type and department already exists",
                details={"type": metadata.type.value, "department": metadata.department},
            )

        try:
            source = self.source_write.create_source(metadata)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("source.created", extra={"source_id": str(source.id), "sheet_id": source.sheet_id})
        return SourceOut.from_source(source)

    def update_source(self, source_id, req: SourceUpdateRequest) -> SourceOut:
        source = self.get_source_record(source_id)

        fields: dict = {}
        if req.name is not None:
            fields["name"] = validate_source_name(req.name)
        if req.sheet_url is not None:
            url = req.sheet_url.strip()
            fields["sheet_url"] = url
            fields["sheet_id"] = extract_spreadsheet_id(url)
            if req.tab_name is None and extract_gid(url):
                fields["tab_name"] = extract_gid(url)
        if req.tab_name is not None:
            fields["tab_name"] = req.tab_name.strip() or None
        if req.is_active is not None:
            fields["is_active"] = req.is_active

        # A new locator means the cached tree no longer describes the sheet.
        if {"sheet_id", "tab_name"} & fields.keys():
            fields["cache_valid_until"] = None

        if not fields:
            raise bad_request(message="Nothing to update")

        try:
            self.source_write.update_fields(source, **fields)
            self.db.commit()
            self.db.refresh(source)
        except Exception:
            self.db.rollback()
            raise

        logger.info("source.updated", extra={"source_id": str(source.id), "fields": sorted(fields)})
        return SourceOut.from_source(source)

    def deactivate_source(self, source_id) -> SourceOut:
        source = self.get_source_record(source_id)
        try:
            self.source_write.update_fields(source, is_active=False)
            self.db.commit()
            self.db.refresh(source)
        except Exception:
            self.db.rollback()
            raise

        logger.info("source.deactivated", extra={"source_id": str(source.id)})
        return SourceOut.from_source(source)
