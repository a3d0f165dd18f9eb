# app/services/sync_service.py
"""
sync_service.py
- Purpose: Keep stored competency frameworks consistent with their sheets.
- Owns: cache short-circuit, fetch -> parse -> replace-tree transaction,
  source status updates and the append-only sync log.
- Design: One DB session per source sync, so bulk runs can fan out over a
  thread pool. A sync never raises; failures come back as SyncResult and
  the previous tree stays readable.
"""

from __future__ import annotations

import contextvars
import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Callable, Iterable

from sqlalchemy.orm import Session

from app.constants.statuses import SyncStatus
from app.core.config import settings
from app.core.request_context import clear_source_context, set_context
from app.db.session import SessionLocal
from app.frameworks.parse import parse_grid
from app.models.base import utcnow
from app.models.source import CompetencyFrameworkSource
from app.repos.competency.write import CompetencyWriteRepo
from app.repos.source.read import SourceReadRepo
from app.repos.source.write import SourceWriteRepo
from app.repos.sync_log.write import SyncLogWriteRepo
from app.schemas.framework_schema import SheetMetadata
from app.schemas.sync_schema import BulkSyncResult, SourceSyncResult, SyncResult
from app.sheets.fetcher import SheetsFetcher

logger = logging.getLogger("app.sync_service")


def _elapsed_ms(t0: float) -> int:
    return int((time.time() - t0) * 1000)


def _as_uuid(value) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def metadata_for(source: CompetencyFrameworkSource) -> SheetMetadata:
    return SheetMetadata(
        type=source.type,
        name=source.name,
        department=source.department,
        sheet_url=source.sheet_url,
        sheet_id=source.sheet_id,
        tab_name=source.tab_name,
    )


class SyncService:
    def __init__(
        self,
        session_factory: Callable[[], Session] | None = None,
        fetcher: SheetsFetcher | None = None,
        *,
        cache_ttl_days: int | None = None,
        max_workers: int | None = None,
    ):
        self.session_factory = session_factory or SessionLocal
        self.fetcher = fetcher or SheetsFetcher()
        self.cache_ttl_days = cache_ttl_days if cache_ttl_days is not None else settings.SYNC_CACHE_TTL_DAYS
        self.max_workers = max_workers or settings.SYNC_MAX_WORKERS

    # ----------------------------
    # Single source
    # ----------------------------
    def sync_source(self, source_id, force_refresh: bool = False) -> SyncResult:
        db = self.session_factory()
        try:
            return self._sync_in_session(db, source_id, force_refresh)
        finally:
            db.close()
            clear_source_context()

    def _sync_in_session(self, db: Session, source_id, force_refresh: bool) -> SyncResult:
        t0 = time.time()

        source_uuid = _as_uuid(source_id)
        source = SourceReadRepo(db).get_by_id(source_uuid) if source_uuid else None
        if source is None:
            msg = f"Competency framework source {source_id} not found"
            logger.warning("sync.source_missing", extra={"source_id": str(source_id)})
            return SyncResult(success=False, records_failed=1, error=msg, duration_ms=_elapsed_ms(t0))

        set_context(source_id=str(source_uuid), source_name=source.name)

        now = utcnow()
        if not force_refresh and source.cache_valid_until and source.cache_valid_until > now:
            logger.info(
                "sync.cache_hit",
                extra={"cache_valid_until": source.cache_valid_until.isoformat()},
            )
            return SyncResult(success=True, cached=True, duration_ms=_elapsed_ms(t0))

        source_write = SourceWriteRepo(db)
        tree_write = CompetencyWriteRepo(db)
        log_write = SyncLogWriteRepo(db)

        logger.info(
            "sync.start",
            extra={"sheet_id": source.sheet_id, "tab": source.tab_name, "force_refresh": force_refresh},
        )

        detection = None
        try:
            rows = self.fetcher.fetch_grid(source.sheet_id, source.tab_name)
            framework = parse_grid(rows, metadata_for(source))
            detection = framework.format_detection

            # ---------- replace the tree and log it in one transaction ----------
            synced_at = utcnow()
            tree_write.delete_tree(source_uuid)
            written = tree_write.insert_tree(source_uuid, framework.core_competencies)
            source_write.mark_synced(
                source,
                framework,
                synced_at=synced_at,
                cache_valid_until=synced_at + timedelta(days=self.cache_ttl_days),
            )
            duration_ms = _elapsed_ms(t0)
            # The SUCCESS log commits with the tree or not at all.
            log_write.append(
                source_uuid,
                SyncStatus.SUCCESS,
                records_synced=written,
                duration_ms=duration_ms,
                format_detection=detection,
            )
            db.commit()

            logger.info(
                "sync.done",
                extra={
                    "format_type": framework.format_type.value,
                    "format_detection": detection.value,
                    "records_synced": written,
                    "duration_ms": duration_ms,
                },
            )
            return SyncResult(
                success=True,
                records_synced=written,
                duration_ms=duration_ms,
                format_detection=detection,
            )

        except Exception as e:
            db.rollback()
            msg = str(e) or e.__class__.__name__
            duration_ms = _elapsed_ms(t0)
            logger.warning(
                "sync.failed",
                extra={"error": msg[:500], "error_type": e.__class__.__name__, "duration_ms": duration_ms},
            )

            # record failure in a separate small transaction
            try:
                source_write.mark_failed(source_uuid, msg, synced_at=utcnow())
                log_write.append(
                    source_uuid,
                    SyncStatus.FAILED,
                    records_failed=1,
                    error_message=msg,
                    duration_ms=duration_ms,
                    format_detection=detection,
                )
                db.commit()
            except Exception:
                db.rollback()
                logger.exception("sync.failure_not_recorded")

            return SyncResult(
                success=False,
                records_failed=1,
                error=msg,
                duration_ms=duration_ms,
                format_detection=detection,
            )

    # ----------------------------
    # All active sources
    # ----------------------------
    def sync_all_sources(self, force_refresh: bool = False) -> BulkSyncResult:
        t0 = time.time()
        db = self.session_factory()
        try:
            targets = [(s.id, s.name) for s in SourceReadRepo(db).list_sources(active_only=True)]
        finally:
            db.close()

        logger.info("sync.bulk.start", extra={"sources": len(targets), "force_refresh": force_refresh})

        out = BulkSyncResult()
        if not targets:
            return out

        with ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(targets)),
            thread_name_prefix="framework-sync",
        ) as pool:
            # Each worker gets its own copy of the caller's context (request_id, task_id).
            futures = [
                pool.submit(contextvars.copy_context().run, self.sync_source, sid, force_refresh)
                for sid, _name in targets
            ]

            for (sid, name), fut in zip(targets, futures):
                try:
                    result = fut.result()
                except Exception as e:
                    logger.exception("sync.bulk.task_crashed", extra={"source_id": str(sid)})
                    result = SyncResult(success=False, records_failed=1, error=str(e) or e.__class__.__name__)

                out.results.append(SourceSyncResult(source_id=sid, source_name=name, result=result))
                if result.success:
                    out.total_synced += result.records_synced
                else:
                    out.total_failed += 1

        logger.info(
            "sync.bulk.done",
            extra={
                "sources": len(targets),
                "total_synced": out.total_synced,
                "total_failed": out.total_failed,
                "duration_ms": _elapsed_ms(t0),
            },
        )
        return out

    # ----------------------------
    # Registration
    # ----------------------------
    def initialize_sources(self, metadata_list: Iterable[SheetMetadata]) -> list[CompetencyFrameworkSource]:
        """
        Upsert sources by (type, department). Existing sources only get their
        name and sheet locator refreshed; parsed data and cache are kept.
        """
        db = self.session_factory()
        try:
            read = SourceReadRepo(db)
            write = SourceWriteRepo(db)
            sources: list[CompetencyFrameworkSource] = []
            created = 0

            for metadata in metadata_list:
                existing = read.find_by_type_department(metadata.type.value, metadata.department)
                if existing:
                    sources.append(write.update_locator(existing, metadata))
                else:
                    sources.append(write.create_source(metadata))
                    created += 1

            db.commit()
            for s in sources:
                db.refresh(s)

            logger.info(
                "sources.initialized",
                extra={"sources": len(sources), "created_count": created, "updated_count": len(sources) - created},
            )
            return sources
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
