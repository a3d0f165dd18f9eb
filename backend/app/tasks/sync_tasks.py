from __future__ import annotations

import logging

from app.celery_app import celery_app
from app.core.request_context import clear_context, set_context
from app.services.sync_service import SyncService

logger = logging.getLogger("app.tasks.sync_tasks")


def _sync_service() -> SyncService:
    return SyncService()


@celery_app.task(name="app.tasks.sync_tasks.sync_source_task", bind=True)
def sync_source_task(self, source_id: str, force_refresh: bool = False) -> dict:
    """
    External trigger for one source. SyncService records failures itself
    (source status + sync log), so nothing is retried here.
    """
    set_context(task_id=getattr(self.request, "id", None), source_id=source_id)
    try:
        logger.info("task.start", extra={"task": "sync_source_task", "force_refresh": force_refresh})
        result = _sync_service().sync_source(source_id, force_refresh=force_refresh)
        logger.info(
            "task.done",
            extra={"task": "sync_source_task", "success": result.success, "records_synced": result.records_synced},
        )
        return {"source_id": source_id, **result.model_dump(mode="json")}
    finally:
        clear_context()


@celery_app.task(name="app.tasks.sync_tasks.sync_all_sources_task", bind=True)
def sync_all_sources_task(self, force_refresh: bool = False) -> dict:
    set_context(task_id=getattr(self.request, "id", None))
    try:
        logger.info("task.start", extra={"task": "sync_all_sources_task", "force_refresh": force_refresh})
        result = _sync_service().sync_all_sources(force_refresh=force_refresh)
        logger.info(
            "task.done",
            extra={
                "task": "sync_all_sources_task",
                "total_synced": result.total_synced,
                "total_failed": result.total_failed,
            },
        )
        return result.model_dump(mode="json")
    finally:
        clear_context()
