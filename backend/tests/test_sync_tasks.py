from app.tasks import sync_tasks
from app.services.sync_service import SyncService

from conftest import STANDARD_HEADER, STANDARD_ROWS


def test_sync_source_task_returns_result(session_factory, fetcher, make_source, monkeypatch):
    source = make_source("sheet-eng")
    fetcher.grids["sheet-eng"] = [STANDARD_HEADER, *STANDARD_ROWS]
    monkeypatch.setattr(
        sync_tasks, "_sync_service", lambda: SyncService(session_factory=session_factory, fetcher=fetcher)
    )

    out = sync_tasks.sync_source_task.apply(args=[str(source.id)], kwargs={"force_refresh": True}).get()

    assert out["source_id"] == str(source.id)
    assert out["success"] is True
    assert out["records_synced"] == 7


def test_sync_all_sources_task_reports_failures(session_factory, fetcher, make_source, monkeypatch):
    make_source("sheet-missing")
    monkeypatch.setattr(
        sync_tasks,
        "_sync_service",
        lambda: SyncService(session_factory=session_factory, fetcher=fetcher, max_workers=1),
    )

    out = sync_tasks.sync_all_sources_task.apply(kwargs={"force_refresh": False}).get()

    assert out["total_failed"] == 1
    assert out["total_synced"] == 0
    assert out["results"][0]["result"]["success"] is False
