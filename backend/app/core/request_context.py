"""
Request/Task context helpers.

We keep a small context (request_id, task_id, source_id, etc.) in ContextVars.
FastAPI middleware, Celery tasks and the sync workers set these values so logs
for one source's sync can be correlated across threads and processes.

No external dependencies.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional


_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_task_id: ContextVar[Optional[str]] = ContextVar("task_id", default=None)
_source_id: ContextVar[Optional[str]] = ContextVar("source_id", default=None)
_source_name: ContextVar[Optional[str]] = ContextVar("source_name", default=None)


def set_context(
    *,
    request_id: Optional[str] = None,
    task_id: Optional[str] = None,
    source_id: Optional[str] = None,
    source_name: Optional[str] = None,
) -> None:
    if request_id is not None:
        _request_id.set(request_id)
    if task_id is not None:
        _task_id.set(task_id)
    if source_id is not None:
        _source_id.set(source_id)
    if source_name is not None:
        _source_name.set(source_name)


def clear_context() -> None:
    _request_id.set(None)
    _task_id.set(None)
    _source_id.set(None)
    _source_name.set(None)


def clear_source_context() -> None:
    _source_id.set(None)
    _source_name.set(None)


def get_context() -> Dict[str, Any]:
    ctx: Dict[str, Any] = {}
    rid = _request_id.get()
    tid = _task_id.get()
    sid = _source_id.get()
    sname = _source_name.get()

    if rid:
        ctx["request_id"] = rid
    if tid:
        ctx["task_id"] = tid
    if sid:
        ctx["source_id"] = sid
    if sname:
        ctx["source_name"] = sname
    return ctx
