from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.request_context import clear_context, set_context

logger = logging.getLogger("app.http")

# Probes hit these every few seconds; keep them out of the logs.
QUIET_PATHS = frozenset({"/api/health", "/api/db/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex
        set_context(request_id=rid)
        path = request.url.path
        quiet = path in QUIET_PATHS

        t0 = time.time()
        try:
            if not quiet:
                logger.info(
                    "http.request",
                    extra={"method": request.method, "path": path, "query": str(request.url.query)},
                )

            response: Response = await call_next(request)

            if not quiet:
                logger.info(
                    "http.response",
                    extra={
                        "method": request.method,
                        "path": path,
                        "status_code": response.status_code,
                        "duration_ms": int((time.time() - t0) * 1000),
                    },
                )
            response.headers["x-request-id"] = rid
            return response
        finally:
            clear_context()
