"""
exception_handlers.py
- Purpose: Render AppError, database failures and anything unexpected as the
  same {"error": {...}} envelope the admin UI already understands.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core import AppError, ErrorCode, ErrorReason

logger = logging.getLogger("app.exceptions")


def _where(request: Request) -> dict:
    return {"path": str(getattr(request.url, "path", "")), "method": request.method}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "app_error",
        extra={
            **_where(request),
            "status_code": exc.status_code,
            "code": getattr(exc, "code", None),
            "reason": getattr(exc, "reason", None),
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def db_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("db_error", extra={**_where(request), "error": str(exc)[:500]})
    err = AppError(
        code=ErrorCode.DB_ERROR,
        reason=ErrorReason.DATABASE_UNAVAILABLE.value,
        status_code=503,
    )
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", extra=_where(request))
    return JSONResponse(
        status_code=500,
        content={"error": {"code": ErrorCode.INTERNAL_ERROR, "reason": ErrorReason.INTERNAL_ERROR.value}},
    )
