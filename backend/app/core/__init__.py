# app/core/__init__.py
from app.core.error_codes import ErrorCode
from app.core.error_reasons import ErrorReason
from app.core.errors import AppError, bad_request, not_found

__all__ = ["AppError", "ErrorCode", "ErrorReason", "bad_request", "not_found"]
