"""
errors.py
- Purpose: AppError used across services/repos for consistent errors.
- Pattern: raise AppError(...) in service/repo, handler converts to JSON response.
"""

from dataclasses import dataclass
from typing import Any

from fastapi import status as http_status
from app.core.error_codes import ErrorCode
from app.core.error_reasons import ErrorReason


@dataclass
class AppError(Exception):
    code: ErrorCode
    reason: str = ErrorReason.UNKNOWN.value
    status_code: int = http_status.HTTP_400_BAD_REQUEST
    details: dict[str, Any] | None = None
    message: str | None = None  # Optional human-readable message

    def __str__(self) -> str:
        return self.message or str(self.reason)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": {
                "code": self.code,
                "reason": self.reason,
                "message": self.message if self.message else self.reason,
            }
        }
        if self.details:
            payload["error"]["details"] = self.details
        return payload


# Convenience constructors
def bad_request(reason: str = ErrorReason.INVALID_INPUT, *, code: ErrorCode = ErrorCode.VALIDATION_ERROR, details: dict | None = None, message: str | None = None) -> AppError:
    return AppError(code=code, reason=str(reason.value if isinstance(reason, ErrorReason) else reason), status_code=http_status.HTTP_400_BAD_REQUEST, details=details, message=message)


def not_found(reason: str = ErrorReason.RESOURCE_NOT_FOUND, *, details: dict | None = None, message: str | None = None) -> AppError:
    return AppError(code=ErrorCode.NOT_FOUND, reason=str(reason.value if isinstance(reason, ErrorReason) else reason), status_code=http_status.HTTP_404_NOT_FOUND, details=details, message=message)


def conflict(reason: str = ErrorReason.ALREADY_EXISTS, *, details: dict | None = None, message: str | None = None) -> AppError:
    return AppError(code=ErrorCode.CONFLICT, reason=str(reason.value if isinstance(reason, ErrorReason) else reason), status_code=http_status.HTTP_409_CONFLICT, details=details, message=message)
