# app/auth/deps.py
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.jwt import ADMIN_ROLE, decode_access_token
from app.core.config import settings
from app.core import AppError, ErrorCode, ErrorReason

bearer = HTTPBearer(auto_error=False)


def require_admin_token(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> dict:
    """Guards every mutating /api/frameworks route (create, update, sync...)."""
    if not creds or creds.scheme.lower() != "bearer" or not creds.credentials:
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            reason=ErrorReason.AUTH_REQUIRED.value,
            message="Missing Authorization: Bearer token",
            status_code=401,
        )

    payload = decode_access_token(creds.credentials)

    if payload.get("sub") != settings.ADMIN_USERNAME or payload.get("role") != ADMIN_ROLE:
        raise AppError(
            code=ErrorCode.FORBIDDEN,
            reason=ErrorReason.AUTH_FORBIDDEN.value,
            message="Admin access required",
            status_code=403,
        )

    return payload
