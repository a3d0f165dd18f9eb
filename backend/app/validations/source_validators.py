"""
source_validators.py
- Purpose: Validations for competency framework source registration.
- Design: Normalize + validate at the boundary, keep services clean.
"""

import re

from app.core import AppError, ErrorCode, ErrorReason

_SHEET_URL_RE = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")
_BARE_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{20,}$")
_GID_RE = re.compile(r"[#?&]gid=(\d+)")


def extract_spreadsheet_id(url_or_id: str) -> str:
    """
    Accepts a full Google Sheets URL (any of the /edit, /view, /export forms)
    or an already-extracted document id.
    """
    value = (url_or_id or "").strip()
    m = _SHEET_URL_RE.search(value)
    if m:
        return m.group(1)
    if _BARE_ID_RE.match(value):
        return value
    raise AppError(
        code=ErrorCode.INVALID_SHEET_URL,
        reason=ErrorReason.INVALID_INPUT.value,
        message="Not a Google Sheets URL or document id",
        status_code=422,
        details={"sheet_url": value[:200]},
    )


def extract_gid(url: str) -> str | None:
    m = _GID_RE.search(url or "")
    return m.group(1) if m else None


def validate_source_name(name: str) -> str:
    n = (name or "").strip()
    if len(n) < 2 or len(n) > 100:
        raise AppError(
            code=ErrorCode.VALIDATION_ERROR,
            reason=ErrorReason.INVALID_INPUT.value,
            message="Source name must be 2-100 characters",
            status_code=422,
        )
    return n
