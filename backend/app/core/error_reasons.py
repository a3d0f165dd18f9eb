"""
error_reasons.py
- Purpose: Human-friendly "reason" strings.
- Keep these stable; they may be surfaced in the admin UI.
"""

from enum import Enum


class ErrorReason(str, Enum):
    UNKNOWN = "Unknown error"

    INVALID_INPUT = "Invalid input"
    RESOURCE_NOT_FOUND = "Resource not found"
    ALREADY_EXISTS = "Resource already exists"
    NOT_AUTHENTICATED = "Not authenticated"
    NOT_AUTHORIZED = "Not authorized"

    DATABASE_UNAVAILABLE = "Database unavailable"
    SHEET_UNAVAILABLE = "Spreadsheet unavailable"
    SYNC_FAILED = "Competency framework sync failed"
    INTERNAL_ERROR = "Internal server error"
    AUTH_REQUIRED = "Authentication required"
    AUTH_INVALID = "Invalid authentication"
    AUTH_FORBIDDEN = "Authentication forbidden"
