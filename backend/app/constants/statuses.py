"""
statuses.py
- Purpose: Central source of truth for framework types, sheet formats and sync statuses.
- Design: str-valued enums so they persist as plain strings and serialize as-is.
"""

from enum import Enum


class FrameworkType(str, Enum):
    DEPARTMENT = "DEPARTMENT"
    AI = "AI"
    VALUES = "VALUES"


class SheetFormatType(str, Enum):
    STANDARD_4_LEVEL = "STANDARD_4_LEVEL"    # department matrices
    EXTENDED_5_LEVEL = "EXTENDED_5_LEVEL"    # 5-level matrices + company values
    AI_BEHAVIORAL = "AI_BEHAVIORAL"          # 0-4 scale with behavioral indicators


class FormatDetection(str, Enum):
    HEADER = "HEADER"        # classified from a located header row
    INFERRED = "INFERRED"    # no header found; best-effort guess from the first row


class SyncStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
