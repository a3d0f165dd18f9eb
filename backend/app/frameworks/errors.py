# app/frameworks/errors.py
from __future__ import annotations

import json

from app.sheets.types import Row


class FrameworkParseError(Exception):
    """Base parse error. Terminal for the current sync attempt."""


class EmptySheetError(FrameworkParseError):
    """Grid has no data rows (before or after the header row)."""


class UnrecognizedFormatError(FrameworkParseError):
    """No known layout matches the row. Carries the row for diagnosis."""

    def __init__(self, row: Row):
        self.row = dict(row)
        cells = {str(k): v for k, v in sorted(self.row.items()) if v}
        super().__init__(f"Unrecognized sheet format. Row: {json.dumps(cells, ensure_ascii=False)[:500]}")


class ExtractionMismatchError(FrameworkParseError):
    """Extractor invoked for a format it does not handle."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {getattr(expected, 'value', expected)} format, got {getattr(actual, 'value', actual)}")
