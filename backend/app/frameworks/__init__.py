"""
frameworks package
- Purpose: Turn a raw spreadsheet grid into a normalized competency framework.
- Flow: header.find_header_row -> classify.detect_sheet_format (or
  infer_sheet_format) -> extractors.get_extractor -> ParsedCompetencyFramework.
"""

from app.frameworks.parse import parse_grid

__all__ = ["parse_grid"]
