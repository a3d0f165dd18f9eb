"""
extractors/registry.py
- Purpose: SheetFormatType -> extractor. Adding a layout is one entry here.
"""

from __future__ import annotations

from app.constants.statuses import SheetFormatType
from app.frameworks.extractors.ai_behavioral import extract_ai_behavioral
from app.frameworks.extractors.base import Extractor
from app.frameworks.extractors.extended import extract_extended_5_level
from app.frameworks.extractors.standard import extract_standard_4_level

EXTRACTORS: dict[SheetFormatType, Extractor] = {
    SheetFormatType.STANDARD_4_LEVEL: extract_standard_4_level,
    SheetFormatType.EXTENDED_5_LEVEL: extract_extended_5_level,
    SheetFormatType.AI_BEHAVIORAL: extract_ai_behavioral,
}


def get_extractor(format_type: SheetFormatType) -> Extractor:
    try:
        return EXTRACTORS[SheetFormatType(format_type)]
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unsupported format type: {format_type}") from e
