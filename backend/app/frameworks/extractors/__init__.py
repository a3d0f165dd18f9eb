from app.frameworks.extractors.ai_behavioral import extract_ai_behavioral, split_behavioral_indicators
from app.frameworks.extractors.extended import extract_extended_5_level
from app.frameworks.extractors.registry import EXTRACTORS, get_extractor
from app.frameworks.extractors.standard import extract_standard_4_level

__all__ = [
    "EXTRACTORS",
    "get_extractor",
    "extract_standard_4_level",
    "extract_extended_5_level",
    "extract_ai_behavioral",
    "split_behavioral_indicators",
]
