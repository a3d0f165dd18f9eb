"""
levels.py
- Purpose: Level names and numeric bounds per sheet format.
- Design: One LevelScale per format; extractors and scoring read from here.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.constants.statuses import SheetFormatType

LEVEL_KEYWORDS = ("unacceptable", "basic", "intermediate", "proficient", "advanced", "expert")


@dataclass(frozen=True)
class LevelScale:
    names: tuple[str, ...]
    min_level: int

    @property
    def max_level(self) -> int:
        return self.min_level + len(self.names) - 1

    def number(self, position: int) -> int:
        """Numeric level for the n-th level column (0-based position)."""
        return self.min_level + position


LEVEL_SCALES: dict[SheetFormatType, LevelScale] = {
    SheetFormatType.STANDARD_4_LEVEL: LevelScale(
        names=("Basic", "Intermediate", "Proficient", "Advanced"),
        min_level=1,
    ),
    SheetFormatType.EXTENDED_5_LEVEL: LevelScale(
        names=("Basic", "Intermediate", "Proficient", "Advanced", "Expert"),
        min_level=1,
    ),
    # 0 = Unacceptable
    SheetFormatType.AI_BEHAVIORAL: LevelScale(
        names=("Unacceptable", "Basic", "Intermediate", "Proficient", "Advanced"),
        min_level=0,
    ),
}


def get_level_scale(format_type: SheetFormatType) -> LevelScale:
    try:
        return LEVEL_SCALES[SheetFormatType(format_type)]
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown format type: {format_type}") from e


def calculate_normalized_score(raw_level: int, format_type: SheetFormatType) -> int:
    """Map a raw level on the format's scale to 0-100 (clamped)."""
    scale = get_level_scale(format_type)
    span = scale.max_level - scale.min_level
    clamped = min(max(raw_level, scale.min_level), scale.max_level)
    return round((clamped - scale.min_level) / span * 100)


def level_score_map(format_type: SheetFormatType) -> dict[str, int]:
    """Normalized score per level, keyed like stored level descriptions ("1", "2", ...)."""
    scale = get_level_scale(format_type)
    return {
        str(level): calculate_normalized_score(level, format_type)
        for level in range(scale.min_level, scale.max_level + 1)
    }
