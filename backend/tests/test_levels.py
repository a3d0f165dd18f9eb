import pytest

from app.constants.statuses import SheetFormatType
from app.frameworks.levels import calculate_normalized_score, get_level_scale, level_score_map


def test_scales():
    std = get_level_scale(SheetFormatType.STANDARD_4_LEVEL)
    ext = get_level_scale(SheetFormatType.EXTENDED_5_LEVEL)
    ai = get_level_scale(SheetFormatType.AI_BEHAVIORAL)

    assert (std.min_level, std.max_level) == (1, 4)
    assert (ext.min_level, ext.max_level) == (1, 5)
    assert ext.names[-1] == "Expert"
    assert (ai.min_level, ai.max_level) == (0, 4)
    assert ai.number(0) == 0 and ai.names[0] == "Unacceptable"


@pytest.mark.parametrize(
    "raw, fmt, expected",
    [
        (1, SheetFormatType.STANDARD_4_LEVEL, 0),
        (4, SheetFormatType.STANDARD_4_LEVEL, 100),
        (2, SheetFormatType.STANDARD_4_LEVEL, 33),
        (3, SheetFormatType.EXTENDED_5_LEVEL, 50),
        (0, SheetFormatType.AI_BEHAVIORAL, 0),
        (2, SheetFormatType.AI_BEHAVIORAL, 50),
        (9, SheetFormatType.STANDARD_4_LEVEL, 100),
        (-3, SheetFormatType.AI_BEHAVIORAL, 0),
    ],
)
def test_normalized_score(raw, fmt, expected):
    assert calculate_normalized_score(raw, fmt) == expected


def test_unknown_format():
    with pytest.raises(ValueError):
        get_level_scale("SIX_LEVEL")


def test_level_score_map_keys_match_stored_levels():
    assert level_score_map(SheetFormatType.AI_BEHAVIORAL) == {"0": 0, "1": 25, "2": 50, "3": 75, "4": 100}
    assert list(level_score_map(SheetFormatType.EXTENDED_5_LEVEL)) == ["1", "2", "3", "4", "5"]
