import pytest

from app.constants.statuses import FormatDetection, FrameworkType, SheetFormatType
from app.frameworks.errors import EmptySheetError, ExtractionMismatchError
from app.frameworks.extractors import (
    EXTRACTORS,
    extract_ai_behavioral,
    extract_extended_5_level,
    extract_standard_4_level,
    get_extractor,
    split_behavioral_indicators,
)
from app.frameworks.grouping import GroupingState
from app.frameworks.header import find_header_row
from app.frameworks.parse import parse_grid
from app.schemas.framework_schema import ParsedSubCompetency, SheetMetadata
from app.sheets.types import to_rows

from conftest import AI_HEADER, AI_ROWS, STANDARD_HEADER, STANDARD_ROWS, VALUES_HEADER, VALUES_ROWS


def _extract(extractor, format_type, grid):
    rows = to_rows(grid)
    return extractor(rows, format_type, find_header_row(rows))


def _grouping(cores):
    return [(c.name, c.function_area, [s.name for s in c.sub_competencies]) for c in cores]


def _metadata():
    return SheetMetadata(
        type=FrameworkType.DEPARTMENT,
        name="Engineering",
        department="Engineering",
        sheet_url="https://docs.google.com/spreadsheets/d/abc/edit",
        sheet_id="abc",
    )


def _fill_down(rows, columns):
    out, last = [], {}
    for row in rows:
        row = list(row)
        for col in columns:
            if row[col]:
                last[col] = row[col]
            else:
                row[col] = last.get(col, "")
        out.append(row)
    return out


# ----------------------------
# STANDARD_4_LEVEL
# ----------------------------
def test_standard_single_row_round_trip():
    grid = [STANDARD_HEADER, ["Eng", "Obj1", "CoreA", "Sub1", "B-text", "I-text", "P-text", "A-text"]]
    cores = _extract(extract_standard_4_level, SheetFormatType.STANDARD_4_LEVEL, grid)

    assert len(cores) == 1
    core = cores[0]
    assert core.name == "CoreA"
    assert core.description == "Obj1"
    assert core.function_area == "Eng"
    assert [s.name for s in core.sub_competencies] == ["Sub1"]
    levels = core.sub_competencies[0].levels
    assert [(lvl.level, lvl.name, lvl.description) for lvl in levels] == [
        (1, "Basic", "B-text"),
        (2, "Intermediate", "I-text"),
        (3, "Proficient", "P-text"),
        (4, "Advanced", "A-text"),
    ]


def test_standard_carry_forward_groups_rows():
    cores = _extract(extract_standard_4_level, SheetFormatType.STANDARD_4_LEVEL, [STANDARD_HEADER, *STANDARD_ROWS])
    assert _grouping(cores) == [
        ("Code Quality", "Engineering", ["Testing", "Reviews"]),
        ("Delivery", "Engineering", ["Planning"]),
        ("Research", "Design", ["Interviews"]),
    ]


def test_standard_carry_forward_equals_repeated_columns():
    blank = _extract(extract_standard_4_level, SheetFormatType.STANDARD_4_LEVEL, [STANDARD_HEADER, *STANDARD_ROWS])
    repeated = _extract(
        extract_standard_4_level,
        SheetFormatType.STANDARD_4_LEVEL,
        [STANDARD_HEADER, *_fill_down(STANDARD_ROWS, [0, 2])],
    )
    assert _grouping(blank) == _grouping(repeated)


def test_core_without_subs_is_dropped():
    grid = [
        STANDARD_HEADER,
        ["Eng", "Obj", "Orphan", "", "", "", "", ""],
        [],
        STANDARD_HEADER,
        ["", "", "CoreB", "Sub1", "b", "", "", ""],
    ]
    cores = _extract(extract_standard_4_level, SheetFormatType.STANDARD_4_LEVEL, grid)
    assert [c.name for c in cores] == ["CoreB"]
    assert all(c.sub_competencies for c in cores)


def test_empty_level_descriptions_are_skipped():
    grid = [STANDARD_HEADER, ["Eng", "Obj", "Core", "Sub", "b", "   ", "", "a"]]
    sub = _extract(extract_standard_4_level, SheetFormatType.STANDARD_4_LEVEL, grid)[0].sub_competencies[0]
    assert [lvl.name for lvl in sub.levels] == ["Basic", "Advanced"]
    assert all(lvl.description.strip() for lvl in sub.levels)


def test_columns_follow_header_order():
    header = ["Core Competency", "Sub Competency", "Function", "Function Objective",
              "Basic", "Intermediate", "Proficient", "Advanced"]
    grid = [header, ["CoreA", "Sub1", "Eng", "Obj1", "b", "i", "p", "a"]]
    core = _extract(extract_standard_4_level, SheetFormatType.STANDARD_4_LEVEL, grid)[0]
    assert (core.name, core.function_area, core.description) == ("CoreA", "Eng", "Obj1")
    assert core.sub_competencies[0].name == "Sub1"


def test_missing_objective_column_does_not_shift_columns():
    header = ["Function", "Core Competency", "Sub Competency", "Basic", "Intermediate", "Proficient", "Advanced"]
    grid = [header, ["Eng", "CoreA", "Sub1", "b", "i", "p", "a"]]
    cores = _extract(extract_standard_4_level, SheetFormatType.STANDARD_4_LEVEL, grid)

    assert _grouping(cores) == [("CoreA", "Eng", ["Sub1"])]
    assert cores[0].description is None
    sub = cores[0].sub_competencies[0]
    assert [(lvl.name, lvl.description) for lvl in sub.levels] == [
        ("Basic", "b"),
        ("Intermediate", "i"),
        ("Proficient", "p"),
        ("Advanced", "a"),
    ]


def test_missing_value_definition_column_does_not_shift_columns():
    header = ["Value", "Competency", "Definition", "Basic", "Intermediate", "Proficient", "Advanced", "Expert"]
    grid = [header, ["Ownership", "Accountability", "Follows through", "b", "i", "p", "a", "e"]]
    cores = _extract(extract_extended_5_level, SheetFormatType.EXTENDED_5_LEVEL, grid)

    assert _grouping(cores) == [("Ownership", "Ownership", ["Accountability"])]
    assert cores[0].description is None
    sub = cores[0].sub_competencies[0]
    assert sub.description == "Follows through"
    assert [lvl.description for lvl in sub.levels] == ["b", "i", "p", "a", "e"]


def test_extractor_rejects_other_format():
    with pytest.raises(ExtractionMismatchError):
        _extract(extract_standard_4_level, SheetFormatType.AI_BEHAVIORAL, [STANDARD_HEADER, *STANDARD_ROWS])


def test_header_only_grid_is_empty():
    with pytest.raises(EmptySheetError):
        _extract(extract_standard_4_level, SheetFormatType.STANDARD_4_LEVEL, [STANDARD_HEADER, [], []])


# ----------------------------
# EXTENDED_5_LEVEL
# ----------------------------
def test_values_layout_uses_value_as_core_and_area():
    cores = _extract(extract_extended_5_level, SheetFormatType.EXTENDED_5_LEVEL, [VALUES_HEADER, *VALUES_ROWS])

    assert _grouping(cores) == [
        ("Ownership", "Ownership", ["Accountability", "Initiative"]),
        ("Candor", "Candor", ["Feedback"]),
    ]
    ownership = cores[0]
    assert ownership.description == "We act like owners"
    assert ownership.category == "Company Values"

    accountability, initiative = ownership.sub_competencies
    assert accountability.description == "Follows through on commitments"
    assert [lvl.level for lvl in accountability.levels] == [1, 2, 3, 4, 5]
    assert accountability.levels[-1].name == "Expert"
    # no expert text on this row
    assert [lvl.level for lvl in initiative.levels] == [1, 2, 3, 4]


def test_values_carry_forward_equals_repeated_columns():
    blank = _extract(extract_extended_5_level, SheetFormatType.EXTENDED_5_LEVEL, [VALUES_HEADER, *VALUES_ROWS])
    repeated = _extract(
        extract_extended_5_level,
        SheetFormatType.EXTENDED_5_LEVEL,
        [VALUES_HEADER, *_fill_down(VALUES_ROWS, [0, 1])],
    )
    assert _grouping(blank) == _grouping(repeated)


def test_five_level_matrix_layout():
    header = STANDARD_HEADER + ["Expert"]
    grid = [header, ["Eng", "Obj", "Core", "Sub", "b", "i", "p", "a", "e"]]
    cores = _extract(extract_extended_5_level, SheetFormatType.EXTENDED_5_LEVEL, grid)
    assert _grouping(cores) == [("Core", "Eng", ["Sub"])]
    assert [lvl.description for lvl in cores[0].sub_competencies[0].levels] == ["b", "i", "p", "a", "e"]
    assert cores[0].category is None


# ----------------------------
# AI_BEHAVIORAL
# ----------------------------
def test_ai_rows_are_independent_cores():
    cores = _extract(extract_ai_behavioral, SheetFormatType.AI_BEHAVIORAL, [AI_HEADER, *AI_ROWS])

    assert [(c.name, [s.name for s in c.sub_competencies]) for c in cores] == [
        ("Prompting", ["Prompting"]),
        ("Tool Selection", ["Tool Selection"]),
    ]
    assert all(c.category == "AI Competencies" for c in cores)


def test_ai_indicators_split_per_level():
    cores = _extract(extract_ai_behavioral, SheetFormatType.AI_BEHAVIORAL, [AI_HEADER, *AI_ROWS])
    prompting = cores[0].sub_competencies[0]

    assert prompting.has_behavioral_indicators is True
    assert [lvl.level for lvl in prompting.levels] == [0, 1, 2, 3, 4]
    assert prompting.levels[0].name == "Unacceptable"

    by_level = {b.level: b.indicators for b in prompting.behavioral_indicators}
    assert by_level[0] == ["Copies prompts blindly"]
    assert by_level[1] == ["Writes clear prompts", "Iterates on output"]
    assert by_level[2] == ["Chains prompts", "Adds context"]
    assert by_level[4] == ["Teaches prompting to others"]

    tool = cores[1].sub_competencies[0]
    assert [lvl.level for lvl in tool.levels] == [1]
    assert [(b.level, b.indicators) for b in tool.behavioral_indicators] == [(1, ["Uses approved tools"])]


def test_ai_repeated_name_rows_are_not_merged():
    grid = [AI_HEADER, ["Prompting", "", "x", "", "", ""], ["Prompting", "", "y", "", "", ""]]
    cores = _extract(extract_ai_behavioral, SheetFormatType.AI_BEHAVIORAL, grid)
    assert len(cores) == 2


def test_ai_row_without_indicators():
    grid = [AI_HEADER, ["Prompting", "", "", "", "", ""]]
    sub = _extract(extract_ai_behavioral, SheetFormatType.AI_BEHAVIORAL, grid)[0].sub_competencies[0]
    assert sub.levels == []
    assert sub.has_behavioral_indicators is False
    assert sub.behavioral_indicators is None


@pytest.mark.parametrize(
    "unacceptable, basic",
    [
        ("0. Unacceptable\n• copies blindly", "1. Basic\n☑ checks output"),
        ("0. Unacceptable\ncopies blindly", "1. Basic\nchecks output"),
    ],
)
def test_ai_cells_opening_with_level_echo_are_data(unacceptable, basic):
    grid = [AI_HEADER, ["Prompting", unacceptable, basic, "", "", ""]]
    cores = _extract(extract_ai_behavioral, SheetFormatType.AI_BEHAVIORAL, grid)

    assert [c.name for c in cores] == ["Prompting"]
    sub = cores[0].sub_competencies[0]
    assert [(b.level, b.indicators) for b in sub.behavioral_indicators] == [
        (0, ["copies blindly"]),
        (1, ["checks output"]),
    ]


@pytest.mark.parametrize(
    "cell, expected",
    [
        ("• one\n• two", ["one", "two"]),
        ("Basic:\n- drafts with help", ["- drafts with help"]),
        ("1. Basic\n☑ checks output", ["checks output"]),
        ("Level 2\n▪ shares prompts  widely", ["shares prompts widely"]),
        ("", []),
        (None, []),
    ],
)
def test_split_behavioral_indicators(cell, expected):
    assert split_behavioral_indicators(cell) == expected


def test_split_is_idempotent():
    for indicator in split_behavioral_indicators("• Writes clear prompts\n☐ Adds context\n◦ Reviews output"):
        assert split_behavioral_indicators(indicator) == [indicator]


# ----------------------------
# Registry + parse_grid
# ----------------------------
def test_registry_covers_every_format():
    assert set(EXTRACTORS) == set(SheetFormatType)
    assert get_extractor(SheetFormatType.AI_BEHAVIORAL) is extract_ai_behavioral
    with pytest.raises(ValueError):
        get_extractor("CSV")


def test_parse_grid_with_header():
    fw = parse_grid(to_rows([["Engineering Framework"], STANDARD_HEADER, *STANDARD_ROWS]), _metadata())
    assert fw.format_type == SheetFormatType.STANDARD_4_LEVEL
    assert fw.format_detection == FormatDetection.HEADER
    assert fw.header_row_index == 1
    assert fw.level_names == ["Basic", "Intermediate", "Proficient", "Advanced"]
    assert (fw.min_level, fw.max_level) == (1, 4)
    assert fw.record_count == 7


def test_parse_grid_ai_bounds():
    fw = parse_grid(to_rows([AI_HEADER, *AI_ROWS]), _metadata())
    assert fw.format_type == SheetFormatType.AI_BEHAVIORAL
    assert (fw.min_level, fw.max_level) == (0, 4)
    assert fw.level_names[0] == "Unacceptable"


def test_parse_grid_without_header_is_inferred():
    rows = to_rows([["Eng", "Obj", "Core", "Sub", "b", "i"]])
    fw = parse_grid(rows, _metadata())
    assert fw.format_detection == FormatDetection.INFERRED
    assert fw.header_row_index is None
    assert fw.format_type == SheetFormatType.STANDARD_4_LEVEL
    assert _grouping(fw.core_competencies) == [("Core", "Eng", ["Sub"])]


def test_parse_grid_empty_sheet():
    with pytest.raises(EmptySheetError):
        parse_grid([], _metadata())
    with pytest.raises(EmptySheetError):
        parse_grid(to_rows([[], ["", "  "]]), _metadata())


# ----------------------------
# Grouping accumulator
# ----------------------------
def test_grouping_state_flushes_only_non_empty_cores():
    state = GroupingState()
    state.carry_label("Eng")
    state.open_core("A")
    state.open_core("B")
    state.add_sub(ParsedSubCompetency(name="b1"))
    state.carry_label("")
    state.open_core("B")
    state.add_sub(ParsedSubCompetency(name="b2"))
    cores = state.finish()

    assert [(c.name, c.function_area, [s.name for s in c.sub_competencies]) for c in cores] == [
        ("B", "Eng", ["b1", "b2"]),
    ]


def test_grouping_state_drops_sub_without_core():
    state = GroupingState()
    assert state.add_sub(ParsedSubCompetency(name="stray")) is False
    assert state.finish() == []
