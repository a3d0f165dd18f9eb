import pytest

from app.core import AppError, ErrorCode
from app.validations.source_validators import extract_gid, extract_spreadsheet_id, validate_source_name

SHEET_ID = "1AbCdEfGhIjKlMnOpQrStUvWxYz_0123456789-xy"


@pytest.mark.parametrize(
    "value",
    [
        f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit#gid=0",
        f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit?usp=sharing",
        f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/export?format=csv",
        f"  {SHEET_ID}  ",
    ],
)
def test_extract_spreadsheet_id(value):
    assert extract_spreadsheet_id(value) == SHEET_ID


@pytest.mark.parametrize("value", ["", "https://example.com/sheet", "short-id"])
def test_extract_spreadsheet_id_rejects(value):
    with pytest.raises(AppError) as exc:
        extract_spreadsheet_id(value)
    assert exc.value.code == ErrorCode.INVALID_SHEET_URL
    assert exc.value.status_code == 422


def test_extract_gid():
    assert extract_gid(f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit#gid=1234") == "1234"
    assert extract_gid(f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit?gid=55&usp=sharing") == "55"
    assert extract_gid(f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit") is None


def test_validate_source_name():
    assert validate_source_name("  Engineering ") == "Engineering"
    with pytest.raises(AppError):
        validate_source_name("x")
    with pytest.raises(AppError):
        validate_source_name("x" * 101)
