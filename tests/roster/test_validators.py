import pytest

from src.attendance_book.attendance_book.common.validators import (
    format_phone,
    normalize_full_name,
    normalize_group,
    require_email,
    require_late_minutes,
)
from src.attendance_book.attendance_book.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("901234567", "+998 90 123-45-67"),
        ("+998 (90) 123 45 67", "+998 90 123-45-67"),
        ("90", "+998 90"),
        ("9012", "+998 90 12"),
        ("99890123456789", "+998 90 123-45-67"),
    ],
)
def test_format_phone(raw, expected):
    assert format_phone(raw) == expected


def test_name_and_group_normalization():
    assert normalize_full_name("  aLI   VALIYEV ") == "Ali Valiyev"
    assert normalize_group("  FRONTEND-1 ") == "Frontend-1"


def test_email_is_lowercased_and_checked():
    assert require_email(" Me@Example.COM ") == "me@example.com"
    with pytest.raises(ValidationError):
        require_email("not-an-email")


def test_late_minutes_must_be_non_negative_int():
    assert require_late_minutes("5") == 5
    with pytest.raises(ValidationError):
        require_late_minutes(-1)
    with pytest.raises(ValidationError):
        require_late_minutes("x")
