from datetime import date

import pytest

from aquador_attendance.common.validators import optional_iso_date, parse_mode, require_iso_date, require_non_empty
from aquador_attendance.core.enums import AttendanceMode
from aquador_attendance.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  kid-1 ", "profile_id") == "kid-1"
    with pytest.raises(ValidationError):
        require_non_empty("   ", "profile_id")


@pytest.mark.parametrize("value", [None, "", "  "])
def test_missing_date_is_none(value):
    assert optional_iso_date(value) is None


@pytest.mark.parametrize("value", ["07/03/2026", "2026-3-7", "2026-02-30", 20260307])
def test_malformed_date_is_rejected(value):
    with pytest.raises(ValidationError):
        optional_iso_date(value, "selected_date")


def test_require_iso_date():
    assert require_iso_date("2026-03-07", "attended_on") == date(2026, 3, 7)
    with pytest.raises(ValidationError):
        require_iso_date(None, "attended_on")


def test_parse_mode():
    assert parse_mode(None) == AttendanceMode.TOGGLE
    assert parse_mode("Check-Out") == AttendanceMode.CHECK_OUT
    with pytest.raises(ValidationError):
        parse_mode("teleport")
