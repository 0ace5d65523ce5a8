from datetime import date, datetime, time

import pytest
import pytz

from aquador_attendance.common.datetime_utils import (
    from_db_utc,
    get_timezone,
    localize,
    month_bounds,
    to_db_utc,
    today_local,
)

TZ = get_timezone("America/Port-au-Prince")


def test_today_local_follows_school_timezone():
    # 02:00 UTC on the 8th is still the evening of the 7th in Haiti.
    now = datetime(2026, 3, 8, 2, 0, tzinfo=pytz.utc)

    assert today_local(TZ, now=now) == date(2026, 3, 7)


def test_localize_handles_daylight_saving():
    winter = localize(date(2026, 1, 10), time(9, 0), TZ)
    summer = localize(date(2026, 7, 11), time(9, 0), TZ)

    assert winter.utcoffset().total_seconds() == -5 * 3600
    assert summer.utcoffset().total_seconds() == -4 * 3600


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2026, 2, 14), (date(2026, 2, 1), date(2026, 2, 28))),
        (date(2028, 2, 29), (date(2028, 2, 1), date(2028, 2, 29))),
        (date(2026, 12, 31), (date(2026, 12, 1), date(2026, 12, 31))),
    ],
)
def test_month_bounds(day, expected):
    assert month_bounds(day) == expected


def test_db_round_trip_is_naive_utc():
    local = localize(date(2026, 3, 7), time(9, 15), TZ)

    stored = to_db_utc(local)

    assert stored == datetime(2026, 3, 7, 14, 15)
    assert stored.tzinfo is None
    assert from_db_utc(stored) == local


def test_naive_datetimes_are_refused():
    with pytest.raises(ValueError):
        to_db_utc(datetime(2026, 3, 7, 9, 0))
