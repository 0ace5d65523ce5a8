from datetime import date, datetime, time, timedelta

import pytz

from aquador_attendance.attendance.factory import AttendanceStrategyFactory, classify_punctuality, elapsed_minutes
from aquador_attendance.attendance.strategies.late_strategy import LateStrategy
from aquador_attendance.attendance.strategies.present_strategy import PresentStrategy
from aquador_attendance.common.datetime_utils import localize
from aquador_attendance.core.enums import AttendanceStatus

TZ = pytz.timezone("America/Port-au-Prince")
DAY = date(2026, 3, 7)
START = localize(DAY, time(9, 0), TZ)


def test_checkin_at_0914_is_present():
    assert classify_punctuality(now=START + timedelta(minutes=14), session_start=START) == AttendanceStatus.PRESENT


def test_checkin_at_0916_is_late():
    assert classify_punctuality(now=START + timedelta(minutes=16), session_start=START) == AttendanceStatus.LATE


def test_exactly_fifteen_minutes_is_present_and_sixteen_is_late():
    assert classify_punctuality(now=START + timedelta(minutes=15), session_start=START) == AttendanceStatus.PRESENT
    assert classify_punctuality(now=START + timedelta(minutes=16), session_start=START) == AttendanceStatus.LATE


def test_partial_minutes_are_floored():
    now = START + timedelta(minutes=15, seconds=59)
    assert elapsed_minutes(now=now, session_start=START) == 15
    assert classify_punctuality(now=now, session_start=START) == AttendanceStatus.PRESENT


def test_arriving_before_start_is_present():
    assert classify_punctuality(now=START - timedelta(minutes=30), session_start=START) == AttendanceStatus.PRESENT


def test_comparison_is_timezone_aware():
    # 14:14 UTC == 09:14 in Port-au-Prince (UTC-5 on this date)
    now_utc = datetime(2026, 3, 7, 14, 14, tzinfo=pytz.utc)
    assert classify_punctuality(now=now_utc, session_start=START) == AttendanceStatus.PRESENT


def test_factory_picks_strategy_from_elapsed_time():
    factory = AttendanceStrategyFactory()

    on_time = factory.for_checkin(now=START + timedelta(minutes=4, seconds=59), session_start=START)
    late = factory.for_checkin(now=START + timedelta(minutes=6), session_start=START, grace_minutes=5)

    assert isinstance(on_time, PresentStrategy)
    assert isinstance(late, LateStrategy)
    assert late.decide_checkin(now=START, session_start=START).status == AttendanceStatus.LATE
