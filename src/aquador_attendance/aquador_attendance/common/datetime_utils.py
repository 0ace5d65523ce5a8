from __future__ import annotations

import calendar
from datetime import date, datetime, time, tzinfo
from typing import Optional

import pytz


def get_timezone(name: str) -> tzinfo:
    return pytz.timezone(name)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def utc_now() -> datetime:
    """Current instant, timezone-aware.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.utc)


def now_local(tz: tzinfo, *, now: Optional[datetime] = None) -> datetime:
    return (now or utc_now()).astimezone(tz)


def today_local(tz: tzinfo, *, now: Optional[datetime] = None) -> date:
    return now_local(tz, now=now).date()


def localize(day: date, at: time, tz: tzinfo) -> datetime:
    """Wall-clock `day at` in `tz` as an aware datetime (DST-safe with pytz)."""
    naive = datetime.combine(day, at.replace(tzinfo=None))
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def month_bounds(day: date) -> tuple[date, date]:
    """First and last calendar day of `day`'s month."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def to_db_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetime -> naive UTC for DATETIME columns."""
    if value is None:
        return None
    if value.tzinfo is None:
        raise ValueError("naive datetimes are not accepted, attach a timezone first")
    return value.astimezone(pytz.utc).replace(tzinfo=None)


def from_db_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is not None:
        return value.astimezone(pytz.utc)
    return pytz.utc.localize(value)
