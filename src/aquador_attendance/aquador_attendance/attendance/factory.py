from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from ..core.constants import PUNCTUALITY_GRACE_MINUTES
from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


def elapsed_minutes(*, now: datetime, session_start: datetime) -> int:
    """Whole minutes since session start (floored, negative when early)."""
    return math.floor((now - session_start).total_seconds() / 60)


def classify_punctuality(
    *, now: datetime, session_start: datetime, grace_minutes: int = PUNCTUALITY_GRACE_MINUTES
) -> AttendanceStatus:
    if elapsed_minutes(now=now, session_start=session_start) <= grace_minutes:
        return AttendanceStatus.PRESENT
    return AttendanceStatus.LATE


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(
        self, *, now: datetime, session_start: datetime, grace_minutes: int = PUNCTUALITY_GRACE_MINUTES
    ) -> AttendanceStrategy:
        status = classify_punctuality(now=now, session_start=session_start, grace_minutes=grace_minutes)
        if status == AttendanceStatus.PRESENT:
            return PresentStrategy()
        return LateStrategy()
