from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Arrived before the end of the grace period."""

    def decide_checkin(self, *, now: datetime, session_start: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
