from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from ..core.enums import AttendanceStatus
from .model import StaffAttendanceRecord


class StaffAttendanceRepository(Protocol):
    def get_for_profile_and_date(self, profile_id: str, attended_on: date) -> Optional[StaffAttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        profile_id: str,
        attended_on: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
    ) -> StaffAttendanceRecord:
        raise NotImplementedError
