from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceAction, AttendanceState, AttendanceStatus


@dataclass(frozen=True)
class StaffAttendanceRecord:
    """Domain entity: one staff member's arrival/departure for a day."""

    staff_attendance_id: int
    profile_id: str
    attended_on: date
    status: AttendanceStatus
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]

    @property
    def state(self) -> AttendanceState:
        if self.check_out_time is not None:
            return AttendanceState.CHECKED_OUT
        if self.check_in_time is not None:
            return AttendanceState.CHECKED_IN
        return AttendanceState.NONE


@dataclass(frozen=True)
class StaffAttendanceOutcome:
    message: str
    action: AttendanceAction
    warning: bool = False
    record: Optional[StaffAttendanceRecord] = None
