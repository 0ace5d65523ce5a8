from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceAction, AttendanceState, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the single attendance row of one enrollment on one date.

    Timestamps are timezone-aware (UTC).
    """

    attendance_id: int
    enrollment_id: int
    attended_on: date
    status: AttendanceStatus
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    full_name: Optional[str] = None

    @property
    def state(self) -> AttendanceState:
        if self.check_out_time is not None:
            return AttendanceState.CHECKED_OUT
        if self.check_in_time is not None:
            return AttendanceState.CHECKED_IN
        if self.status == AttendanceStatus.ABSENT:
            return AttendanceState.ABSENT
        return AttendanceState.NONE


def state_of(record: Optional[AttendanceRecord]) -> AttendanceState:
    return record.state if record else AttendanceState.NONE


@dataclass(frozen=True)
class AttendanceOutcome:
    """Result of an attendance request, rendered as `{"message": ...}`."""

    message: str
    action: AttendanceAction
    warning: bool = False
    record: Optional[AttendanceRecord] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports (joined with enrollment and profile)."""

    attended_on: date
    enrollment_id: int
    profile_id: str
    full_name: Optional[str]
    session_group: str
    status: AttendanceStatus
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
