from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_enrollment_and_date(self, enrollment_id: int, attended_on: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        enrollment_id: int,
        attended_on: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        full_name: Optional[str] = None,
    ) -> AttendanceRecord:
        """Insert or overwrite the (enrollment_id, attended_on) row.

        `full_name` is only written when given.
        """

        raise NotImplementedError

    def clear_checkout(self, *, enrollment_id: int, attended_on: date) -> bool:
        raise NotImplementedError

    def delete_for_enrollment_and_date(self, *, enrollment_id: int, attended_on: date) -> bool:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        profile_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
