from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import from_db_utc, to_db_utc
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import StaffAttendanceRecord
from .repository import StaffAttendanceRepository

_SELECT_RECORD = """
    SELECT staff_attendance_id, profile_id, attended_on, status, check_in_time, check_out_time
    FROM staff_attendance
    WHERE profile_id=%s AND attended_on=%s
"""


def _to_record(r: dict) -> StaffAttendanceRecord:
    return StaffAttendanceRecord(
        staff_attendance_id=int(r["staff_attendance_id"]),
        profile_id=str(r["profile_id"]),
        attended_on=r["attended_on"],
        status=AttendanceStatus(r["status"]),
        check_in_time=from_db_utc(r.get("check_in_time")),
        check_out_time=from_db_utc(r.get("check_out_time")),
    )


class MySQLStaffAttendanceRepository(StaffAttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_profile_and_date(self, profile_id: str, attended_on: date) -> Optional[StaffAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_RECORD, (profile_id, attended_on))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(
        self,
        *,
        profile_id: str,
        attended_on: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
    ) -> StaffAttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_attendance(profile_id, attended_on, status, check_in_time, check_out_time)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time)
                """,
                (profile_id, attended_on, status.value, to_db_utc(check_in_time), to_db_utc(check_out_time)),
            )
            cur.execute(_SELECT_RECORD, (profile_id, attended_on))
            return _to_record(fetchone(cur))
