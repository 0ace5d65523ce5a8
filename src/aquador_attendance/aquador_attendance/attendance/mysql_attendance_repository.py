from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import from_db_utc, to_db_utc
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_SELECT_RECORD = """
    SELECT attendance_id, enrollment_id, attended_on, status, check_in_time, check_out_time, full_name
    FROM attendance
    WHERE enrollment_id=%s AND attended_on=%s
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        enrollment_id=int(r["enrollment_id"]),
        attended_on=r["attended_on"],
        status=AttendanceStatus(r["status"]),
        check_in_time=from_db_utc(r.get("check_in_time")),
        check_out_time=from_db_utc(r.get("check_out_time")),
        full_name=r.get("full_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_enrollment_and_date(self, enrollment_id: int, attended_on: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_RECORD, (int(enrollment_id), attended_on))
            r = fetchone(cur)
            return _to_record(r) if r else None

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
        # UNIQUE(enrollment_id, attended_on) turns concurrent writers into updates of one row.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(enrollment_id, attended_on, status, check_in_time, check_out_time, full_name)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time),
                    full_name=COALESCE(VALUES(full_name), full_name)
                """,
                (
                    int(enrollment_id),
                    attended_on,
                    status.value,
                    to_db_utc(check_in_time),
                    to_db_utc(check_out_time),
                    full_name,
                ),
            )
            cur.execute(_SELECT_RECORD, (int(enrollment_id), attended_on))
            return _to_record(fetchone(cur))

    def clear_checkout(self, *, enrollment_id: int, attended_on: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=NULL
                WHERE enrollment_id=%s AND attended_on=%s AND check_out_time IS NOT NULL
                """,
                (int(enrollment_id), attended_on),
            )
            return cur.rowcount > 0

    def delete_for_enrollment_and_date(self, *, enrollment_id: int, attended_on: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE enrollment_id=%s AND attended_on=%s",
                (int(enrollment_id), attended_on),
            )
            return cur.rowcount > 0

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        profile_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["a.attended_on BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if profile_id is not None:
            clauses.append("e.profile_id=%s")
            params.append(profile_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.attended_on, a.enrollment_id, e.profile_id,
                    COALESCE(p.full_name, a.full_name) AS full_name,
                    e.session_group, a.status, a.check_in_time, a.check_out_time
                FROM attendance a
                JOIN enrollments e ON e.enrollment_id = a.enrollment_id
                LEFT JOIN profiles p ON p.profile_id = e.profile_id
                WHERE {where}
                ORDER BY a.attended_on DESC, full_name ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    attended_on=r["attended_on"],
                    enrollment_id=int(r["enrollment_id"]),
                    profile_id=str(r["profile_id"]),
                    full_name=r.get("full_name"),
                    session_group=str(r["session_group"]),
                    status=AttendanceStatus(r["status"]),
                    check_in_time=from_db_utc(r.get("check_in_time")),
                    check_out_time=from_db_utc(r.get("check_out_time")),
                )
                for r in rows
            ]
