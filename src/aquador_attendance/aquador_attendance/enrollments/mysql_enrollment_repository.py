from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EnrollmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Enrollment
from .repository import EnrollmentRepository


def _to_enrollment(r: dict) -> Enrollment:
    return Enrollment(
        enrollment_id=int(r["enrollment_id"]),
        profile_id=str(r["profile_id"]),
        session_group=str(r["session_group"]),
        status=EnrollmentStatus(r["status"]),
        start_date=r["start_date"],
        end_date=r.get("end_date"),
    )


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_for_profile(self, profile_id: str) -> Sequence[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT enrollment_id, profile_id, session_group, status, start_date, end_date
                FROM enrollments
                WHERE profile_id=%s AND status=%s
                ORDER BY start_date ASC, enrollment_id ASC
                """,
                (profile_id, EnrollmentStatus.ACTIVE.value),
            )
            return [_to_enrollment(r) for r in fetchall(cur)]

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT enrollment_id, profile_id, session_group, status, start_date, end_date
                FROM enrollments
                WHERE enrollment_id=%s
                """,
                (int(enrollment_id),),
            )
            r = fetchone(cur)
            return _to_enrollment(r) if r else None
