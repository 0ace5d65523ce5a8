from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import ClassSession
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_for_group_on(self, *, session_group: str, on: date) -> Optional[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT session_id, session_group, start_date, start_time, duration_minutes, status
                FROM sessions
                WHERE session_group=%s AND start_date=%s AND status=%s
                """,
                (session_group, on, SessionStatus.ACTIVE.value),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ClassSession(
                session_id=int(r["session_id"]),
                session_group=str(r["session_group"]),
                start_date=r["start_date"],
                start_time=normalize_mysql_time(r.get("start_time")),
                duration_minutes=int(r.get("duration_minutes") or 0),
                status=SessionStatus(r["status"]),
            )

    def has_active_for_groups_on(self, *, session_groups: Sequence[str], on: date) -> bool:
        groups = list(dict.fromkeys(session_groups))
        if not groups:
            return False

        placeholders = ",".join(["%s"] * len(groups))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT 1 AS hit
                FROM sessions
                WHERE status=%s AND start_date=%s AND session_group IN ({placeholders})
                LIMIT 1
                """,
                (SessionStatus.ACTIVE.value, on, *groups),
            )
            return fetchone(cur) is not None
