from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Profile
from .repository import ProfileRepository


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT profile_id, full_name, role, is_active, parent_id
                FROM profiles
                WHERE profile_id=%s
                """,
                (profile_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Profile(
                profile_id=str(row["profile_id"]),
                full_name=row.get("full_name"),
                role=Role.parse(row.get("role")),
                is_active=bool(row.get("is_active", True)),
                parent_id=str(row["parent_id"]) if row.get("parent_id") else None,
            )
