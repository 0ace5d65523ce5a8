from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector

from .connection import DatabaseConnection
from .errors import translate_mysql_error


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise translate_mysql_error(e) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def normalize_mysql_time(value: Any) -> Optional[time]:
    """`sessions.start_time` comes back as timedelta (C extension) or str (pure)."""

    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return (datetime.min + timedelta(seconds=seconds)).time()

    if isinstance(value, str):
        hours, minutes, *rest = value.strip().split(":")
        return time(int(hours), int(minutes), int(rest[0]) if rest and rest[0] else 0)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
