from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from ..core.enums import InvoiceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_decimal
from .model import Invoice
from .repository import InvoiceRepository


class MySQLInvoiceRepository(InvoiceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_issued_between(self, *, user_id: str, start: date, end: date) -> Sequence[Invoice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT invoice_id, user_id, total, paid_total, issued_at, status
                FROM invoices
                WHERE user_id=%s AND issued_at BETWEEN %s AND %s
                ORDER BY issued_at ASC, invoice_id ASC
                """,
                (user_id, start, end),
            )
            out: list[Invoice] = []
            for r in fetchall(cur):
                issued_at = r["issued_at"]
                if isinstance(issued_at, datetime):
                    issued_at = issued_at.date()
                out.append(
                    Invoice(
                        invoice_id=int(r["invoice_id"]),
                        user_id=str(r["user_id"]),
                        total=to_decimal(r.get("total")),
                        paid_total=to_decimal(r.get("paid_total")),
                        issued_at=issued_at,
                        status=InvoiceStatus.parse(r.get("status")),
                    )
                )
            return out
