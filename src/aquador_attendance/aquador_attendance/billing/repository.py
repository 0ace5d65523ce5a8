from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import Invoice


class InvoiceRepository(Protocol):
    def list_issued_between(self, *, user_id: str, start: date, end: date) -> Sequence[Invoice]:
        """Invoices of `user_id` with start <= issued_at <= end."""

        raise NotImplementedError
