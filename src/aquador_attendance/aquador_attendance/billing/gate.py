from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..common.datetime_utils import month_bounds
from ..core.constants import BILLING_GRACE_LAST_DAY, BILLING_PARTIAL_FROM_DAY
from ..core.enums import InvoiceStanding
from ..core.exceptions import PaymentRequired
from .model import Invoice, classify_invoice
from .repository import InvoiceRepository

logger = logging.getLogger(__name__)

PAYMENT_REQUIRED_MESSAGE = "Merci de régler votre facture avant de pouvoir accéder au cours."


@dataclass(frozen=True)
class GateDecision:
    blocked: bool
    unpaid: bool = False
    partial: bool = False


class BillingGate:
    """Blocks attendance while the current month's invoices are overdue.

    Days 1..grace_last_day are free. After that, an unpaid invoice blocks; from
    partial_from_day on, a partially paid one blocks too.
    """

    def __init__(
        self,
        invoices: InvoiceRepository,
        *,
        grace_last_day: int = BILLING_GRACE_LAST_DAY,
        partial_from_day: int = BILLING_PARTIAL_FROM_DAY,
    ):
        if not 0 <= grace_last_day < partial_from_day:
            raise ValueError("grace_last_day must be lower than partial_from_day")
        self._invoices = invoices
        self._grace_last_day = int(grace_last_day)
        self._partial_from_day = int(partial_from_day)

    def evaluate(self, invoices: Iterable[Invoice], today: date) -> GateDecision:
        standings = {classify_invoice(i) for i in invoices}
        unpaid = InvoiceStanding.UNPAID in standings
        partial = InvoiceStanding.PARTIAL in standings

        if today.day <= self._grace_last_day:
            blocked = False
        elif today.day < self._partial_from_day:
            blocked = unpaid
        else:
            blocked = unpaid or partial
        return GateDecision(blocked=blocked, unpaid=unpaid, partial=partial)

    def check(self, owner_id: str, today: date) -> None:
        if today.day <= self._grace_last_day:
            return

        start, end = month_bounds(today)
        invoices = self._invoices.list_issued_between(user_id=owner_id, start=start, end=end)
        decision = self.evaluate(invoices, today)
        if decision.blocked:
            logger.info(
                "Attendance blocked for billing owner %s on %s (unpaid=%s partial=%s)",
                owner_id,
                today.isoformat(),
                decision.unpaid,
                decision.partial,
            )
            raise PaymentRequired(PAYMENT_REQUIRED_MESSAGE)
