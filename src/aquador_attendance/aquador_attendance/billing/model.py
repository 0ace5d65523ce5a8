from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..core.enums import InvoiceStanding, InvoiceStatus


@dataclass(frozen=True)
class Invoice:
    """Domain entity: a monthly invoice owned by the billing profile (guardian)."""

    invoice_id: int
    user_id: str
    total: Decimal
    paid_total: Decimal
    issued_at: date
    status: InvoiceStatus


def classify_invoice(invoice: Invoice) -> InvoiceStanding:
    """Billing standing of one invoice.

    A "pending" invoice that already received money counts as partial, whatever
    its stored status says.
    """

    if invoice.status == InvoiceStatus.PENDING:
        return InvoiceStanding.PARTIAL if invoice.paid_total > 0 else InvoiceStanding.UNPAID
    if invoice.status == InvoiceStatus.PARTIAL:
        return InvoiceStanding.PARTIAL
    if invoice.status in (InvoiceStatus.PAID, InvoiceStatus.CANCELLED, InvoiceStatus.OTHER):
        return InvoiceStanding.SETTLED
    raise ValueError(f"Unhandled invoice status: {invoice.status!r}")
