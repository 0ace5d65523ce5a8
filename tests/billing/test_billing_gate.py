from datetime import date
from decimal import Decimal

import pytest

from aquador_attendance.billing.gate import BillingGate
from aquador_attendance.billing.model import Invoice, classify_invoice
from aquador_attendance.core.enums import InvoiceStanding, InvoiceStatus
from aquador_attendance.core.exceptions import PaymentRequired


def _invoice(status: InvoiceStatus, paid: str = "0") -> Invoice:
    return Invoice(
        invoice_id=1,
        user_id="parent-1",
        total=Decimal("3000"),
        paid_total=Decimal(paid),
        issued_at=date(2026, 3, 1),
        status=status,
    )


@pytest.mark.parametrize(
    "status, paid, expected",
    [
        (InvoiceStatus.PENDING, "0", InvoiceStanding.UNPAID),
        (InvoiceStatus.PENDING, "500", InvoiceStanding.PARTIAL),
        (InvoiceStatus.PARTIAL, "1500", InvoiceStanding.PARTIAL),
        (InvoiceStatus.PAID, "3000", InvoiceStanding.SETTLED),
        (InvoiceStatus.CANCELLED, "0", InvoiceStanding.SETTLED),
    ],
)
def test_classify_invoice(status, paid, expected):
    assert classify_invoice(_invoice(status, paid)) == expected


def test_grace_days_never_block(world):
    gate = world.container.billing_gate
    world.invoice("parent-1", date(2026, 3, 1), InvoiceStatus.PENDING)

    gate.check("parent-1", date(2026, 3, 5))
    gate.check("parent-1", date(2026, 3, 7))

    assert world.invoices.calls == []


def test_unpaid_blocks_from_day_eight(world):
    world.invoice("parent-1", date(2026, 3, 1), InvoiceStatus.PENDING)

    with pytest.raises(PaymentRequired):
        world.container.billing_gate.check("parent-1", date(2026, 3, 8))


def test_partial_is_tolerated_until_day_fifteen(world):
    world.invoice("parent-1", date(2026, 3, 1), InvoiceStatus.PARTIAL, paid="1500")

    world.container.billing_gate.check("parent-1", date(2026, 3, 10))
    world.container.billing_gate.check("parent-1", date(2026, 3, 15))


def test_partial_blocks_from_day_sixteen(world):
    world.invoice("parent-1", date(2026, 3, 1), InvoiceStatus.PARTIAL, paid="1500")

    with pytest.raises(PaymentRequired):
        world.container.billing_gate.check("parent-1", date(2026, 3, 20))


def test_pending_with_a_payment_counts_as_partial(world):
    world.invoice("parent-1", date(2026, 3, 1), InvoiceStatus.PENDING, paid="200")
    gate = world.container.billing_gate

    gate.check("parent-1", date(2026, 3, 12))
    with pytest.raises(PaymentRequired):
        gate.check("parent-1", date(2026, 3, 16))


def test_paid_invoices_never_block(world):
    world.invoice("parent-1", date(2026, 3, 1), InvoiceStatus.PAID, paid="3000")

    world.container.billing_gate.check("parent-1", date(2026, 3, 28))


def test_only_current_month_is_queried(world):
    world.invoice("parent-1", date(2026, 2, 1), InvoiceStatus.PENDING)

    world.container.billing_gate.check("parent-1", date(2026, 3, 20))

    assert world.invoices.calls == [{"user_id": "parent-1", "start": date(2026, 3, 1), "end": date(2026, 3, 31)}]


def test_learner_with_guardian_is_billed_to_the_guardian(world, clock):
    day = date(2026, 3, 21)
    world.add_learner("kid-1", parent_id="parent-1")
    world.enroll("kid-1")
    world.schedule("debutant-samedi", day)
    world.invoice("kid-1", date(2026, 3, 1), InvoiceStatus.PENDING)

    world.service.record("kid-1", attended_on=day, now=clock(day, 9, 0))

    assert [c["user_id"] for c in world.invoices.calls] == ["parent-1"]


def test_adult_learner_is_billed_to_self(world, clock):
    day = date(2026, 3, 21)
    world.add_learner("adult-1", parent_id=None)
    world.enroll("adult-1")
    world.schedule("debutant-samedi", day)
    world.invoice("adult-1", date(2026, 3, 2), InvoiceStatus.PENDING)

    with pytest.raises(PaymentRequired):
        world.service.record("adult-1", attended_on=day, now=clock(day, 9, 0))
    assert world.invoices.calls[0]["user_id"] == "adult-1"


def test_evaluate_reports_what_was_found():
    gate = BillingGate(invoices=None)

    decision = gate.evaluate([_invoice(InvoiceStatus.PENDING), _invoice(InvoiceStatus.PARTIAL, "10")], date(2026, 3, 3))

    assert decision.blocked is False
    assert decision.unpaid is True
    assert decision.partial is True


def test_thresholds_must_be_ordered():
    with pytest.raises(ValueError):
        BillingGate(invoices=None, grace_last_day=16, partial_from_day=10)
