from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Profile role stored on `profiles.role`."""

    USER = "user"
    TEACHER = "teacher"
    ASSISTANT = "assistant"
    ADMIN = "admin"
    INFLUENCER = "influencer"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.USER


STAFF_ROLES = frozenset({Role.TEACHER, Role.ASSISTANT, Role.ADMIN})


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"


class AttendanceStatus(str, Enum):
    """Normalized attendance status persisted in the database."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class AttendanceState(str, Enum):
    """Where a (enrollment, date) record sits in the check-in/check-out flow."""

    NONE = "none"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    ABSENT = "absent"


class AttendanceMode(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"
    TOGGLE = "toggle"


class AttendanceAction(str, Enum):
    """What a request actually did (reported back to the caller)."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"
    MARK_ABSENT = "mark-absent"
    UNDO_CHECKIN = "undo-checkin"
    UNDO_CHECKOUT = "undo-checkout"
    NONE = "none"


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    CANCELLED = "cancelled"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "InvoiceStatus":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER


class InvoiceStanding(str, Enum):
    """Billing classification of one invoice, as seen by the billing gate."""

    SETTLED = "settled"
    UNPAID = "unpaid"
    PARTIAL = "partial"
