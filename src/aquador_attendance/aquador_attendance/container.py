from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.report import AttendanceReportService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .billing.gate import BillingGate
from .billing.mysql_invoice_repository import MySQLInvoiceRepository
from .billing.repository import InvoiceRepository
from .core.constants import (
    BILLING_GRACE_LAST_DAY,
    BILLING_PARTIAL_FROM_DAY,
    DEFAULT_TIMEZONE,
    PUNCTUALITY_GRACE_MINUTES,
)
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.mysql_session_repository import MySQLSessionRepository
from .enrollments.repository import EnrollmentRepository, SessionRepository
from .enrollments.resolver import SessionResolver
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .staff.mysql_staff_attendance_repository import MySQLStaffAttendanceRepository
from .staff.repository import StaffAttendanceRepository
from .staff.service import StaffAttendanceService


@dataclass(frozen=True)
class Settings:
    timezone: str = DEFAULT_TIMEZONE
    grace_minutes: int = PUNCTUALITY_GRACE_MINUTES
    billing_grace_last_day: int = BILLING_GRACE_LAST_DAY
    billing_partial_from_day: int = BILLING_PARTIAL_FROM_DAY

    @classmethod
    def from_module(cls, settings) -> "Settings":
        return cls(
            timezone=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
            grace_minutes=int(getattr(settings, "PUNCTUALITY_GRACE_MINUTES", PUNCTUALITY_GRACE_MINUTES)),
            billing_grace_last_day=int(getattr(settings, "BILLING_GRACE_LAST_DAY", BILLING_GRACE_LAST_DAY)),
            billing_partial_from_day=int(getattr(settings, "BILLING_PARTIAL_FROM_DAY", BILLING_PARTIAL_FROM_DAY)),
        )


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    enrollments_repo: EnrollmentRepository
    sessions_repo: SessionRepository
    invoices_repo: InvoiceRepository
    attendance_repo: AttendanceRepository
    staff_attendance_repo: StaffAttendanceRepository

    session_resolver: SessionResolver
    billing_gate: BillingGate
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    staff_attendance_service: StaffAttendanceService


def assemble(
    *,
    profiles_repo: ProfileRepository,
    enrollments_repo: EnrollmentRepository,
    sessions_repo: SessionRepository,
    invoices_repo: InvoiceRepository,
    attendance_repo: AttendanceRepository,
    staff_attendance_repo: StaffAttendanceRepository,
    settings: Settings = Settings(),
) -> Container:
    """Wire services on top of any repository implementations (MySQL or in-memory)."""

    session_resolver = SessionResolver(enrollments_repo, sessions_repo)
    billing_gate = BillingGate(
        invoices_repo,
        grace_last_day=settings.billing_grace_last_day,
        partial_from_day=settings.billing_partial_from_day,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        profiles_repo,
        session_resolver,
        billing_gate,
        strategy_factory=AttendanceStrategyFactory(),
        timezone=settings.timezone,
        grace_minutes=settings.grace_minutes,
    )
    report_service = AttendanceReportService(attendance_repo, timezone=settings.timezone)
    staff_attendance_service = StaffAttendanceService(staff_attendance_repo, profiles_repo, timezone=settings.timezone)

    return Container(
        profiles_repo=profiles_repo,
        enrollments_repo=enrollments_repo,
        sessions_repo=sessions_repo,
        invoices_repo=invoices_repo,
        attendance_repo=attendance_repo,
        staff_attendance_repo=staff_attendance_repo,
        session_resolver=session_resolver,
        billing_gate=billing_gate,
        attendance_service=attendance_service,
        report_service=report_service,
        staff_attendance_service=staff_attendance_service,
    )


def build_container(*, db_config: dict, settings: Settings = Settings()) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        profiles_repo=MySQLProfileRepository(conn),
        enrollments_repo=MySQLEnrollmentRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        invoices_repo=MySQLInvoiceRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        staff_attendance_repo=MySQLStaffAttendanceRepository(conn),
        settings=settings,
    )
