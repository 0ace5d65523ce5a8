from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from aquador_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from aquador_attendance.billing.model import Invoice
from aquador_attendance.common.datetime_utils import get_timezone, localize
from aquador_attendance.container import Container, Settings, assemble
from aquador_attendance.core.enums import (
    EnrollmentStatus,
    InvoiceStatus,
    Role,
    SessionStatus,
)
from aquador_attendance.enrollments.model import ClassSession, Enrollment
from aquador_attendance.profiles.model import Profile
from aquador_attendance.staff.model import StaffAttendanceRecord

TZ_NAME = "America/Port-au-Prince"
TZ = get_timezone(TZ_NAME)


def at(day: date, hh: int, mm: int, ss: int = 0) -> datetime:
    """Wall-clock time at the school."""
    return localize(day, time(hh, mm, ss), TZ)


@dataclass
class InMemoryProfiles:
    by_id: dict[str, Profile] = field(default_factory=dict)

    def add(self, profile: Profile) -> Profile:
        self.by_id[profile.profile_id] = profile
        return profile

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        return self.by_id.get(profile_id)


@dataclass
class InMemoryEnrollments:
    by_id: dict[int, Enrollment] = field(default_factory=dict)

    def add(self, enrollment: Enrollment) -> Enrollment:
        self.by_id[enrollment.enrollment_id] = enrollment
        return enrollment

    def list_active_for_profile(self, profile_id: str):
        items = [e for e in self.by_id.values() if e.profile_id == profile_id and e.is_active]
        items.sort(key=lambda e: (e.start_date, e.enrollment_id))
        return items

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        return self.by_id.get(int(enrollment_id))


@dataclass
class InMemorySessions:
    items: list[ClassSession] = field(default_factory=list)

    def add(self, session: ClassSession) -> ClassSession:
        self.items.append(session)
        return session

    def cancel_all(self) -> None:
        self.items = [
            ClassSession(
                session_id=s.session_id,
                session_group=s.session_group,
                start_date=s.start_date,
                start_time=s.start_time,
                duration_minutes=s.duration_minutes,
                status=SessionStatus.CANCELLED,
            )
            for s in self.items
        ]

    def get_active_for_group_on(self, *, session_group: str, on: date) -> Optional[ClassSession]:
        for s in self.items:
            if s.session_group == session_group and s.start_date == on and s.status == SessionStatus.ACTIVE:
                return s
        return None

    def has_active_for_groups_on(self, *, session_groups, on: date) -> bool:
        return any(self.get_active_for_group_on(session_group=g, on=on) for g in session_groups)


@dataclass
class InMemoryInvoices:
    items: list[Invoice] = field(default_factory=list)
    calls: list[dict] = field(default_factory=list)

    def add(self, invoice: Invoice) -> Invoice:
        self.items.append(invoice)
        return invoice

    def list_issued_between(self, *, user_id: str, start: date, end: date):
        self.calls.append({"user_id": user_id, "start": start, "end": end})
        return [i for i in self.items if i.user_id == user_id and start <= i.issued_at <= end]


class InMemoryAttendance:
    def __init__(self, enrollments: Optional[InMemoryEnrollments] = None, profiles: Optional[InMemoryProfiles] = None):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self._enrollments = enrollments
        self._profiles = profiles
        self.writes = 0

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_key.values())

    def get_for_enrollment_and_date(self, enrollment_id: int, attended_on: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((int(enrollment_id), attended_on))

    def upsert(self, *, enrollment_id, attended_on, status, check_in_time, check_out_time, full_name=None):
        self.writes += 1
        key = (int(enrollment_id), attended_on)
        existing = self._by_key.get(key)
        if existing:
            attendance_id = existing.attendance_id
            full_name = full_name or existing.full_name
        else:
            self._id += 1
            attendance_id = self._id
        rec = AttendanceRecord(
            attendance_id=attendance_id,
            enrollment_id=int(enrollment_id),
            attended_on=attended_on,
            status=status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            full_name=full_name,
        )
        self._by_key[key] = rec
        return rec

    def clear_checkout(self, *, enrollment_id, attended_on) -> bool:
        key = (int(enrollment_id), attended_on)
        rec = self._by_key.get(key)
        if not rec or rec.check_out_time is None:
            return False
        self.writes += 1
        self._by_key[key] = AttendanceRecord(
            attendance_id=rec.attendance_id,
            enrollment_id=rec.enrollment_id,
            attended_on=rec.attended_on,
            status=rec.status,
            check_in_time=rec.check_in_time,
            check_out_time=None,
            full_name=rec.full_name,
        )
        return True

    def delete_for_enrollment_and_date(self, *, enrollment_id, attended_on) -> bool:
        self.writes += 1
        return self._by_key.pop((int(enrollment_id), attended_on), None) is not None

    def get_report_rows(self, *, start_date, end_date, profile_id=None):
        rows = []
        for rec in self._by_key.values():
            if not start_date <= rec.attended_on <= end_date:
                continue
            enrollment = self._enrollments.get_by_id(rec.enrollment_id) if self._enrollments else None
            if enrollment is None:
                continue
            if profile_id is not None and enrollment.profile_id != profile_id:
                continue
            profile = self._profiles.get_by_id(enrollment.profile_id) if self._profiles else None
            rows.append(
                AttendanceReportRow(
                    attended_on=rec.attended_on,
                    enrollment_id=rec.enrollment_id,
                    profile_id=enrollment.profile_id,
                    full_name=profile.full_name if profile else rec.full_name,
                    session_group=enrollment.session_group,
                    status=rec.status,
                    check_in_time=rec.check_in_time,
                    check_out_time=rec.check_out_time,
                )
            )
        rows.sort(key=lambda r: r.attended_on, reverse=True)
        return rows


class InMemoryStaffAttendance:
    def __init__(self):
        self._by_key: dict[tuple[str, date], StaffAttendanceRecord] = {}
        self._id = 0

    def get_for_profile_and_date(self, profile_id: str, attended_on: date) -> Optional[StaffAttendanceRecord]:
        return self._by_key.get((profile_id, attended_on))

    def upsert(self, *, profile_id, attended_on, status, check_in_time, check_out_time):
        existing = self._by_key.get((profile_id, attended_on))
        if existing:
            rid = existing.staff_attendance_id
        else:
            self._id += 1
            rid = self._id
        rec = StaffAttendanceRecord(
            staff_attendance_id=rid,
            profile_id=profile_id,
            attended_on=attended_on,
            status=status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
        )
        self._by_key[(profile_id, attended_on)] = rec
        return rec


@dataclass
class World:
    profiles: InMemoryProfiles
    enrollments: InMemoryEnrollments
    sessions: InMemorySessions
    invoices: InMemoryInvoices
    attendance: InMemoryAttendance
    staff_attendance: InMemoryStaffAttendance
    container: Container

    @property
    def service(self):
        return self.container.attendance_service

    def add_learner(self, profile_id: str = "kid-1", *, parent_id: Optional[str] = "parent-1", full_name: str = "Lucas Joseph") -> Profile:
        if parent_id and parent_id not in self.profiles.by_id:
            self.profiles.add(Profile(profile_id=parent_id, full_name="Marie Joseph", role=Role.USER))
        return self.profiles.add(Profile(profile_id=profile_id, full_name=full_name, role=Role.USER, parent_id=parent_id))

    def enroll(self, profile_id: str, *, enrollment_id: int = 1, group: str = "debutant-samedi", start: date = date(2026, 1, 1)) -> Enrollment:
        return self.enrollments.add(
            Enrollment(
                enrollment_id=enrollment_id,
                profile_id=profile_id,
                session_group=group,
                status=EnrollmentStatus.ACTIVE,
                start_date=start,
            )
        )

    def schedule(self, group: str, day: date, start: time = time(9, 0), *, status: SessionStatus = SessionStatus.ACTIVE) -> ClassSession:
        return self.sessions.add(
            ClassSession(
                session_id=len(self.sessions.items) + 1,
                session_group=group,
                start_date=day,
                start_time=start,
                duration_minutes=60,
                status=status,
            )
        )

    def invoice(self, user_id: str, issued_at: date, status: InvoiceStatus, *, total="3000", paid="0") -> Invoice:
        return self.invoices.add(
            Invoice(
                invoice_id=len(self.invoices.items) + 1,
                user_id=user_id,
                total=Decimal(total),
                paid_total=Decimal(paid),
                issued_at=issued_at,
                status=status,
            )
        )


@pytest.fixture
def world() -> World:
    profiles = InMemoryProfiles()
    enrollments = InMemoryEnrollments()
    sessions = InMemorySessions()
    invoices = InMemoryInvoices()
    attendance = InMemoryAttendance(enrollments, profiles)
    staff_attendance = InMemoryStaffAttendance()

    container = assemble(
        profiles_repo=profiles,
        enrollments_repo=enrollments,
        sessions_repo=sessions,
        invoices_repo=invoices,
        attendance_repo=attendance,
        staff_attendance_repo=staff_attendance,
        settings=Settings(timezone=TZ_NAME),
    )
    return World(profiles, enrollments, sessions, invoices, attendance, staff_attendance, container)


@pytest.fixture
def saturday() -> date:
    return date(2026, 3, 7)


@pytest.fixture
def clock():
    """`clock(day, hh, mm[, ss])` -> aware school-local datetime."""
    return at
