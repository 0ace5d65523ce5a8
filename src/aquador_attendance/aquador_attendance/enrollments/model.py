from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import EnrollmentStatus, SessionStatus


@dataclass(frozen=True)
class Enrollment:
    """Domain entity: a learner registered in a recurring class group."""

    enrollment_id: int
    profile_id: str
    session_group: str
    status: EnrollmentStatus
    start_date: date
    end_date: Optional[date] = None

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE


@dataclass(frozen=True)
class ClassSession:
    """One scheduled occurrence of a session group on a calendar date."""

    session_id: int
    session_group: str
    start_date: date
    start_time: Optional[time]
    duration_minutes: int
    status: SessionStatus

    @property
    def starts_at(self) -> time:
        # Sessions saved without a start time count from midnight.
        return self.start_time or time(0, 0)
