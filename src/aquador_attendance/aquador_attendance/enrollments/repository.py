from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ClassSession, Enrollment


class EnrollmentRepository(Protocol):
    def list_active_for_profile(self, profile_id: str) -> Sequence[Enrollment]:
        """Active enrollments ordered by (start_date, enrollment_id)."""

        raise NotImplementedError

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        raise NotImplementedError


class SessionRepository(Protocol):
    def get_active_for_group_on(self, *, session_group: str, on: date) -> Optional[ClassSession]:
        raise NotImplementedError

    def has_active_for_groups_on(self, *, session_groups: Sequence[str], on: date) -> bool:
        raise NotImplementedError
