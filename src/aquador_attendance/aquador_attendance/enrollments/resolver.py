from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..core.exceptions import NoActiveEnrollment, NoSessionToday
from .model import ClassSession, Enrollment
from .repository import EnrollmentRepository, SessionRepository

logger = logging.getLogger(__name__)

NO_ACTIVE_ENROLLMENT_MESSAGE = "Aucune inscription active trouvée pour cet élève."
NO_SESSION_MESSAGE = "Cet élève n'a pas de séance active ce jour-là."


@dataclass(frozen=True)
class ResolvedSession:
    enrollment: Enrollment
    session: ClassSession
    session_groups: tuple[str, ...] = ()


class SessionResolver:
    """Finds which enrollment a learner attends on a given date."""

    def __init__(self, enrollments: EnrollmentRepository, sessions: SessionRepository):
        self._enrollments = enrollments
        self._sessions = sessions

    def resolve(self, learner_id: str, attended_on: date) -> ResolvedSession:
        enrollments = self._enrollments.list_active_for_profile(learner_id)
        if not enrollments:
            logger.info("No active enrollment for learner %s", learner_id)
            raise NoActiveEnrollment(NO_ACTIVE_ENROLLMENT_MESSAGE)

        # First enrollment (by start date) with an active session wins.
        for enrollment in enrollments:
            session = self._sessions.get_active_for_group_on(session_group=enrollment.session_group, on=attended_on)
            if session:
                return ResolvedSession(
                    enrollment=enrollment,
                    session=session,
                    session_groups=tuple(e.session_group for e in enrollments),
                )

        logger.info("No active session on %s for learner %s", attended_on.isoformat(), learner_id)
        raise NoSessionToday(NO_SESSION_MESSAGE)

    def resolve_enrollment(self, enrollment_id: int, attended_on: date) -> ResolvedSession:
        """Same lookup for a known enrollment (admin roster actions)."""

        enrollment = self._enrollments.get_by_id(int(enrollment_id))
        if not enrollment or not enrollment.is_active:
            raise NoActiveEnrollment(NO_ACTIVE_ENROLLMENT_MESSAGE)

        session = self._sessions.get_active_for_group_on(session_group=enrollment.session_group, on=attended_on)
        if not session:
            raise NoSessionToday(NO_SESSION_MESSAGE)
        return ResolvedSession(enrollment=enrollment, session=session, session_groups=(enrollment.session_group,))

    def has_active_session(self, enrollment: Enrollment, attended_on: date) -> bool:
        return self._sessions.has_active_for_groups_on(session_groups=[enrollment.session_group], on=attended_on)

    def ensure_active_session(self, enrollment: Enrollment, attended_on: date) -> None:
        """Safety re-check run immediately before every attendance write."""

        if not self.has_active_session(enrollment, attended_on):
            logger.warning(
                "Write refused: session group %s has no active session on %s anymore",
                enrollment.session_group,
                attended_on.isoformat(),
            )
            raise NoSessionToday(NO_SESSION_MESSAGE)
