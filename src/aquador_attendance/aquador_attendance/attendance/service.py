from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Optional

from ..billing.gate import BillingGate
from ..common.datetime_utils import get_timezone, localize, today_local, utc_now
from ..core.constants import DEFAULT_TIMEZONE, PUNCTUALITY_GRACE_MINUTES
from ..core.enums import AttendanceAction, AttendanceMode, AttendanceState, AttendanceStatus
from ..core.exceptions import InvalidTransition, ProfileInactive, ProfileNotFound, ValidationError
from ..enrollments.resolver import ResolvedSession, SessionResolver
from ..profiles.repository import ProfileRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceOutcome, AttendanceRecord, state_of
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

MSG_CHECKIN_SAVED = "Check-in enregistré."
MSG_CHECKIN_ADDED = "Check-in ajouté."
MSG_ALREADY_IN = "Arrivée déjà marquée."
MSG_CHECKOUT_SAVED = "Check-out enregistré."
MSG_CHECKOUT_CREATED = "Check-out enregistré (nouvelle présence créée)."
MSG_ALREADY_DONE = "Déjà marqué aujourd'hui (arrivée + départ)."
MSG_ABSENT_SAVED = "Absence marquée."
MSG_ALREADY_ABSENT = "Absence déjà marquée."
MSG_ABSENT_AFTER_CHECKOUT = "Départ déjà enregistré : annulez-le avant de marquer l'absence."
MSG_UNDO_CHECKIN = "Présence annulée."
MSG_UNDO_CHECKOUT = "Départ annulé."
MSG_NOTHING_TO_UNDO = "Rien à annuler pour ce jour."


class AttendanceService:
    """Records learner attendance for one class session per day.

    Flow for a learner request: profile -> session resolver -> billing gate
    -> punctuality -> upsert. Every write re-checks that the session is still
    active right before persisting.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        resolver: SessionResolver,
        billing_gate: BillingGate,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        timezone: str | tzinfo = DEFAULT_TIMEZONE,
        grace_minutes: int = PUNCTUALITY_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._resolver = resolver
        self._billing = billing_gate
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._tz = get_timezone(timezone) if isinstance(timezone, str) else timezone
        self._grace_minutes = int(grace_minutes)

    @property
    def timezone(self) -> tzinfo:
        return self._tz

    def today(self, *, now: datetime | None = None) -> date:
        return today_local(self._tz, now=now)

    # -- learner entry point -------------------------------------------------

    def record(
        self,
        learner_id: str,
        *,
        mode: AttendanceMode | None = None,
        attended_on: date | None = None,
        now: datetime | None = None,
    ) -> AttendanceOutcome:
        mode = mode or AttendanceMode.TOGGLE
        now = now or utc_now()
        attended_on = attended_on or self.today(now=now)

        profile = self._profiles.get_by_id(learner_id)
        if not profile:
            raise ProfileNotFound("Profil introuvable.")
        if not profile.is_active:
            raise ProfileInactive("Ce profil est désactivé.")

        resolved = self._resolver.resolve(profile.profile_id, attended_on)
        self._billing.check(profile.billing_owner_id, self.today(now=now))

        return self._apply(resolved, mode=mode, attended_on=attended_on, now=now, full_name=profile.full_name)

    # -- roster actions (by enrollment) --------------------------------------

    def check_in_enrollment(self, enrollment_id: int, attended_on: date, *, now: datetime | None = None) -> AttendanceOutcome:
        resolved = self._resolver.resolve_enrollment(enrollment_id, attended_on)
        return self._apply(resolved, mode=AttendanceMode.CHECK_IN, attended_on=attended_on, now=now or utc_now())

    def check_out_enrollment(self, enrollment_id: int, attended_on: date, *, now: datetime | None = None) -> AttendanceOutcome:
        resolved = self._resolver.resolve_enrollment(enrollment_id, attended_on)
        return self._apply(resolved, mode=AttendanceMode.CHECK_OUT, attended_on=attended_on, now=now or utc_now())

    def mark_absent(self, enrollment_id: int, attended_on: date) -> AttendanceOutcome:
        resolved = self._resolver.resolve_enrollment(enrollment_id, attended_on)
        existing = self._attendance.get_for_enrollment_and_date(enrollment_id, attended_on)
        state = state_of(existing)

        if state == AttendanceState.CHECKED_OUT:
            raise InvalidTransition(MSG_ABSENT_AFTER_CHECKOUT)
        if state == AttendanceState.ABSENT:
            return AttendanceOutcome(MSG_ALREADY_ABSENT, AttendanceAction.NONE, warning=True, record=existing)

        record = self._write(
            resolved,
            attended_on,
            status=AttendanceStatus.ABSENT,
            check_in_time=None,
            check_out_time=None,
        )
        logger.info(
            "Admin notice: enrollment %s (%s) marked absent on %s",
            enrollment_id,
            resolved.enrollment.profile_id,
            attended_on.isoformat(),
        )
        return AttendanceOutcome(MSG_ABSENT_SAVED, AttendanceAction.MARK_ABSENT, record=record)

    def undo_checkin(self, enrollment_id: int, attended_on: date) -> AttendanceOutcome:
        """Drop the whole day's record, whatever its state."""

        resolved = self._resolver.resolve_enrollment(enrollment_id, attended_on)
        self._resolver.ensure_active_session(resolved.enrollment, attended_on)
        deleted = self._attendance.delete_for_enrollment_and_date(enrollment_id=int(enrollment_id), attended_on=attended_on)
        if not deleted:
            return AttendanceOutcome(MSG_NOTHING_TO_UNDO, AttendanceAction.NONE, warning=True)
        logger.info(
            "Admin notice: attendance of enrollment %s (%s) on %s cancelled",
            enrollment_id,
            resolved.enrollment.profile_id,
            attended_on.isoformat(),
        )
        return AttendanceOutcome(MSG_UNDO_CHECKIN, AttendanceAction.UNDO_CHECKIN)

    def undo_checkout(self, enrollment_id: int, attended_on: date) -> AttendanceOutcome:
        resolved = self._resolver.resolve_enrollment(enrollment_id, attended_on)
        existing = self._attendance.get_for_enrollment_and_date(enrollment_id, attended_on)
        if state_of(existing) != AttendanceState.CHECKED_OUT:
            return AttendanceOutcome(MSG_NOTHING_TO_UNDO, AttendanceAction.NONE, warning=True, record=existing)

        self._resolver.ensure_active_session(resolved.enrollment, attended_on)
        self._attendance.clear_checkout(enrollment_id=int(enrollment_id), attended_on=attended_on)
        record = self._attendance.get_for_enrollment_and_date(enrollment_id, attended_on)
        logger.info("Check-out of enrollment %s on %s cleared", enrollment_id, attended_on.isoformat())
        return AttendanceOutcome(MSG_UNDO_CHECKOUT, AttendanceAction.UNDO_CHECKOUT, record=record)

    # -- state machine -------------------------------------------------------

    def _apply(
        self,
        resolved: ResolvedSession,
        *,
        mode: AttendanceMode,
        attended_on: date,
        now: datetime,
        full_name: Optional[str] = None,
    ) -> AttendanceOutcome:
        existing = self._attendance.get_for_enrollment_and_date(resolved.enrollment.enrollment_id, attended_on)
        state = state_of(existing)

        if mode == AttendanceMode.TOGGLE:
            if state == AttendanceState.CHECKED_OUT:
                return AttendanceOutcome(MSG_ALREADY_DONE, AttendanceAction.NONE, warning=True, record=existing)
            mode = AttendanceMode.CHECK_OUT if state == AttendanceState.CHECKED_IN else AttendanceMode.CHECK_IN

        if mode == AttendanceMode.CHECK_IN:
            return self._check_in(resolved, existing, attended_on=attended_on, now=now, full_name=full_name)
        if mode == AttendanceMode.CHECK_OUT:
            return self._check_out(resolved, existing, attended_on=attended_on, now=now, full_name=full_name)
        raise ValidationError(f"Mode inconnu: {mode}")

    def _check_in(
        self,
        resolved: ResolvedSession,
        existing: Optional[AttendanceRecord],
        *,
        attended_on: date,
        now: datetime,
        full_name: Optional[str],
    ) -> AttendanceOutcome:
        if state_of(existing) in (AttendanceState.CHECKED_IN, AttendanceState.CHECKED_OUT):
            return AttendanceOutcome(MSG_ALREADY_IN, AttendanceAction.NONE, warning=True, record=existing)

        record = self._write(
            resolved,
            attended_on,
            status=self._decide_status(resolved, attended_on, now),
            check_in_time=now,
            check_out_time=None,
            full_name=full_name,
        )
        logger.info(
            "Check-in enrollment=%s date=%s status=%s",
            resolved.enrollment.enrollment_id,
            attended_on.isoformat(),
            record.status.value,
        )
        return AttendanceOutcome(MSG_CHECKIN_ADDED if existing else MSG_CHECKIN_SAVED, AttendanceAction.CHECK_IN, record=record)

    def _check_out(
        self,
        resolved: ResolvedSession,
        existing: Optional[AttendanceRecord],
        *,
        attended_on: date,
        now: datetime,
        full_name: Optional[str],
    ) -> AttendanceOutcome:
        state = state_of(existing)
        if state == AttendanceState.CHECKED_OUT:
            return AttendanceOutcome(MSG_ALREADY_DONE, AttendanceAction.NONE, warning=True, record=existing)

        if state == AttendanceState.CHECKED_IN:
            record = self._write(
                resolved,
                attended_on,
                status=existing.status,
                check_in_time=existing.check_in_time,
                check_out_time=now,
                full_name=full_name,
            )
            message = MSG_CHECKOUT_SAVED
        else:
            # No arrival on file: the departure doubles as the arrival.
            record = self._write(
                resolved,
                attended_on,
                status=self._decide_status(resolved, attended_on, now),
                check_in_time=now,
                check_out_time=now,
                full_name=full_name,
            )
            message = MSG_CHECKOUT_CREATED

        logger.info("Check-out enrollment=%s date=%s", resolved.enrollment.enrollment_id, attended_on.isoformat())
        return AttendanceOutcome(message, AttendanceAction.CHECK_OUT, record=record)

    def _decide_status(self, resolved: ResolvedSession, attended_on: date, now: datetime) -> AttendanceStatus:
        session_start = localize(attended_on, resolved.session.starts_at, self._tz)
        strategy = self._factory.for_checkin(now=now, session_start=session_start, grace_minutes=self._grace_minutes)
        return strategy.decide_checkin(now=now, session_start=session_start).status

    def _write(
        self,
        resolved: ResolvedSession,
        attended_on: date,
        *,
        status: AttendanceStatus,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        full_name: Optional[str] = None,
    ) -> AttendanceRecord:
        self._resolver.ensure_active_session(resolved.enrollment, attended_on)
        return self._attendance.upsert(
            enrollment_id=resolved.enrollment.enrollment_id,
            attended_on=attended_on,
            status=status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            full_name=full_name,
        )
