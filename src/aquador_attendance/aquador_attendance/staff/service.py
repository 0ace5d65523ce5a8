from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo

from ..common.datetime_utils import get_timezone, today_local, utc_now
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import AttendanceAction, AttendanceMode, AttendanceState, AttendanceStatus
from ..core.exceptions import NotStaffProfile, ProfileNotFound, ValidationError
from ..profiles.repository import ProfileRepository
from .model import StaffAttendanceOutcome
from .repository import StaffAttendanceRepository

logger = logging.getLogger(__name__)

MSG_ARRIVAL_SAVED = "Arrivée enregistrée."
MSG_ARRIVAL_ADDED = "Arrivée ajoutée."
MSG_ALREADY_IN = "Arrivée déjà marquée."
MSG_DEPARTURE_SAVED = "Départ enregistré."
MSG_DEPARTURE_CREATED = "Départ enregistré (nouvelle présence créée)."
MSG_ALREADY_OUT = "Départ déjà marqué."
MSG_ALREADY_DONE = "Déjà marqué aujourd'hui (arrivée + départ)."


class StaffAttendanceService:
    """Arrival/departure log for teachers, assistants and admins.

    No class session or billing involved; staff are always "present".
    """

    def __init__(
        self,
        staff_attendance: StaffAttendanceRepository,
        profiles: ProfileRepository,
        *,
        timezone: str | tzinfo = DEFAULT_TIMEZONE,
    ):
        self._staff_attendance = staff_attendance
        self._profiles = profiles
        self._tz = get_timezone(timezone) if isinstance(timezone, str) else timezone

    def record(
        self,
        profile_id: str,
        *,
        mode: AttendanceMode | None = None,
        attended_on: date | None = None,
        now: datetime | None = None,
    ) -> StaffAttendanceOutcome:
        mode = mode or AttendanceMode.TOGGLE
        now = now or utc_now()
        attended_on = attended_on or today_local(self._tz, now=now)

        profile = self._profiles.get_by_id(profile_id)
        if not profile:
            raise ProfileNotFound("Profil introuvable.")
        if not profile.is_staff:
            raise NotStaffProfile("Ce profil n'appartient pas au personnel.")

        existing = self._staff_attendance.get_for_profile_and_date(profile.profile_id, attended_on)
        state = existing.state if existing else AttendanceState.NONE

        if mode == AttendanceMode.TOGGLE:
            if state == AttendanceState.CHECKED_OUT:
                return StaffAttendanceOutcome(MSG_ALREADY_DONE, AttendanceAction.NONE, warning=True, record=existing)
            mode = AttendanceMode.CHECK_OUT if state == AttendanceState.CHECKED_IN else AttendanceMode.CHECK_IN

        if mode == AttendanceMode.CHECK_IN:
            if state != AttendanceState.NONE:
                return StaffAttendanceOutcome(MSG_ALREADY_IN, AttendanceAction.NONE, warning=True, record=existing)
            record = self._staff_attendance.upsert(
                profile_id=profile.profile_id,
                attended_on=attended_on,
                status=AttendanceStatus.PRESENT,
                check_in_time=now,
                check_out_time=None,
            )
            logger.info("Staff check-in profile=%s date=%s", profile.profile_id, attended_on.isoformat())
            message = MSG_ARRIVAL_ADDED if existing else MSG_ARRIVAL_SAVED
            return StaffAttendanceOutcome(message, AttendanceAction.CHECK_IN, record=record)

        if mode != AttendanceMode.CHECK_OUT:
            raise ValidationError(f"Mode inconnu: {mode}")

        if state == AttendanceState.CHECKED_OUT:
            return StaffAttendanceOutcome(MSG_ALREADY_OUT, AttendanceAction.NONE, warning=True, record=existing)

        if state == AttendanceState.CHECKED_IN:
            record = self._staff_attendance.upsert(
                profile_id=profile.profile_id,
                attended_on=attended_on,
                status=existing.status,
                check_in_time=existing.check_in_time,
                check_out_time=now,
            )
            message = MSG_DEPARTURE_SAVED
        else:
            record = self._staff_attendance.upsert(
                profile_id=profile.profile_id,
                attended_on=attended_on,
                status=AttendanceStatus.PRESENT,
                check_in_time=now,
                check_out_time=now,
            )
            message = MSG_DEPARTURE_CREATED

        logger.info("Staff check-out profile=%s date=%s", profile.profile_id, attended_on.isoformat())
        return StaffAttendanceOutcome(message, AttendanceAction.CHECK_OUT, record=record)
