from __future__ import annotations

from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Optional

from ..common.datetime_utils import get_timezone
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .repository import AttendanceRepository

REPORT_FIELDS = [
    "attended_on",
    "profile_id",
    "full_name",
    "session_group",
    "status",
    "check_in",
    "check_out",
    "minutes_in_class",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    def __init__(self, attendance: AttendanceRepository, *, timezone: str | tzinfo = DEFAULT_TIMEZONE):
        self._attendance = attendance
        self._tz = get_timezone(timezone) if isinstance(timezone, str) else timezone

    def _fmt(self, value) -> str:
        return value.astimezone(self._tz).strftime("%H:%M") if value else "-"

    def build_report(self, *, start: date, end: date, profile_id: Optional[str] = None) -> ReportData:
        if end < start:
            raise ValidationError("La date de fin doit suivre la date de début")

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end, profile_id=profile_id)

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            minutes = ""
            if r.check_in_time and r.check_out_time:
                minutes = max(0, int((r.check_out_time - r.check_in_time).total_seconds() // 60))

            out_rows.append(
                {
                    "attended_on": r.attended_on.strftime("%Y-%m-%d"),
                    "profile_id": r.profile_id,
                    "full_name": r.full_name or "-",
                    "session_group": r.session_group,
                    "status": r.status.value,
                    "check_in": self._fmt(r.check_in_time),
                    "check_out": self._fmt(r.check_out_time),
                    "minutes_in_class": minutes,
                }
            )

            s = summary_map.get(r.profile_id)
            if not s:
                s = {
                    "profile_id": r.profile_id,
                    "full_name": r.full_name or "-",
                    AttendanceStatus.PRESENT.value: 0,
                    AttendanceStatus.LATE.value: 0,
                    AttendanceStatus.ABSENT.value: 0,
                    "total": 0,
                }
                summary_map[r.profile_id] = s
            s[r.status.value] += 1
            s["total"] += 1

        summary = sorted(summary_map.values(), key=lambda x: (x["full_name"].lower(), x["profile_id"]))
        return ReportData(rows=out_rows, summary=summary)
