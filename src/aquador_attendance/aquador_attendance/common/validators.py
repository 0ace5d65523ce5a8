from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from ..core.enums import AttendanceMode
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} manquant")
    return str(value).strip()


def optional_iso_date(value: Any, field_name: str = "date") -> Optional[date]:
    """None/empty -> None; otherwise a strict YYYY-MM-DD date."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if not isinstance(value, str) or not _ISO_DATE.match(value.strip()):
        raise ValidationError(f"{field_name} invalide (format attendu AAAA-MM-JJ)")
    try:
        return parse_iso_date(value.strip())
    except ValueError as e:
        raise ValidationError(f"{field_name} invalide (format attendu AAAA-MM-JJ)") from e


def require_iso_date(value: Any, field_name: str) -> date:
    parsed = optional_iso_date(value, field_name)
    if parsed is None:
        raise ValidationError(f"{field_name} manquant")
    return parsed


def parse_mode(value: Any) -> AttendanceMode:
    """Missing mode means toggle (check-in, then check-out)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return AttendanceMode.TOGGLE
    try:
        return AttendanceMode(str(value).strip().lower())
    except ValueError as e:
        raise ValidationError(f"Mode inconnu: {value}") from e
