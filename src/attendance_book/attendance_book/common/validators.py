from __future__ import annotations

import re
from typing import Iterable, Optional

from ..core.constants import PHONE_COUNTRY_CODE, PHONE_MAX_DIGITS, WEEKDAYS
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email


def require_weekday(value: Optional[str]) -> str:
    day = require_non_empty(value, "Weekday")
    if day not in WEEKDAYS:
        raise ValidationError(f"Unknown weekday: {day}")
    return day


def require_week_days(values: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Validate a week-day selection; keeps calendar order and drops duplicates."""
    selected = {require_weekday(v) for v in (values or [])}
    if not selected:
        raise ValidationError("Select at least one week day")
    return tuple(d for d in WEEKDAYS if d in selected)


def require_late_minutes(value) -> int:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Late minutes must be a whole number")
    if minutes < 0:
        raise ValidationError("Late minutes cannot be negative")
    return minutes


def normalize_full_name(value: str) -> str:
    """'aLI valiyev' -> 'Ali Valiyev'."""
    return " ".join(w[:1].upper() + w[1:].lower() for w in value.split())


def normalize_group(value: str) -> str:
    """'  FRONTEND-1 ' -> 'Frontend-1'."""
    value = value.strip()
    return value[:1].upper() + value[1:].lower()


def format_phone(value: str) -> str:
    """Format any digit input as '+998 XX XXX-XX-XX' (partial input stays partial)."""
    digits = re.sub(r"\D", "", value or "")
    if not digits.startswith(PHONE_COUNTRY_CODE):
        digits = PHONE_COUNTRY_CODE + digits
    digits = digits[:PHONE_MAX_DIGITS]

    out = f"+{PHONE_COUNTRY_CODE}"
    if len(digits) > 3:
        out += " " + digits[3:5]
    if len(digits) > 5:
        out += " " + digits[5:8]
    if len(digits) > 8:
        out += "-" + digits[8:10]
    if len(digits) > 10:
        out += "-" + digits[10:12]
    return out
