from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Per-student status inside one attendance session."""

    UNSET = "unset"
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class AuthEventKind(str, Enum):
    """Account lifecycle events pushed to auth subscribers."""

    SIGNED_UP = "SIGNED_UP"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    USER_UPDATED = "USER_UPDATED"


class Backend(str, Enum):
    """Storage adapters selectable through the BACKEND setting."""

    MYSQL = "mysql"
    REST = "rest"
    MEMORY = "memory"
