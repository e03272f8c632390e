from __future__ import annotations

from typing import Iterable, Optional

from ..roster.model import Student


def filter_session(students: Iterable[Student], group: Optional[str], weekday: Optional[str]) -> list[Student]:
    """Roster entries eligible for a (group, weekday) session, in roster order.

    No session without both selectors: an empty group or weekday yields [].
    Group match is exact (case-sensitive) after trimming whitespace.
    """
    group = (group or "").strip()
    weekday = (weekday or "").strip()
    if not group or not weekday:
        return []
    return [s for s in students if s.group.strip() == group and weekday in s.week_days]
