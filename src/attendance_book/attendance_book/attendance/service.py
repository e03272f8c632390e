from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Optional, Union

from ..common.datetime_utils import now_local
from ..common.validators import normalize_group, require_non_empty, require_weekday
from ..core.enums import AttendanceStatus
from ..core.exceptions import ResubmissionLockedError, ValidationError
from ..history.repository import HistoryRepository
from ..roster.repository import StudentRepository
from .guard import ResubmissionGuard
from .model import AttendanceRow
from .recorder import AttendanceRecorder
from .session_filter import filter_session

logger = logging.getLogger(__name__)

# student_id -> status, or student_id -> {"status": ..., "lateMinutes": ...}
StatusInput = Mapping[str, Union[str, AttendanceStatus, Mapping]]


@dataclass(frozen=True)
class SavedSession:
    snapshot_id: str
    session_date: date
    created_at: datetime
    counts: dict


class AttendanceService:
    def __init__(
        self,
        students: StudentRepository,
        history: HistoryRepository,
        guard: ResubmissionGuard,
    ):
        self._students = students
        self._history = history
        self._guard = guard

    def start_session(self, owner_id: int, group: Optional[str], weekday: Optional[str]) -> AttendanceRecorder:
        """Fresh recorder for the selection; every row starts unset.

        The group selector is normalized the way roster groups are stored,
        so "a1" and "A1" pick the same students.
        """
        group = normalize_group(group) if group else group
        eligible = filter_session(self._students.list_by_owner(int(owner_id)), group, weekday)
        return AttendanceRecorder(eligible)

    def session_rows(self, owner_id: int, group: Optional[str], weekday: Optional[str]) -> list[AttendanceRow]:
        return self.start_session(owner_id, group, weekday).rows()

    @staticmethod
    def apply_statuses(recorder: AttendanceRecorder, statuses: StatusInput) -> None:
        for student_id, value in (statuses or {}).items():
            if str(student_id) not in recorder:
                raise ValidationError(f"Student {student_id} is not part of this session")
            if isinstance(value, Mapping):
                status = value.get("status") or AttendanceStatus.UNSET.value
                late = value.get("lateMinutes", value.get("late_minutes"))
            else:
                status, late = value, None
            try:
                status = AttendanceStatus(status)
            except ValueError:
                raise ValidationError(f"Unknown attendance status: {status}")
            recorder.set_status(student_id, status, late)

    def save(
        self,
        owner_id: int,
        group: Optional[str],
        weekday: Optional[str],
        statuses: StatusInput,
        *,
        now: datetime | None = None,
        session_date: date | None = None,
    ) -> SavedSession:
        """Persist one snapshot unless the group/date is inside its cooldown.

        A rejected save is not queued; the caller must resubmit after the wait.
        """
        now = now or now_local()
        session_date = session_date or now.date()

        try:
            group = normalize_group(require_non_empty(group, "Group"))
            weekday = require_weekday(weekday)
        except ValidationError:
            raise ValidationError("Select a group and a week day first")

        recorder = self.start_session(owner_id, group, weekday)
        if not len(recorder):
            raise ValidationError("No students in this group for the selected week day")

        try:
            self._guard.ensure_unlocked(owner_id, group, session_date, now=now)
        except ResubmissionLockedError as e:
            logger.info("Save rejected for group %s on %s (owner=%s): %s", group, session_date, owner_id, e)
            raise

        self.apply_statuses(recorder, statuses)
        rows = recorder.rows()

        snapshot_id = self._history.create(
            owner_id=int(owner_id),
            group=group,
            weekday=weekday,
            session_date=session_date,
            created_at=now,
            students=[r.freeze() for r in rows],
        )
        logger.info("Attendance saved for group %s on %s as %s (owner=%s)", group, session_date, snapshot_id, owner_id)
        return SavedSession(snapshot_id=snapshot_id, session_date=session_date, created_at=now, counts=recorder.counts())
