from __future__ import annotations

from typing import Iterable, Optional

from ..common.validators import require_late_minutes
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..roster.model import Student
from .model import AttendanceRow


class AttendanceRecorder:
    """Local status map for the active session.

    Purely in-process: nothing here talks to a backend. `set_status` is total
    and idempotent, so replaying the same click changes nothing.
    """

    def __init__(self, students: Iterable[Student]):
        self._students = list(students)
        self._status: dict[str, AttendanceStatus] = {}
        self._late: dict[str, int] = {}
        self.reset()

    def reset(self) -> None:
        self._status = {s.student_id: AttendanceStatus.UNSET for s in self._students}
        self._late = {}

    def set_status(self, student_id: str, status: AttendanceStatus, late_minutes: Optional[int] = None) -> None:
        student_id = str(student_id)
        status = AttendanceStatus(status)
        self._status[student_id] = status
        self._late.pop(student_id, None)
        if status == AttendanceStatus.LATE and late_minutes is not None:
            self._late[student_id] = require_late_minutes(late_minutes)

    def set_late_minutes(self, student_id: str, minutes: int) -> None:
        student_id = str(student_id)
        if self._status.get(student_id) != AttendanceStatus.LATE:
            raise ValidationError("Late minutes can only be set for a student marked late")
        self._late[student_id] = require_late_minutes(minutes)

    def status_of(self, student_id: str) -> AttendanceStatus:
        return self._status.get(str(student_id), AttendanceStatus.UNSET)

    def late_minutes_of(self, student_id: str) -> Optional[int]:
        return self._late.get(str(student_id))

    def rows(self) -> list[AttendanceRow]:
        return [
            AttendanceRow(
                order=i,
                student=s,
                status=self.status_of(s.student_id),
                late_minutes=self.late_minutes_of(s.student_id),
            )
            for i, s in enumerate(self._students, start=1)
        ]

    def counts(self) -> dict[str, int]:
        out = {st.value: 0 for st in AttendanceStatus}
        for row in self.rows():
            out[row.status.value] += 1
        return out

    def __contains__(self, student_id) -> bool:
        return str(student_id) in {s.student_id for s in self._students}

    def __len__(self) -> int:
        return len(self._students)
