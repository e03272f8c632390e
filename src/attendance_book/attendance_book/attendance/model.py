from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus
from ..history.model import SnapshotStudent
from ..roster.model import Student


@dataclass(frozen=True)
class AttendanceRow:
    """Ephemeral row of the active session; discarded on re-filter unless saved."""

    order: int
    student: Student
    status: AttendanceStatus = AttendanceStatus.UNSET
    late_minutes: Optional[int] = None

    def freeze(self) -> SnapshotStudent:
        return SnapshotStudent(
            student_id=self.student.student_id,
            full_name=self.student.full_name,
            group=self.student.group,
            status=self.status,
            late_minutes=self.late_minutes,
        )

    def to_dict(self) -> dict:
        return {
            "order": self.order,
            "id": self.student.student_id,
            "fullName": self.student.full_name,
            "group": self.student.group,
            "status": self.status.value,
            "lateMinutes": self.late_minutes,
        }


@dataclass(frozen=True)
class RemainingTime:
    hours: int
    minutes: int

    def to_dict(self) -> dict:
        return {"hours": self.hours, "minutes": self.minutes}
