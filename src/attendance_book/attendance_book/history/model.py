from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class SnapshotStudent:
    """Frozen copy of one attendance row, taken at save time.

    Not a live reference to the roster: renaming or deleting the student later
    does not touch saved history.
    """

    student_id: str
    full_name: str
    group: str
    status: AttendanceStatus = AttendanceStatus.UNSET
    late_minutes: Optional[int] = None

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "id": self.student_id,
            "fullName": self.full_name,
            "group": self.group,
            "status": self.status.value,
        }
        if self.status == AttendanceStatus.LATE and self.late_minutes is not None:
            doc["lateMinutes"] = int(self.late_minutes)
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "SnapshotStudent":
        status = AttendanceStatus(doc.get("status") or AttendanceStatus.UNSET.value)
        late = doc.get("lateMinutes")
        return cls(
            student_id=str(doc["id"]),
            full_name=doc.get("fullName") or "",
            group=doc.get("group") or "",
            status=status,
            late_minutes=int(late) if status == AttendanceStatus.LATE and late is not None else None,
        )


@dataclass(frozen=True)
class AttendanceSnapshot:
    """History record: one completed attendance session."""

    snapshot_id: str
    owner_id: int
    group: str
    weekday: str
    session_date: date
    created_at: datetime
    students: tuple[SnapshotStudent, ...] = ()

    def with_student(self, row: SnapshotStudent) -> "AttendanceSnapshot":
        """Copy with the row of the same student id replaced; order preserved."""
        return replace(
            self,
            students=tuple(row if s.student_id == row.student_id else s for s in self.students),
        )

    def find_student(self, student_id: str) -> Optional[SnapshotStudent]:
        return next((s for s in self.students if s.student_id == str(student_id)), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.snapshot_id,
            "group": self.group,
            "weekday": self.weekday,
            "date": self.session_date.isoformat(),
            "created_at": self.created_at.isoformat(),
            "students": students_to_documents(self.students),
        }


def students_to_documents(students) -> list[dict[str, Any]]:
    return [s.to_document() for s in students]


def students_from_documents(docs) -> tuple[SnapshotStudent, ...]:
    return tuple(SnapshotStudent.from_document(d) for d in (docs or []))


def sort_recent_first(snapshots) -> list[AttendanceSnapshot]:
    return sorted(snapshots, key=lambda s: (s.session_date, s.created_at), reverse=True)
