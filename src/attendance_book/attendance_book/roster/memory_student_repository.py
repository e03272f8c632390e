from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from .model import Student, StudentInput
from .repository import StudentRepository


class InMemoryStudentRepository(StudentRepository):
    """Process-local roster (development backend and tests)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._rows: dict[str, Student] = {}
        self._next_id = 1

    def list_by_owner(self, owner_id: int) -> Sequence[Student]:
        with self._lock:
            return [s for s in self._rows.values() if s.owner_id == int(owner_id)]

    def get_by_id(self, student_id: str, *, owner_id: int) -> Optional[Student]:
        with self._lock:
            s = self._rows.get(str(student_id))
            return s if s and s.owner_id == int(owner_id) else None

    def create(self, *, owner_id: int, data: StudentInput) -> str:
        with self._lock:
            sid = str(self._next_id)
            self._next_id += 1
            self._rows[sid] = Student(
                student_id=sid,
                owner_id=int(owner_id),
                full_name=data.full_name,
                phone_number=data.phone_number,
                group=data.group,
                week_days=tuple(data.week_days),
            )
            return sid

    def update_by_id(self, student_id: str, *, owner_id: int, data: StudentInput) -> bool:
        with self._lock:
            s = self._rows.get(str(student_id))
            if not s or s.owner_id != int(owner_id):
                return False
            self._rows[s.student_id] = replace(
                s,
                full_name=data.full_name,
                phone_number=data.phone_number,
                group=data.group,
                week_days=tuple(data.week_days),
            )
            return True

    def delete_by_id(self, student_id: str, *, owner_id: int) -> bool:
        with self._lock:
            s = self._rows.get(str(student_id))
            if not s or s.owner_id != int(owner_id):
                return False
            del self._rows[s.student_id]
            return True
