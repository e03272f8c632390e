from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.validators import (
    format_phone,
    normalize_full_name,
    normalize_group,
    require_non_empty,
    require_week_days,
)
from ..core.exceptions import ConfirmationRequiredError, RecordNotFoundError
from .model import Student, StudentInput
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: manage the owner's student roster."""

    def __init__(self, students: StudentRepository):
        self._students = students

    @staticmethod
    def build_input(
        *,
        full_name: Optional[str],
        phone_number: Optional[str],
        group: Optional[str],
        week_days: Optional[Iterable[str]],
    ) -> StudentInput:
        """Validate and normalize form fields. No backend round-trip."""
        full_name = normalize_full_name(require_non_empty(full_name, "Full name"))
        phone_number = format_phone(require_non_empty(phone_number, "Phone number"))
        group = normalize_group(require_non_empty(group, "Group"))
        return StudentInput(
            full_name=full_name,
            phone_number=phone_number,
            group=group,
            week_days=require_week_days(week_days),
        )

    def list(self, owner_id: int) -> Sequence[Student]:
        return list(self._students.list_by_owner(int(owner_id)))

    def search(
        self,
        owner_id: int,
        query: str = "",
        *,
        checked_ids: Optional[Iterable[str]] = None,
        checked_only: bool = False,
    ) -> list[Student]:
        """Case-insensitive substring match on name, phone or group.

        `checked_ids` is the device-local selection; it only matters with `checked_only`.
        """
        rows = self.list(owner_id)
        q = (query or "").strip().lower()
        if q:
            rows = [
                s
                for s in rows
                if q in s.full_name.lower() or q in s.phone_number.lower() or q in s.group.lower()
            ]
        if checked_only:
            checked = set(checked_ids or ())
            rows = [s for s in rows if s.student_id in checked]
        return rows

    def groups(self, owner_id: int) -> list[str]:
        seen: dict[str, None] = {}
        for s in self.list(owner_id):
            g = s.group.strip()
            if g:
                seen.setdefault(g, None)
        return list(seen)

    def week_days_for_group(self, owner_id: int, group: str) -> tuple[str, ...]:
        """Week days of the most recently added student in `group` (form pre-fill)."""
        group = normalize_group(group or "")
        matches = [s for s in self.list(owner_id) if s.group == group]
        return matches[-1].week_days if matches else ()

    def get(self, owner_id: int, student_id: str) -> Student:
        student = self._students.get_by_id(str(student_id), owner_id=int(owner_id))
        if not student:
            raise RecordNotFoundError(f"Student {student_id} not found")
        return student

    def create(self, owner_id: int, **fields) -> str:
        data = self.build_input(**fields)
        student_id = self._students.create(owner_id=int(owner_id), data=data)
        logger.info("Student %s added to group %s (owner=%s)", student_id, data.group, owner_id)
        return student_id

    def update(self, owner_id: int, student_id: str, **fields) -> None:
        data = self.build_input(**fields)
        if not self._students.update_by_id(str(student_id), owner_id=int(owner_id), data=data):
            raise RecordNotFoundError(f"Student {student_id} not found")
        logger.info("Student %s updated (owner=%s)", student_id, owner_id)

    def delete(self, owner_id: int, student_id: str, *, confirm: bool = False) -> None:
        if not confirm:
            raise ConfirmationRequiredError("Do you really want to delete this student?")
        if not self._students.delete_by_id(str(student_id), owner_id=int(owner_id)):
            raise RecordNotFoundError(f"Student {student_id} not found")
        logger.info("Student %s deleted (owner=%s)", student_id, owner_id)
