from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Domain entity: one roster entry.

    Note: Plain data object (no DB access). `week_days` keeps calendar order.
    """

    student_id: str
    owner_id: int
    full_name: str
    phone_number: str
    group: str
    week_days: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "fullName": self.full_name,
            "phoneNumber": self.phone_number,
            "group": self.group,
            "weekDays": list(self.week_days),
        }


@dataclass(frozen=True)
class StudentInput:
    """Validated, normalized form data for create/update."""

    full_name: str
    phone_number: str
    group: str
    week_days: tuple[str, ...]
