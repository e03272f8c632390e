from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentInput


class StudentRepository(Protocol):
    """Storage port for the roster.

    Note (DIP): services depend on this interface, never on a concrete backend.
    Every call is scoped to the owning account.
    """

    def list_by_owner(self, owner_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: str, *, owner_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, owner_id: int, data: StudentInput) -> str:
        raise NotImplementedError

    def update_by_id(self, student_id: str, *, owner_id: int, data: StudentInput) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: str, *, owner_id: int) -> bool:
        raise NotImplementedError
