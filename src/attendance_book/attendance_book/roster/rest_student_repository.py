from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import RecordNotFoundError
from ..rest.client import RestClient
from .model import Student, StudentInput
from .repository import StudentRepository

_COLLECTION = "/students"


def _to_student(doc: dict) -> Student:
    return Student(
        student_id=str(doc["id"]),
        owner_id=int(doc.get("ownerId") or 0),
        full_name=doc.get("fullName") or "",
        phone_number=doc.get("phoneNumber") or "",
        group=doc.get("group") or "",
        week_days=tuple(doc.get("weekDays") or ()),
    )


def _to_document(owner_id: int, data: StudentInput) -> dict:
    return {
        "ownerId": int(owner_id),
        "fullName": data.full_name,
        "phoneNumber": data.phone_number,
        "group": data.group,
        "weekDays": list(data.week_days),
    }


class RestStudentRepository(StudentRepository):
    def __init__(self, client: RestClient):
        self._client = client

    def list_by_owner(self, owner_id: int) -> Sequence[Student]:
        docs = self._client.get(_COLLECTION, ownerId=int(owner_id)) or []
        # servers that ignore the filter still must not leak other owners' rows
        return [_to_student(d) for d in docs if int(d.get("ownerId") or 0) == int(owner_id)]

    def get_by_id(self, student_id: str, *, owner_id: int) -> Optional[Student]:
        try:
            doc = self._client.get(f"{_COLLECTION}/{student_id}")
        except RecordNotFoundError:
            return None
        student = _to_student(doc)
        return student if student.owner_id == int(owner_id) else None

    def create(self, *, owner_id: int, data: StudentInput) -> str:
        doc = self._client.post(_COLLECTION, _to_document(owner_id, data))
        return str(doc["id"])

    def update_by_id(self, student_id: str, *, owner_id: int, data: StudentInput) -> bool:
        if not self.get_by_id(student_id, owner_id=owner_id):
            return False
        self._client.put(f"{_COLLECTION}/{student_id}", _to_document(owner_id, data))
        return True

    def delete_by_id(self, student_id: str, *, owner_id: int) -> bool:
        if not self.get_by_id(student_id, owner_id=owner_id):
            return False
        try:
            self._client.delete(f"{_COLLECTION}/{student_id}")
        except RecordNotFoundError:
            return False
        return True
