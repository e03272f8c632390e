from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.exceptions import RecordNotFoundError
from ..rest.client import RestClient
from .model import (
    AttendanceSnapshot,
    SnapshotStudent,
    sort_recent_first,
    students_from_documents,
    students_to_documents,
)
from .repository import HistoryRepository

_COLLECTION = "/attendanceHistory"


def _to_snapshot(doc: dict) -> AttendanceSnapshot:
    return AttendanceSnapshot(
        snapshot_id=str(doc["id"]),
        owner_id=int(doc.get("ownerId") or 0),
        group=doc.get("group") or "",
        weekday=doc.get("weekday") or "",
        session_date=parse_iso_date(doc["date"]),
        created_at=parse_iso_datetime(doc["created_at"]),
        students=students_from_documents(doc.get("students")),
    )


def _to_document(
    *,
    owner_id: int,
    group: str,
    weekday: str,
    session_date: date,
    created_at: datetime,
    students,
) -> dict:
    return {
        "ownerId": int(owner_id),
        "group": group,
        "weekday": weekday,
        "date": session_date.isoformat(),
        "created_at": created_at.isoformat(),
        "students": students_to_documents(students),
    }


class RestHistoryRepository(HistoryRepository):
    def __init__(self, client: RestClient):
        self._client = client

    def list_by_owner(self, owner_id: int) -> Sequence[AttendanceSnapshot]:
        docs = self._client.get(_COLLECTION, ownerId=int(owner_id)) or []
        return sort_recent_first(
            _to_snapshot(d) for d in docs if int(d.get("ownerId") or 0) == int(owner_id)
        )

    def get_by_id(self, snapshot_id: str, *, owner_id: int) -> Optional[AttendanceSnapshot]:
        try:
            doc = self._client.get(f"{_COLLECTION}/{snapshot_id}")
        except RecordNotFoundError:
            return None
        snapshot = _to_snapshot(doc)
        return snapshot if snapshot.owner_id == int(owner_id) else None

    def create(
        self,
        *,
        owner_id: int,
        group: str,
        weekday: str,
        session_date: date,
        created_at: datetime,
        students: Sequence[SnapshotStudent],
    ) -> str:
        doc = self._client.post(
            _COLLECTION,
            _to_document(
                owner_id=owner_id,
                group=group,
                weekday=weekday,
                session_date=session_date,
                created_at=created_at,
                students=students,
            ),
        )
        return str(doc["id"])

    def replace(self, snapshot: AttendanceSnapshot) -> bool:
        if not self.get_by_id(snapshot.snapshot_id, owner_id=snapshot.owner_id):
            return False
        body = _to_document(
            owner_id=snapshot.owner_id,
            group=snapshot.group,
            weekday=snapshot.weekday,
            session_date=snapshot.session_date,
            created_at=snapshot.created_at,
            students=snapshot.students,
        )
        body["id"] = snapshot.snapshot_id
        self._client.put(f"{_COLLECTION}/{snapshot.snapshot_id}", body)
        return True

    def delete_by_id(self, snapshot_id: str, *, owner_id: int) -> bool:
        if not self.get_by_id(snapshot_id, owner_id=owner_id):
            return False
        try:
            self._client.delete(f"{_COLLECTION}/{snapshot_id}")
        except RecordNotFoundError:
            return False
        return True
