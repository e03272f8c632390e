from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Optional, Sequence

from .model import AttendanceSnapshot, SnapshotStudent, sort_recent_first
from .repository import HistoryRepository


class InMemoryHistoryRepository(HistoryRepository):
    """Process-local history (development backend and tests)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._rows: dict[str, AttendanceSnapshot] = {}
        self._next_id = 1

    def list_by_owner(self, owner_id: int) -> Sequence[AttendanceSnapshot]:
        with self._lock:
            return sort_recent_first(s for s in self._rows.values() if s.owner_id == int(owner_id))

    def get_by_id(self, snapshot_id: str, *, owner_id: int) -> Optional[AttendanceSnapshot]:
        with self._lock:
            s = self._rows.get(str(snapshot_id))
            return s if s and s.owner_id == int(owner_id) else None

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
        with self._lock:
            sid = str(self._next_id)
            self._next_id += 1
            self._rows[sid] = AttendanceSnapshot(
                snapshot_id=sid,
                owner_id=int(owner_id),
                group=group,
                weekday=weekday,
                session_date=session_date,
                created_at=created_at,
                students=tuple(students),
            )
            return sid

    def replace(self, snapshot: AttendanceSnapshot) -> bool:
        with self._lock:
            current = self._rows.get(snapshot.snapshot_id)
            if not current or current.owner_id != snapshot.owner_id:
                return False
            self._rows[snapshot.snapshot_id] = snapshot
            return True

    def delete_by_id(self, snapshot_id: str, *, owner_id: int) -> bool:
        with self._lock:
            s = self._rows.get(str(snapshot_id))
            if not s or s.owner_id != int(owner_id):
                return False
            del self._rows[s.snapshot_id]
            return True
