from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceSnapshot, SnapshotStudent


class HistoryRepository(Protocol):
    """Storage port for attendance snapshots.

    Snapshots are append-only at creation; `replace` is a full-document
    rewrite used by per-row edits.
    """

    def list_by_owner(self, owner_id: int) -> Sequence[AttendanceSnapshot]:
        """Most recent first (session_date DESC, created_at DESC)."""

        raise NotImplementedError

    def get_by_id(self, snapshot_id: str, *, owner_id: int) -> Optional[AttendanceSnapshot]:
        raise NotImplementedError

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
        raise NotImplementedError

    def replace(self, snapshot: AttendanceSnapshot) -> bool:
        raise NotImplementedError

    def delete_by_id(self, snapshot_id: str, *, owner_id: int) -> bool:
        raise NotImplementedError
