from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus
from .model import AttendanceSnapshot
from .service import ClearResult, HistoryService


class HistoryViewer:
    """Cached, ordered view of an owner's history.

    The cache changes only after the backend call succeeded; a failing call
    propagates its error and leaves `snapshots` exactly as it was.
    """

    def __init__(self, service: HistoryService, owner_id: int):
        self._service = service
        self._owner_id = int(owner_id)
        self._snapshots: list[AttendanceSnapshot] = []

    @property
    def snapshots(self) -> tuple[AttendanceSnapshot, ...]:
        return tuple(self._snapshots)

    def refresh(self) -> tuple[AttendanceSnapshot, ...]:
        self._snapshots = self._service.list(self._owner_id)
        return self.snapshots

    def delete(self, snapshot_id: str, *, confirm: bool = False) -> None:
        self._service.delete(self._owner_id, snapshot_id, confirm=confirm)
        self._snapshots = [s for s in self._snapshots if s.snapshot_id != str(snapshot_id)]

    def edit_student(
        self,
        snapshot_id: str,
        student_id: str,
        status: AttendanceStatus,
        late_minutes: Optional[int] = None,
    ) -> AttendanceSnapshot:
        updated = self._service.edit_student_in_snapshot(self._owner_id, snapshot_id, student_id, status, late_minutes)
        self._snapshots = [updated if s.snapshot_id == updated.snapshot_id else s for s in self._snapshots]
        return updated

    def clear_older_than(self, threshold, *, confirm: bool = False) -> ClearResult:
        result = self._service.clear_older_than(self._owner_id, threshold, confirm=confirm)
        self.refresh()
        return result
