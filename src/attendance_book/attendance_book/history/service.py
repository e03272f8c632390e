from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..common.validators import require_late_minutes
from ..core.enums import AttendanceStatus
from ..core.exceptions import BackendError, ConfirmationRequiredError, RecordNotFoundError, ValidationError
from .model import AttendanceSnapshot
from .repository import HistoryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClearResult:
    removed: int
    failed: int

    @property
    def total(self) -> int:
        return self.removed + self.failed


class HistoryService:
    """Use case: review, correct and prune saved attendance snapshots."""

    def __init__(self, history: HistoryRepository):
        self._history = history

    def list(self, owner_id: int) -> list[AttendanceSnapshot]:
        return list(self._history.list_by_owner(int(owner_id)))

    def get(self, owner_id: int, snapshot_id: str) -> AttendanceSnapshot:
        snapshot = self._history.get_by_id(str(snapshot_id), owner_id=int(owner_id))
        if not snapshot:
            raise RecordNotFoundError(f"Attendance record {snapshot_id} not found")
        return snapshot

    def delete(self, owner_id: int, snapshot_id: str, *, confirm: bool = False) -> None:
        if not confirm:
            raise ConfirmationRequiredError("Do you really want to delete this attendance record?")
        if not self._history.delete_by_id(str(snapshot_id), owner_id=int(owner_id)):
            raise RecordNotFoundError(f"Attendance record {snapshot_id} not found")
        logger.info("Attendance record %s deleted (owner=%s)", snapshot_id, owner_id)

    def edit_student_in_snapshot(
        self,
        owner_id: int,
        snapshot_id: str,
        student_id: str,
        status: AttendanceStatus,
        late_minutes: Optional[int] = None,
    ) -> AttendanceSnapshot:
        """Replace one row's status and rewrite the whole snapshot document."""
        status = AttendanceStatus(status)
        snapshot = self.get(owner_id, snapshot_id)

        row = snapshot.find_student(student_id)
        if not row:
            raise ValidationError(f"Student {student_id} is not part of this attendance record")

        minutes = None
        if status == AttendanceStatus.LATE and late_minutes is not None:
            minutes = require_late_minutes(late_minutes)

        updated = snapshot.with_student(replace(row, status=status, late_minutes=minutes))
        if not self._history.replace(updated):
            raise RecordNotFoundError(f"Attendance record {snapshot_id} not found")

        logger.info(
            "Attendance record %s: student %s set to %s (owner=%s)",
            snapshot_id,
            student_id,
            status.value,
            owner_id,
        )
        return updated

    def clear_older_than(self, owner_id: int, threshold: date, *, confirm: bool = False) -> ClearResult:
        """Delete every snapshot dated on or before `threshold`.

        Individual failures do not stop the sweep; they are counted and logged.
        """
        if not confirm:
            raise ConfirmationRequiredError(f"Delete all attendance records up to {threshold.isoformat()}?")

        removed = failed = 0
        for snapshot in self.list(owner_id):
            if snapshot.session_date > threshold:
                continue
            try:
                ok = self._history.delete_by_id(snapshot.snapshot_id, owner_id=int(owner_id))
            except BackendError as e:
                logger.warning("Could not delete attendance record %s: %s", snapshot.snapshot_id, e)
                ok = False
            if ok:
                removed += 1
            else:
                failed += 1

        logger.info(
            "Cleared attendance up to %s (owner=%s): removed=%s failed=%s",
            threshold.isoformat(),
            owner_id,
            removed,
            failed,
        )
        return ClearResult(removed=removed, failed=failed)
