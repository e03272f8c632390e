from datetime import date, datetime

import pytest

from src.attendance_book.attendance_book.core.enums import AttendanceStatus
from src.attendance_book.attendance_book.core.exceptions import (
    BackendError,
    ConfirmationRequiredError,
    RecordNotFoundError,
    ValidationError,
)
from src.attendance_book.attendance_book.history.memory_history_repository import InMemoryHistoryRepository
from src.attendance_book.attendance_book.history.model import SnapshotStudent
from src.attendance_book.attendance_book.history.service import HistoryService
from src.attendance_book.attendance_book.history.viewer import HistoryViewer

OWNER = 1


def _add(history, session_date, *, created_at=None, group="A1"):
    return history.create(
        owner_id=OWNER,
        group=group,
        weekday="Monday",
        session_date=session_date,
        created_at=created_at or datetime.combine(session_date, datetime.min.time()),
        students=[
            SnapshotStudent("s1", "Ali", group, AttendanceStatus.PRESENT),
            SnapshotStudent("s2", "Bek", group, AttendanceStatus.ABSENT),
        ],
    )


class FlakyHistory(InMemoryHistoryRepository):
    """Backend that fails on selected deletes."""

    def __init__(self, failing_ids=()):
        super().__init__()
        self.failing_ids = set(failing_ids)

    def delete_by_id(self, snapshot_id, *, owner_id):
        if snapshot_id in self.failing_ids:
            raise BackendError("backend unavailable")
        return super().delete_by_id(snapshot_id, owner_id=owner_id)


def test_list_is_most_recent_first():
    history = InMemoryHistoryRepository()
    _add(history, date(2023, 12, 30))
    _add(history, date(2024, 1, 2))
    _add(history, date(2024, 1, 2), created_at=datetime(2024, 1, 2, 9, 0))

    svc = HistoryService(history)
    out = svc.list(OWNER)
    assert [(s.session_date, s.created_at.hour) for s in out] == [
        (date(2024, 1, 2), 9),
        (date(2024, 1, 2), 0),
        (date(2023, 12, 30), 0),
    ]


def test_edit_changes_exactly_one_row():
    history = InMemoryHistoryRepository()
    sid = _add(history, date(2024, 1, 1))
    svc = HistoryService(history)
    before = svc.get(OWNER, sid)

    svc.edit_student_in_snapshot(OWNER, sid, "s2", AttendanceStatus.LATE, 7)

    after = svc.get(OWNER, sid)
    changed = [(a, b) for a, b in zip(before.students, after.students) if a != b]
    assert len(changed) == 1
    assert changed[0][1].status == AttendanceStatus.LATE
    assert changed[0][1].late_minutes == 7
    assert (after.group, after.session_date, after.created_at) == (before.group, before.session_date, before.created_at)


def test_edit_unknown_student_is_rejected():
    history = InMemoryHistoryRepository()
    sid = _add(history, date(2024, 1, 1))
    with pytest.raises(ValidationError):
        HistoryService(history).edit_student_in_snapshot(OWNER, sid, "nope", AttendanceStatus.PRESENT)


def test_edit_unknown_snapshot_is_not_found():
    with pytest.raises(RecordNotFoundError):
        HistoryService(InMemoryHistoryRepository()).edit_student_in_snapshot(OWNER, "42", "s1", AttendanceStatus.PRESENT)


def test_delete_needs_confirmation():
    history = InMemoryHistoryRepository()
    sid = _add(history, date(2024, 1, 1))
    svc = HistoryService(history)

    with pytest.raises(ConfirmationRequiredError):
        svc.delete(OWNER, sid)
    assert len(svc.list(OWNER)) == 1

    svc.delete(OWNER, sid, confirm=True)
    assert svc.list(OWNER) == []


def test_clear_older_than_removes_inclusive_threshold():
    history = InMemoryHistoryRepository()
    _add(history, date(2023, 12, 30))
    _add(history, date(2024, 1, 1))
    kept = _add(history, date(2024, 1, 2))
    svc = HistoryService(history)

    result = svc.clear_older_than(OWNER, date(2024, 1, 1), confirm=True)

    assert (result.removed, result.failed, result.total) == (2, 0, 2)
    assert [s.snapshot_id for s in svc.list(OWNER)] == [kept]


def test_clear_counts_failures_and_keeps_going():
    history = FlakyHistory(failing_ids={"1"})
    _add(history, date(2023, 12, 30))
    _add(history, date(2023, 12, 31))
    svc = HistoryService(history)

    result = svc.clear_older_than(OWNER, date(2024, 1, 1), confirm=True)
    assert (result.removed, result.failed) == (1, 1)
    assert [s.snapshot_id for s in svc.list(OWNER)] == ["1"]


def test_clear_needs_confirmation():
    history = InMemoryHistoryRepository()
    _add(history, date(2023, 12, 30))
    with pytest.raises(ConfirmationRequiredError):
        HistoryService(history).clear_older_than(OWNER, date(2024, 1, 1))
    assert len(history.list_by_owner(OWNER)) == 1


def test_viewer_keeps_list_when_delete_fails():
    history = InMemoryHistoryRepository()
    _add(history, date(2024, 1, 1))
    _add(history, date(2024, 1, 2))
    viewer = HistoryViewer(HistoryService(history), OWNER)
    before = viewer.refresh()

    with pytest.raises(BackendError):
        viewer.delete("does-not-exist", confirm=True)
    assert viewer.snapshots == before


def test_viewer_drops_row_after_successful_delete():
    history = InMemoryHistoryRepository()
    first = _add(history, date(2024, 1, 1))
    second = _add(history, date(2024, 1, 2))
    viewer = HistoryViewer(HistoryService(history), OWNER)
    viewer.refresh()

    viewer.delete(first, confirm=True)
    assert [s.snapshot_id for s in viewer.snapshots] == [second]


def test_viewer_edit_replaces_cached_snapshot():
    history = InMemoryHistoryRepository()
    sid = _add(history, date(2024, 1, 1))
    viewer = HistoryViewer(HistoryService(history), OWNER)
    viewer.refresh()

    viewer.edit_student(sid, "s1", AttendanceStatus.ABSENT)
    assert viewer.snapshots[0].find_student("s1").status == AttendanceStatus.ABSENT


def test_snapshots_are_owner_scoped():
    history = InMemoryHistoryRepository()
    sid = _add(history, date(2024, 1, 1))
    svc = HistoryService(history)

    assert svc.list(2) == []
    with pytest.raises(RecordNotFoundError):
        svc.get(2, sid)
