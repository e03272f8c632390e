import pytest

from src.attendance_book.attendance_book.attendance.recorder import AttendanceRecorder
from src.attendance_book.attendance_book.core.enums import AttendanceStatus
from src.attendance_book.attendance_book.core.exceptions import ValidationError
from src.attendance_book.attendance_book.roster.model import Student


def _roster():
    return [
        Student(student_id="1", owner_id=1, full_name="Ali", phone_number="", group="A1", week_days=("Monday",)),
        Student(student_id="2", owner_id=1, full_name="Bek", phone_number="", group="A1", week_days=("Monday",)),
    ]


def test_rows_start_unset_and_numbered_from_one():
    rec = AttendanceRecorder(_roster())
    rows = rec.rows()
    assert [r.order for r in rows] == [1, 2]
    assert all(r.status == AttendanceStatus.UNSET for r in rows)


def test_set_status_is_idempotent():
    rec = AttendanceRecorder(_roster())
    rec.set_status("1", AttendanceStatus.PRESENT)
    once = rec.rows()
    rec.set_status("1", AttendanceStatus.PRESENT)
    assert rec.rows() == once


def test_last_write_wins_and_other_rows_untouched():
    rec = AttendanceRecorder(_roster())
    rec.set_status("1", AttendanceStatus.PRESENT)
    rec.set_status("1", AttendanceStatus.ABSENT)
    assert rec.status_of("1") == AttendanceStatus.ABSENT
    assert rec.status_of("2") == AttendanceStatus.UNSET


def test_late_minutes_only_kept_for_late_rows():
    rec = AttendanceRecorder(_roster())
    rec.set_status("1", AttendanceStatus.LATE, 15)
    assert rec.late_minutes_of("1") == 15

    rec.set_status("1", AttendanceStatus.PRESENT)
    assert rec.late_minutes_of("1") is None

    with pytest.raises(ValidationError):
        rec.set_late_minutes("1", 5)


def test_negative_late_minutes_rejected():
    rec = AttendanceRecorder(_roster())
    with pytest.raises(ValidationError):
        rec.set_status("1", AttendanceStatus.LATE, -1)


def test_counts_and_reset():
    rec = AttendanceRecorder(_roster())
    rec.set_status("1", AttendanceStatus.PRESENT)
    rec.set_status("2", AttendanceStatus.LATE, 3)
    assert rec.counts() == {"unset": 0, "present": 1, "absent": 0, "late": 1}

    rec.reset()
    assert rec.counts()["unset"] == 2
    assert rec.late_minutes_of("2") is None


def test_membership_follows_the_session_roster():
    rec = AttendanceRecorder(_roster())
    assert "1" in rec
    assert "3" not in rec
