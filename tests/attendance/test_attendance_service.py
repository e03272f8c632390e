from datetime import date, timedelta

import pytest

from src.attendance_book.attendance_book.attendance.guard import ResubmissionGuard
from src.attendance_book.attendance_book.attendance.service import AttendanceService
from src.attendance_book.attendance_book.core.enums import AttendanceStatus
from src.attendance_book.attendance_book.core.exceptions import ResubmissionLockedError, ValidationError
from src.attendance_book.attendance_book.history.memory_history_repository import InMemoryHistoryRepository
from src.attendance_book.attendance_book.roster.memory_student_repository import InMemoryStudentRepository
from src.attendance_book.attendance_book.roster.model import StudentInput

OWNER = 1


def _setup():
    students = InMemoryStudentRepository()
    history = InMemoryHistoryRepository()
    svc = AttendanceService(students, history, ResubmissionGuard(history))

    ali = students.create(
        owner_id=OWNER,
        data=StudentInput("Ali", "+998 90 123-45-67", "A1", ("Monday", "Wednesday")),
    )
    bek = students.create(
        owner_id=OWNER,
        data=StudentInput("Bek", "+998 90 111-22-33", "A1", ("Monday",)),
    )
    students.create(
        owner_id=OWNER,
        data=StudentInput("Cora", "+998 90 555-66-77", "B2", ("Monday",)),
    )
    return svc, history, ali, bek


def test_ali_bek_session_is_saved_as_one_snapshot(fixed_now):
    svc, history, ali, bek = _setup()

    rows = svc.session_rows(OWNER, "A1", "Monday")
    assert [r.student.full_name for r in rows] == ["Ali", "Bek"]

    saved = svc.save(OWNER, "A1", "Monday", {ali: "present", bek: "absent"}, now=fixed_now)

    assert saved.session_date == date(2024, 1, 1)
    assert saved.counts == {"unset": 0, "present": 1, "absent": 1, "late": 0}

    snaps = history.list_by_owner(OWNER)
    assert len(snaps) == 1
    snap = snaps[0]
    assert (snap.group, snap.weekday, snap.created_at) == ("A1", "Monday", fixed_now)
    assert [(s.full_name, s.status) for s in snap.students] == [
        ("Ali", AttendanceStatus.PRESENT),
        ("Bek", AttendanceStatus.ABSENT),
    ]


def test_resubmission_inside_cooldown_is_rejected(fixed_now):
    svc, history, ali, bek = _setup()
    svc.save(OWNER, "A1", "Monday", {ali: "present"}, now=fixed_now)

    with pytest.raises(ResubmissionLockedError) as exc:
        svc.save(
            OWNER,
            "A1",
            "Monday",
            {ali: "absent"},
            now=fixed_now + timedelta(hours=19),
            session_date=date(2024, 1, 1),
        )
    assert (exc.value.remaining.hours, exc.value.remaining.minutes) == (1, 0)
    assert len(history.list_by_owner(OWNER)) == 1


def test_resubmission_after_cooldown_is_accepted(fixed_now):
    svc, history, ali, bek = _setup()
    svc.save(OWNER, "A1", "Monday", {ali: "present"}, now=fixed_now)

    svc.save(
        OWNER,
        "A1",
        "Monday",
        {ali: "late"},
        now=fixed_now + timedelta(hours=20, minutes=1),
        session_date=date(2024, 1, 1),
    )
    assert len(history.list_by_owner(OWNER)) == 2


def test_save_requires_both_selectors(fixed_now):
    svc, history, ali, bek = _setup()
    with pytest.raises(ValidationError):
        svc.save(OWNER, "", "Monday", {}, now=fixed_now)
    with pytest.raises(ValidationError):
        svc.save(OWNER, "A1", None, {}, now=fixed_now)
    assert history.list_by_owner(OWNER) == []


def test_save_rejects_empty_session(fixed_now):
    svc, history, ali, bek = _setup()
    with pytest.raises(ValidationError):
        svc.save(OWNER, "A1", "Friday", {}, now=fixed_now)


def test_late_minutes_travel_into_the_snapshot(fixed_now):
    svc, history, ali, bek = _setup()
    svc.save(OWNER, "A1", "Monday", {ali: {"status": "late", "lateMinutes": 12}}, now=fixed_now)

    row = history.list_by_owner(OWNER)[0].find_student(ali)
    assert row.status == AttendanceStatus.LATE
    assert row.late_minutes == 12
    assert row.to_document()["lateMinutes"] == 12


def test_unknown_status_is_rejected(fixed_now):
    svc, history, ali, bek = _setup()
    with pytest.raises(ValidationError):
        svc.save(OWNER, "A1", "Monday", {ali: "sick"}, now=fixed_now)
    assert history.list_by_owner(OWNER) == []


def test_rows_not_marked_are_saved_unset(fixed_now):
    svc, history, ali, bek = _setup()
    svc.save(OWNER, "A1", "Monday", {ali: "present"}, now=fixed_now)
    assert history.list_by_owner(OWNER)[0].find_student(bek).status == AttendanceStatus.UNSET


def test_other_owner_sees_nothing(fixed_now):
    svc, history, ali, bek = _setup()
    assert svc.session_rows(2, "A1", "Monday") == []


def test_group_selector_is_normalized_like_the_roster(fixed_now):
    svc, history, ali, bek = _setup()

    assert [r.student.full_name for r in svc.session_rows(OWNER, " a1 ", "Monday")] == ["Ali", "Bek"]

    svc.save(OWNER, "a1", "Monday", {ali: "present"}, now=fixed_now)
    assert history.list_by_owner(OWNER)[0].group == "A1"
    with pytest.raises(ResubmissionLockedError):
        svc.save(OWNER, "A1", "Monday", {ali: "present"}, now=fixed_now + timedelta(hours=1))


def test_status_for_student_outside_session_is_rejected(fixed_now):
    svc, history, ali, bek = _setup()
    cora = "3"  # third student added in _setup, group B2

    with pytest.raises(ValidationError):
        svc.save(OWNER, "A1", "Monday", {cora: "present"}, now=fixed_now)
    with pytest.raises(ValidationError):
        svc.save(OWNER, "A1", "Monday", {"999": "present"}, now=fixed_now)
    assert history.list_by_owner(OWNER) == []
