import pytest

from src.attendance_book.attendance_book.core.exceptions import (
    ConfirmationRequiredError,
    RecordNotFoundError,
    ValidationError,
)
from src.attendance_book.attendance_book.roster.memory_student_repository import InMemoryStudentRepository
from src.attendance_book.attendance_book.roster.service import RosterService

OWNER = 1


def _fields(**overrides):
    fields = dict(full_name="aLI valiyev", phone_number="90 123 45 67", group="  frontend-1 ", week_days=["Wednesday", "Monday"])
    fields.update(overrides)
    return fields


def test_create_normalizes_fields():
    svc = RosterService(InMemoryStudentRepository())
    sid = svc.create(OWNER, **_fields())

    s = svc.get(OWNER, sid)
    assert s.full_name == "Ali Valiyev"
    assert s.phone_number == "+998 90 123-45-67"
    assert s.group == "Frontend-1"
    assert s.week_days == ("Monday", "Wednesday")


@pytest.mark.parametrize(
    "overrides",
    [
        {"full_name": "  "},
        {"phone_number": ""},
        {"group": None},
        {"week_days": []},
        {"week_days": ["Someday"]},
    ],
)
def test_create_rejects_incomplete_input(overrides):
    repo = InMemoryStudentRepository()
    with pytest.raises(ValidationError):
        RosterService(repo).create(OWNER, **_fields(**overrides))
    assert repo.list_by_owner(OWNER) == []


def test_search_matches_name_phone_or_group():
    svc = RosterService(InMemoryStudentRepository())
    ali = svc.create(OWNER, **_fields())
    svc.create(OWNER, **_fields(full_name="bek", phone_number="991112233", group="backend"))

    assert [s.student_id for s in svc.search(OWNER, "ALI")] == [ali]
    assert len(svc.search(OWNER, "end")) == 2
    assert len(svc.search(OWNER, "99")) == 2
    assert [s.full_name for s in svc.search(OWNER, "123-45")] == ["Ali Valiyev"]


def test_search_checked_only():
    svc = RosterService(InMemoryStudentRepository())
    ali = svc.create(OWNER, **_fields())
    svc.create(OWNER, **_fields(full_name="bek"))

    out = svc.search(OWNER, checked_ids=[ali], checked_only=True)
    assert [s.student_id for s in out] == [ali]
    assert len(svc.search(OWNER, checked_ids=[ali])) == 2


def test_groups_and_week_day_prefill():
    svc = RosterService(InMemoryStudentRepository())
    svc.create(OWNER, **_fields())
    svc.create(OWNER, **_fields(full_name="bek", week_days=["Friday"]))
    svc.create(OWNER, **_fields(full_name="cora", group="b2"))

    assert svc.groups(OWNER) == ["Frontend-1", "B2"]
    assert svc.week_days_for_group(OWNER, "frontend-1") == ("Friday",)
    assert svc.week_days_for_group(OWNER, "nope") == ()


def test_update_and_delete():
    svc = RosterService(InMemoryStudentRepository())
    sid = svc.create(OWNER, **_fields())

    svc.update(OWNER, sid, **_fields(full_name="ali karimov"))
    assert svc.get(OWNER, sid).full_name == "Ali Karimov"

    with pytest.raises(ConfirmationRequiredError):
        svc.delete(OWNER, sid)
    svc.delete(OWNER, sid, confirm=True)
    with pytest.raises(RecordNotFoundError):
        svc.get(OWNER, sid)


def test_other_owner_cannot_touch_students():
    svc = RosterService(InMemoryStudentRepository())
    sid = svc.create(OWNER, **_fields())

    assert svc.list(2) == []
    with pytest.raises(RecordNotFoundError):
        svc.update(2, sid, **_fields())
    with pytest.raises(RecordNotFoundError):
        svc.delete(2, sid, confirm=True)
