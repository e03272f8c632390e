import io
from datetime import date, datetime

from openpyxl import load_workbook

from src.attendance_book.attendance_book.core.enums import AttendanceStatus
from src.attendance_book.attendance_book.export.excel import export_history_xlsx, export_roster_xlsx
from src.attendance_book.attendance_book.history.model import AttendanceSnapshot, SnapshotStudent
from src.attendance_book.attendance_book.roster.model import Student


def _rows(content: bytes, sheet: str):
    wb = load_workbook(io.BytesIO(content))
    return [list(r) for r in wb[sheet].iter_rows(values_only=True)]


def test_roster_workbook():
    students = [
        Student("1", 1, "Ali Valiyev", "+998 90 123-45-67", "A1", ("Monday", "Wednesday")),
        Student("2", 1, "Bek", "+998 90 111-22-33", "B2", ("Friday",)),
    ]
    rows = _rows(export_roster_xlsx(students), "Students")

    assert rows[0] == ["No", "Full name", "Phone", "Group", "Week days"]
    assert rows[1] == [1, "Ali Valiyev", "+998 90 123-45-67", "A1", "Monday, Wednesday"]
    assert rows[2][0] == 2
    assert len(rows) == 3


def test_history_workbook_has_one_line_per_student():
    snap = AttendanceSnapshot(
        snapshot_id="7",
        owner_id=1,
        group="A1",
        weekday="Monday",
        session_date=date(2024, 1, 1),
        created_at=datetime(2024, 1, 1, 10, 0),
        students=(
            SnapshotStudent("1", "Ali", "A1", AttendanceStatus.PRESENT),
            SnapshotStudent("2", "Bek", "A1", AttendanceStatus.LATE, 10),
        ),
    )
    rows = _rows(export_history_xlsx([snap]), "History")

    assert rows[0][:6] == ["Date", "Week day", "Group", "Saved at", "Student", "Status"]
    assert rows[1][4:6] == ["Ali", "present"]
    assert rows[2][4:] == ["Bek", "late", 10]
    assert len(rows) == 3


def test_empty_exports_still_have_headers():
    assert _rows(export_roster_xlsx([]), "Students") == [["No", "Full name", "Phone", "Group", "Week days"]]
    assert len(_rows(export_history_xlsx([]), "History")) == 1
