from __future__ import annotations

import io
from typing import Iterable

import pandas as pd

from ..history.model import AttendanceSnapshot
from ..roster.model import Student

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ROSTER_COLUMNS = ["No", "Full name", "Phone", "Group", "Week days"]
HISTORY_COLUMNS = ["Date", "Week day", "Group", "Saved at", "Student", "Status", "Late minutes"]


def _to_xlsx(df: pd.DataFrame, sheet_name: str) -> bytes:
    # written in memory, never to disk
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


def export_roster_xlsx(students: Iterable[Student]) -> bytes:
    data = [
        {
            "No": i,
            "Full name": s.full_name,
            "Phone": s.phone_number,
            "Group": s.group,
            "Week days": ", ".join(s.week_days),
        }
        for i, s in enumerate(students, start=1)
    ]
    return _to_xlsx(pd.DataFrame(data, columns=ROSTER_COLUMNS), "Students")


def export_history_xlsx(snapshots: Iterable[AttendanceSnapshot]) -> bytes:
    """One line per student row of every snapshot, in the given order."""
    data = []
    for snap in snapshots:
        for row in snap.students:
            data.append(
                {
                    "Date": snap.session_date.isoformat(),
                    "Week day": snap.weekday,
                    "Group": snap.group,
                    "Saved at": snap.created_at.strftime("%Y-%m-%d %H:%M"),
                    "Student": row.full_name,
                    "Status": row.status.value,
                    "Late minutes": row.late_minutes if row.late_minutes is not None else "",
                }
            )
    return _to_xlsx(pd.DataFrame(data, columns=HISTORY_COLUMNS), "History")
