"""Example: drive the service layer directly (no Flask, in-memory backend).

Controllers are a thin layer; attendance rules live in the services.
"""

from datetime import datetime, timedelta
from types import SimpleNamespace

from src.attendance_book.attendance_book.container import build_container
from src.attendance_book.attendance_book.core.exceptions import ResubmissionLockedError


def main():
    container = build_container(settings=SimpleNamespace(BACKEND="memory", LOCK_COOLDOWN_HOURS=20))
    user = container.auth_service.sign_up(email="me@example.com", password="secret1", full_name="Me")

    for name in ("ali", "bek"):
        container.roster_service.create(
            user.user_id, full_name=name, phone_number="901234567", group="A1", week_days=["Monday"]
        )

    now = datetime(2024, 1, 1, 10, 0)
    rows = container.attendance_service.session_rows(user.user_id, "A1", "Monday")
    statuses = {rows[0].student.student_id: "present", rows[1].student.student_id: "absent"}
    saved = container.attendance_service.save(user.user_id, "A1", "Monday", statuses, now=now)
    print("saved", saved.snapshot_id, saved.counts)

    try:
        container.attendance_service.save(
            user.user_id, "A1", "Monday", statuses, now=now + timedelta(hours=19), session_date=now.date()
        )
    except ResubmissionLockedError as e:
        print("locked:", e)


if __name__ == "__main__":
    main()
