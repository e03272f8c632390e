from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_book.attendance_book.container import build_container
from src.attendance_book.attendance_book.core.exceptions import AuthenticationError

DEMO_EMAIL = "demo@attendance.local"
DEMO_PASSWORD = "demo1234"

DEMO_STUDENTS = [
    ("ali valiyev", "901234567", "a1", ["Monday", "Wednesday"]),
    ("bek karimov", "901112233", "a1", ["Monday"]),
    ("dilnoza rashidova", "935556677", "b2", ["Tuesday", "Thursday"]),
]


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    auth = container.auth_service

    try:
        user = auth.sign_in(DEMO_EMAIL, DEMO_PASSWORD)
    except AuthenticationError:
        user = auth.sign_up(email=DEMO_EMAIL, password=DEMO_PASSWORD, full_name="Demo Teacher")

    if container.roster_service.list(user.user_id):
        print(f"OK: Demo roster already present for {DEMO_EMAIL}")
        return

    for full_name, phone, group, week_days in DEMO_STUDENTS:
        container.roster_service.create(
            user.user_id,
            full_name=full_name,
            phone_number=phone,
            group=group,
            week_days=week_days,
        )

    print(f"OK: Seeded {len(DEMO_STUDENTS)} students for {DEMO_EMAIL} (backend={container.backend.value})")


if __name__ == "__main__":
    main()
