from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from src.attendance_book.attendance_book.container import build_container
from src.attendance_book.attendance_book.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 1, 10, 0, 0)


@pytest.fixture
def settings(tmp_path):
    return SimpleNamespace(
        BACKEND="memory",
        LOCK_COOLDOWN_HOURS=20,
        HISTORY_POLL_SECONDS=60,
        AVATAR_DIR=str(tmp_path / "avatars"),
    )


@pytest.fixture
def container(settings):
    return build_container(settings=settings)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
