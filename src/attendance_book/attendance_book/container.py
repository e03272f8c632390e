from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional

import httpx

from .attendance.guard import ResubmissionGuard
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HISTORY_POLL_SECONDS, DEFAULT_LOCK_COOLDOWN_HOURS
from .core.enums import Backend
from .database.connection import DBConfig, DatabaseConnection
from .history.memory_history_repository import InMemoryHistoryRepository
from .history.mysql_history_repository import MySQLHistoryRepository
from .history.repository import HistoryRepository
from .history.rest_history_repository import RestHistoryRepository
from .history.service import HistoryService
from .history.viewer import HistoryViewer
from .rest.client import RestClient
from .roster.memory_student_repository import InMemoryStudentRepository
from .roster.mysql_student_repository import MySQLStudentRepository
from .roster.repository import StudentRepository
from .roster.rest_student_repository import RestStudentRepository
from .roster.service import RosterService
from .users.avatars import AvatarStorage, LocalAvatarStorage
from .users.events import AuthEventBus
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.rest_user_repository import RestUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    backend: Backend
    conn: Optional[DatabaseConnection]
    rest_client: Optional[RestClient]

    students_repo: StudentRepository
    history_repo: HistoryRepository
    users_repo: UserRepository
    avatar_storage: AvatarStorage
    auth_events: AuthEventBus

    guard: ResubmissionGuard
    roster_service: RosterService
    attendance_service: AttendanceService
    history_service: HistoryService
    auth_service: AuthService

    history_poll_seconds: int = DEFAULT_HISTORY_POLL_SECONDS

    def history_viewer(self, owner_id: int) -> HistoryViewer:
        return HistoryViewer(self.history_service, owner_id)


def build_container(*, settings: Any, rest_transport: Optional[httpx.BaseTransport] = None) -> Container:
    """Wire adapters and services for the configured BACKEND.

    `rest_transport` lets tests plug an `httpx.MockTransport` into the REST adapter.
    """
    backend = Backend(str(getattr(settings, "BACKEND", Backend.MYSQL.value)).lower())

    conn: Optional[DatabaseConnection] = None
    rest_client: Optional[RestClient] = None

    if backend == Backend.MYSQL:
        conn = DatabaseConnection(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        students_repo: StudentRepository = MySQLStudentRepository(conn)
        history_repo: HistoryRepository = MySQLHistoryRepository(conn)
        users_repo: UserRepository = MySQLUserRepository(conn)
    elif backend == Backend.REST:
        rest_client = RestClient(
            str(getattr(settings, "REST_BASE_URL")),
            timeout=float(getattr(settings, "REST_TIMEOUT_SECONDS", 10.0)),
            transport=rest_transport,
        )
        students_repo = RestStudentRepository(rest_client)
        history_repo = RestHistoryRepository(rest_client)
        users_repo = RestUserRepository(rest_client)
    else:
        students_repo = InMemoryStudentRepository()
        history_repo = InMemoryHistoryRepository()
        users_repo = InMemoryUserRepository()

    cooldown = timedelta(hours=float(getattr(settings, "LOCK_COOLDOWN_HOURS", DEFAULT_LOCK_COOLDOWN_HOURS)))
    guard = ResubmissionGuard(history_repo, cooldown=cooldown)

    avatar_storage = LocalAvatarStorage(getattr(settings, "AVATAR_DIR", "instance/avatars"))
    auth_events = AuthEventBus()

    return Container(
        backend=backend,
        conn=conn,
        rest_client=rest_client,
        students_repo=students_repo,
        history_repo=history_repo,
        users_repo=users_repo,
        avatar_storage=avatar_storage,
        auth_events=auth_events,
        guard=guard,
        roster_service=RosterService(students_repo),
        attendance_service=AttendanceService(students_repo, history_repo, guard),
        history_service=HistoryService(history_repo),
        auth_service=AuthService(users_repo, avatar_storage, auth_events),
        history_poll_seconds=int(getattr(settings, "HISTORY_POLL_SECONDS", DEFAULT_HISTORY_POLL_SECONDS)),
    )
