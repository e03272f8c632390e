from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.enums import Backend
from .database.bootstrap import apply_schema
from .history.controller import register as register_history
from .roster.controller import register as register_roster
from .users.controller import register as register_users
from .users.events import AuthEvent

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_logging(level: str) -> None:
    # no-op when the host (gunicorn, pytest) already configured the root logger
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _log_auth_event(event: AuthEvent) -> None:
    logger.info("Auth event %s for account %s", event.kind.value, event.user_id)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(str(getattr(settings, "LOG_LEVEL", "INFO")))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        container = build_container(settings=settings)

        if container.backend == Backend.MYSQL and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            applied = apply_schema(container.conn, schema_path=schema_path)
            logger.info("Schema ready (%s statements applied)", applied)

    logger.info("attendance-book started: settings=%s backend=%s", settings_module, container.backend.value)
    container.auth_service.subscribe(_log_auth_event)
    app.extensions["attendance_book"] = container

    register_users(app, container)
    register_roster(app, container)
    register_attendance(app, container)
    register_history(app, container)

    return app
