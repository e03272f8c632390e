from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    ConfirmationRequiredError,
    DomainError,
    RecordNotFoundError,
    ResubmissionLockedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# most specific first
_STATUS_BY_ERROR = (
    (ResubmissionLockedError, 423),
    (ConfirmationRequiredError, 409),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (RecordNotFoundError, 404),
    (BackendError, 502),
)


def error_response(e: Exception):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
    body = {"success": False, "message": str(e)}
    if isinstance(e, ResubmissionLockedError) and e.remaining is not None:
        body["remaining"] = e.remaining.to_dict()
    return jsonify(body), status


def json_errors(action: str):
    """Turn raised errors into `{success: false, message}` answers.

    Domain and backend errors keep their message; anything else is logged
    with traceback and answered with a generic 500.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except (DomainError, BackendError) as e:
                if isinstance(e, BackendError):
                    logger.warning("%s failed: %s", action, e)
                return error_response(e)
            except Exception:
                logger.exception("Unexpected error: %s", action)
                return jsonify({"success": False, "message": f"System error: {action}"}), 500

        return wrapper

    return decorator


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_owner_id() -> int:
    return int(session["user_id"])


def is_truthy(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}
