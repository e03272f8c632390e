from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_owner_id, json_errors, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/session", methods=["GET"], endpoint="attendance_session")
    @login_required
    @json_errors("start attendance session")
    def attendance_session():
        rows = container.attendance_service.session_rows(
            current_owner_id(),
            request.args.get("group"),
            request.args.get("weekday"),
        )
        return jsonify({"success": True, "rows": [r.to_dict() for r in rows]})

    @app.route("/api/attendance", methods=["POST"], endpoint="save_attendance")
    @login_required
    @json_errors("save attendance")
    def save_attendance():
        data = request.get_json(silent=True) or {}
        session_date = None
        if data.get("date"):
            try:
                session_date = parse_iso_date(str(data["date"]))
            except ValueError:
                raise ValidationError("Date must be YYYY-MM-DD")

        saved = container.attendance_service.save(
            current_owner_id(),
            data.get("group"),
            data.get("weekday"),
            data.get("statuses") or {},
            session_date=session_date,
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Attendance saved",
                    "id": saved.snapshot_id,
                    "date": saved.session_date.isoformat(),
                    "created_at": saved.created_at.isoformat(),
                    "counts": saved.counts,
                }
            ),
            201,
        )

    @app.route("/api/attendance/locks", methods=["GET"], endpoint="attendance_locks")
    @login_required
    @json_errors("load attendance locks")
    def attendance_locks():
        locks = container.guard.active_locks(current_owner_id())
        return jsonify(
            {
                "success": True,
                "locks": [lock.to_dict() for lock in locks],
                "poll_seconds": container.history_poll_seconds,
            }
        )
