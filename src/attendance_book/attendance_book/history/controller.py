from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_owner_id, is_truthy, json_errors, login_required
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..export.excel import XLSX_MIMETYPE, export_history_xlsx


def register(app: Flask, container: Container) -> None:
    @app.route("/api/history", methods=["GET"], endpoint="list_history")
    @login_required
    @json_errors("load attendance history")
    def list_history():
        snapshots = container.history_service.list(current_owner_id())
        return jsonify(
            {
                "success": True,
                "history": [s.to_dict() for s in snapshots],
                "poll_seconds": container.history_poll_seconds,
            }
        )

    @app.route("/api/history/<snapshot_id>", methods=["GET"], endpoint="get_history")
    @login_required
    @json_errors("load attendance record")
    def get_history(snapshot_id: str):
        snapshot = container.history_service.get(current_owner_id(), snapshot_id)
        return jsonify({"success": True, "record": snapshot.to_dict()})

    @app.route("/api/history/<snapshot_id>", methods=["DELETE"], endpoint="delete_history")
    @login_required
    @json_errors("delete attendance record")
    def delete_history(snapshot_id: str):
        container.history_service.delete(
            current_owner_id(),
            snapshot_id,
            confirm=is_truthy(request.args.get("confirm")),
        )
        return jsonify({"success": True, "message": "Attendance record deleted"})

    @app.route(
        "/api/history/<snapshot_id>/students/<student_id>",
        methods=["PATCH"],
        endpoint="edit_history_student",
    )
    @login_required
    @json_errors("edit attendance record")
    def edit_history_student(snapshot_id: str, student_id: str):
        data = request.get_json(silent=True) or {}
        try:
            status = AttendanceStatus(data.get("status") or "")
        except ValueError:
            raise ValidationError(f"Unknown attendance status: {data.get('status')}")

        updated = container.history_service.edit_student_in_snapshot(
            current_owner_id(),
            snapshot_id,
            student_id,
            status,
            data.get("lateMinutes", data.get("late_minutes")),
        )
        return jsonify({"success": True, "message": "Attendance updated", "record": updated.to_dict()})

    @app.route("/api/history/clear", methods=["POST"], endpoint="clear_history")
    @login_required
    @json_errors("clear attendance history")
    def clear_history():
        data = request.get_json(silent=True) or {}
        try:
            threshold = parse_iso_date(str(data.get("before") or ""))
        except ValueError:
            raise ValidationError("Pick a date (YYYY-MM-DD)")

        result = container.history_service.clear_older_than(
            current_owner_id(),
            threshold,
            confirm=is_truthy(data.get("confirm")),
        )
        return jsonify(
            {
                "success": result.failed == 0,
                "message": f"Removed {result.removed} of {result.total} records",
                "removed": result.removed,
                "failed": result.failed,
            }
        )

    @app.route("/api/history/export.xlsx", methods=["GET"], endpoint="export_history")
    @login_required
    @json_errors("export attendance history")
    def export_history():
        content = export_history_xlsx(container.history_service.list(current_owner_id()))
        return send_file(
            io.BytesIO(content),
            download_name="attendance_history.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )
