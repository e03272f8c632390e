from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file, session

from ..common.web import current_owner_id, is_truthy, json_errors, login_required
from ..container import Container
from ..export.excel import XLSX_MIMETYPE, export_roster_xlsx


def _fields(data: dict) -> dict:
    week_days = data.get("weekDays", data.get("week_days"))
    if isinstance(week_days, str):
        week_days = [d for d in week_days.split(",") if d.strip()]
    return {
        "full_name": data.get("fullName", data.get("full_name")),
        "phone_number": data.get("phoneNumber", data.get("phone_number")),
        "group": data.get("group"),
        "week_days": week_days,
    }


def register(app: Flask, container: Container) -> None:
    def _checked_ids() -> list[str]:
        # per-browser selection, never stored in the backend
        return list(session.get("checked_students", []))

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @login_required
    @json_errors("load students")
    def list_students():
        checked = _checked_ids()
        rows = container.roster_service.search(
            current_owner_id(),
            request.args.get("q", ""),
            checked_ids=checked,
            checked_only=is_truthy(request.args.get("checked_only")),
        )
        return jsonify(
            {
                "success": True,
                "students": [dict(s.to_dict(), checked=s.student_id in checked) for s in rows],
            }
        )

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @login_required
    @json_errors("add student")
    def create_student():
        data = request.get_json(silent=True) or {}
        owner_id = current_owner_id()
        student_id = container.roster_service.create(owner_id, **_fields(data))
        student = container.roster_service.get(owner_id, student_id)
        return jsonify({"success": True, "message": "Student added", "student": student.to_dict()}), 201

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="update_student")
    @login_required
    @json_errors("update student")
    def update_student(student_id: str):
        data = request.get_json(silent=True) or {}
        owner_id = current_owner_id()
        container.roster_service.update(owner_id, student_id, **_fields(data))
        student = container.roster_service.get(owner_id, student_id)
        return jsonify({"success": True, "message": "Student updated", "student": student.to_dict()})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @login_required
    @json_errors("delete student")
    def delete_student(student_id: str):
        container.roster_service.delete(
            current_owner_id(),
            student_id,
            confirm=is_truthy(request.args.get("confirm")),
        )
        session["checked_students"] = [i for i in _checked_ids() if i != student_id]
        return jsonify({"success": True, "message": "Student deleted"})

    @app.route("/api/students/<student_id>/check", methods=["POST"], endpoint="toggle_student_check")
    @login_required
    @json_errors("mark student")
    def toggle_student_check(student_id: str):
        container.roster_service.get(current_owner_id(), student_id)
        checked = _checked_ids()
        if student_id in checked:
            checked.remove(student_id)
        else:
            checked.append(student_id)
        session["checked_students"] = checked
        return jsonify({"success": True, "checked": student_id in checked})

    @app.route("/api/groups", methods=["GET"], endpoint="list_groups")
    @login_required
    @json_errors("load groups")
    def list_groups():
        return jsonify({"success": True, "groups": container.roster_service.groups(current_owner_id())})

    @app.route("/api/groups/<group>/week-days", methods=["GET"], endpoint="group_week_days")
    @login_required
    @json_errors("load group week days")
    def group_week_days(group: str):
        days = container.roster_service.week_days_for_group(current_owner_id(), group)
        return jsonify({"success": True, "weekDays": list(days)})

    @app.route("/api/students/export.xlsx", methods=["GET"], endpoint="export_students")
    @login_required
    @json_errors("export students")
    def export_students():
        content = export_roster_xlsx(container.roster_service.list(current_owner_id()))
        return send_file(
            io.BytesIO(content),
            download_name="students.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )
