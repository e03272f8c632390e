from __future__ import annotations

from flask import Flask, jsonify, request, send_from_directory, session

from ..common.web import current_owner_id, json_errors, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _start_session(user) -> None:
        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.full_name
        session["email"] = user.email

    @app.route("/api/auth/sign-up", methods=["POST"], endpoint="sign_up")
    @json_errors("sign up")
    def sign_up():
        data = request.get_json(silent=True) or {}
        user = container.auth_service.sign_up(
            email=data.get("email", ""),
            password=data.get("password", ""),
            full_name=data.get("full_name", data.get("fullName", "")),
        )
        _start_session(user)
        return jsonify({"success": True, "message": "Account created", "user": user.to_dict()}), 201

    @app.route("/api/auth/sign-in", methods=["POST"], endpoint="sign_in")
    @json_errors("sign in")
    def sign_in():
        data = request.get_json(silent=True) or {}
        user = container.auth_service.sign_in(data.get("email", ""), data.get("password", ""))
        _start_session(user)
        return jsonify({"success": True, "message": "Signed in", "user": user.to_dict()})

    @app.route("/api/auth/sign-out", methods=["POST"], endpoint="sign_out")
    @json_errors("sign out")
    def sign_out():
        user_id = session.get("user_id")
        session.clear()
        container.auth_service.sign_out(user_id)
        return jsonify({"success": True, "message": "Signed out"})

    @app.route("/api/auth/session", methods=["GET"], endpoint="auth_session")
    @json_errors("load session")
    def auth_session():
        if "user_id" not in session:
            return jsonify({"success": True, "user": None})
        user = container.auth_service.current_user(session["user_id"])
        return jsonify({"success": True, "user": user.to_dict()})

    @app.route("/api/auth/user", methods=["PATCH"], endpoint="update_user")
    @login_required
    @json_errors("update account")
    def update_user():
        data = request.get_json(silent=True) or {}
        user = container.auth_service.update_user(
            current_owner_id(),
            email=data.get("email"),
            password=data.get("password"),
            full_name=data.get("full_name", data.get("fullName")),
        )
        session["name"] = user.full_name
        session["email"] = user.email
        return jsonify({"success": True, "message": "Account updated", "user": user.to_dict()})

    @app.route("/api/auth/avatar", methods=["POST"], endpoint="upload_avatar")
    @login_required
    @json_errors("upload avatar")
    def upload_avatar():
        file = request.files.get("file")
        if file is None or not file.filename:
            raise ValidationError("Choose an image to upload")
        url = container.auth_service.upload_avatar(
            current_owner_id(),
            filename=file.filename,
            content=file.read(),
        )
        return jsonify({"success": True, "message": "Avatar updated", "avatar_url": url})

    @app.route("/avatars/<path:name>", methods=["GET"], endpoint="avatar")
    def avatar(name: str):
        return send_from_directory(str(container.avatar_storage.directory.resolve()), name)
