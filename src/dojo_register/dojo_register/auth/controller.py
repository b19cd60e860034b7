from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body
from ..container import Container
from .guard import build_admin_required


def register(app: Flask, container: Container) -> None:
    admin_required = build_admin_required(container.token_service)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        result = container.auth_service.login(data.get("username"), data.get("password"))
        return jsonify(
            {
                "token": result.token,
                "expires_in": container.token_service.max_age_seconds,
                "admin": result.admin.as_dict(),
            }
        )

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="auth_change_password")
    @admin_required
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            g.admin.admin_id,
            current_password=data.get("currentPassword"),
            new_password=data.get("newPassword"),
        )
        return jsonify({"message": "Password changed successfully"})
