from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import request_fields
from ..container import Container
from .auth import current_admin, token_required


def register(app: Flask, container: Container) -> None:
    auth = token_required(container.token_service)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        fields = request_fields()
        result = container.auth_service.login(fields.get("username"), fields.get("password"))
        return jsonify(result.to_dict())

    @app.route("/api/profile", methods=["GET"], endpoint="profile")
    @auth
    def profile():
        admin = container.profile_service.get_profile(current_admin().admin_id)
        return jsonify(admin.to_dict())

    @app.route("/api/profile", methods=["PUT"], endpoint="update_profile")
    @auth
    def update_profile():
        container.profile_service.update_name(current_admin().admin_id, request_fields().get("name"))
        return jsonify({"message": "Profile updated"})

    @app.route("/api/profile/password", methods=["PUT"], endpoint="change_password")
    @auth
    def change_password():
        fields = request_fields()
        container.profile_service.change_password(
            current_admin().admin_id,
            current_password=fields.get("current_password"),
            new_password=fields.get("new_password"),
        )
        return jsonify({"message": "Password changed"})
