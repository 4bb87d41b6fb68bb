from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import request_fields
from ..container import Container
from ..users.auth import token_required


def register(app: Flask, container: Container) -> None:
    auth = token_required(container.token_service)

    @app.route("/api/units", methods=["GET"], endpoint="list_units")
    @auth
    def list_units():
        return jsonify([u.to_dict() for u in container.unit_service.list_units()])

    @app.route("/api/units", methods=["POST"], endpoint="create_unit")
    @auth
    def create_unit():
        fields = request_fields()
        unit_id = container.unit_service.create_unit(
            name=fields.get("name"),
            unit_type=fields.get("type"),
            project=fields.get("project"),
        )
        return jsonify({"id": unit_id, "message": "Unit created"}), 201

    @app.route("/api/units/<int:unit_id>", methods=["PUT"], endpoint="update_unit")
    @auth
    def update_unit(unit_id: int):
        fields = request_fields()
        container.unit_service.update_unit(
            unit_id=unit_id,
            name=fields.get("name"),
            unit_type=fields.get("type"),
            project=fields.get("project"),
        )
        return jsonify({"message": "Unit updated"})

    @app.route("/api/units/<int:unit_id>", methods=["DELETE"], endpoint="delete_unit")
    @auth
    def delete_unit(unit_id: int):
        container.unit_service.delete_unit(unit_id=unit_id)
        return jsonify({"message": "Unit deleted"})
