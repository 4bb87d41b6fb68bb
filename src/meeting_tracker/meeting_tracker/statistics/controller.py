from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..users.auth import token_required


def register(app: Flask, container: Container) -> None:
    auth = token_required(container.token_service)

    @app.route("/api/statistics", methods=["GET"], endpoint="statistics")
    @auth
    def statistics():
        rows = container.statistics_service.summarize(
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
            group_by=request.args.get("group_by"),
        )
        return jsonify([r.to_dict() for r in rows])
