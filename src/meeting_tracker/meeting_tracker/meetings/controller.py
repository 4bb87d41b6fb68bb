from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.http import request_fields
from ..common.validators import positive_int
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE
from ..users.auth import current_admin, token_required
from .file_store import UPLOAD_FIELDS, Uploads


def _uploads() -> Uploads:
    return {
        kind: [f for f in request.files.getlist(field) if f and f.filename]
        for kind, field in UPLOAD_FIELDS.items()
    }


def register(app: Flask, container: Container) -> None:
    auth = token_required(container.token_service)
    service = container.meeting_service

    @app.route("/api/meetings", methods=["GET"], endpoint="list_meetings")
    @auth
    def list_meetings():
        args = request.args
        page = service.list_meetings(
            filters=service.parse_filters(args),
            page=positive_int(args.get("page"), "page", default=1),
            limit=positive_int(args.get("limit"), "limit", default=DEFAULT_PAGE_SIZE),
        )
        return jsonify(page.to_dict())

    @app.route("/api/meetings/<int:meeting_id>", methods=["GET"], endpoint="get_meeting")
    @auth
    def get_meeting(meeting_id: int):
        return jsonify(service.get_meeting(meeting_id).to_dict(with_attachments=True))

    @app.route("/api/meetings", methods=["POST"], endpoint="create_meeting")
    @auth
    def create_meeting():
        meeting_id = service.create_meeting(
            fields=request_fields(),
            created_by=current_admin().admin_id,
            uploads=_uploads(),
        )
        return jsonify({"id": meeting_id, "message": "Meeting created"}), 201

    @app.route("/api/meetings/<int:meeting_id>", methods=["PUT"], endpoint="update_meeting")
    @auth
    def update_meeting(meeting_id: int):
        service.update_meeting(meeting_id=meeting_id, fields=request_fields(), uploads=_uploads())
        return jsonify({"message": "Meeting updated"})

    @app.route("/api/meetings/<int:meeting_id>", methods=["DELETE"], endpoint="delete_meeting")
    @auth
    def delete_meeting(meeting_id: int):
        service.delete_meeting(meeting_id)
        return jsonify({"message": "Meeting deleted"})

    @app.route("/uploads/<filename>", methods=["GET"], endpoint="download_attachment")
    @auth
    def download_attachment(filename: str):
        return send_file(container.file_store.path_for(filename).resolve())
