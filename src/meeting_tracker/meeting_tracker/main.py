from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.http import configure_logging, register_error_handlers
from .container import build_container
from .core.constants import MAX_FILE_SIZE_BYTES, MAX_FILES_PER_UPLOAD, MAX_IMAGES_PER_UPLOAD
from .database.bootstrap import ensure_default_admin, seed_sample_units
from .database.connection import DatabaseConnection
from .database.migrations import run_migrations
from .meetings.controller import register as register_meetings
from .statistics.controller import register as register_statistics
from .units.controller import register as register_units
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in dir(settings) if name.isupper()}
    values["SETTINGS_MODULE"] = settings_module
    values.update(overrides or {})
    return values


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(overrides)
    configure_logging(settings.get("LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config.update(settings)
    app.secret_key = settings.get("SECRET_KEY")
    max_file_size = int(settings.get("MAX_FILE_SIZE", MAX_FILE_SIZE_BYTES))
    # Whole-request cap; the per-file limit is enforced by the file store.
    app.config["MAX_CONTENT_LENGTH"] = max_file_size * (MAX_IMAGES_PER_UPLOAD + MAX_FILES_PER_UPLOAD) + 1024 * 1024

    conn = DatabaseConnection.from_settings(settings)
    logger.info("settings=%s db=%s", settings["SETTINGS_MODULE"], conn.describe())

    profile = run_migrations(conn)
    logger.info("schema version %s, meetings %s", profile.version, profile.meeting_shape.value)

    ensure_default_admin(conn)
    if settings.get("AUTO_SEED_DB"):
        seed_sample_units(conn, profile)

    container = build_container(conn=conn, profile=profile, settings=settings)
    app.extensions["meeting_tracker"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_units(app, container)
    register_meetings(app, container)
    register_statistics(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "schema_version": profile.version,
                "meeting_shape": profile.meeting_shape.value,
            }
        )

    return app
