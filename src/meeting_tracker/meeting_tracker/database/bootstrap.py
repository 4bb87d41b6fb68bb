from __future__ import annotations

import logging

from sqlalchemy import inspect, text
from werkzeug.security import generate_password_hash

from ..core.constants import (
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    SAMPLE_PROJECT_COUNT,
)
from ..core.enums import Role, UnitType
from .connection import DatabaseConnection
from .profile import SchemaProfile

logger = logging.getLogger(__name__)


def ensure_default_admin(conn_factory: DatabaseConnection) -> bool:
    """Create the built-in super admin on first boot. Returns True if created."""

    with conn_factory.connect() as conn:
        existing = conn.execute(
            text("SELECT id FROM admins WHERE username = :username"),
            {"username": DEFAULT_ADMIN_USERNAME},
        ).first()
        if existing:
            return False

        conn.execute(
            text(
                """
                INSERT INTO admins (username, password_hash, name, role)
                VALUES (:username, :password_hash, :name, :role)
                """
            ),
            {
                "username": DEFAULT_ADMIN_USERNAME,
                "password_hash": generate_password_hash(DEFAULT_ADMIN_PASSWORD),
                "name": DEFAULT_ADMIN_NAME,
                "role": Role.SUPER_ADMIN.value,
            },
        )
    logger.warning(
        "Default admin account created: %s/%s (change the password)", DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD
    )
    return True


def seed_sample_units(conn_factory: DatabaseConnection, profile: SchemaProfile) -> int:
    """Insert one sample group per project (1..10) into an empty directory."""

    with conn_factory.connect() as conn:
        count = conn.execute(text("SELECT COUNT(*) FROM units")).scalar_one()
        if count:
            return 0

        if profile.units_has_legacy_region:
            sql = "INSERT INTO units (name, type, project, district) VALUES (:name, :type, :project, '')"
        else:
            sql = "INSERT INTO units (name, type, project) VALUES (:name, :type, :project)"

        for i in range(1, SAMPLE_PROJECT_COUNT + 1):
            conn.execute(
                text(sql),
                {"name": f"Sample group {i}", "type": UnitType.GROUP.value, "project": str(i)},
            )
    logger.info("Inserted %s sample groups (projects 1..%s)", SAMPLE_PROJECT_COUNT, SAMPLE_PROJECT_COUNT)
    return SAMPLE_PROJECT_COUNT


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with conn_factory.connect() as conn:
        return sorted(inspect(conn).get_table_names())
