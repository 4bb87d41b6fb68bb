"""Shared fixtures: a fresh SQLite file per test."""

from __future__ import annotations

import pytest
from sqlalchemy import text

from src.meeting_tracker.meeting_tracker import create_app
from src.meeting_tracker.meeting_tracker.database.connection import DatabaseConnection
from src.meeting_tracker.meeting_tracker.database.migrations import run_migrations


@pytest.fixture(autouse=True)
def testing_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.delenv("MEETING_TRACKER_SETTINGS", raising=False)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.sqlite'}"


@pytest.fixture
def conn(db_url):
    conn = DatabaseConnection.from_url(db_url)
    yield conn
    conn.dispose()


@pytest.fixture
def profile(conn):
    """Schema migrated from an empty database."""
    return run_migrations(conn)


@pytest.fixture
def insert_meeting(conn, profile):
    def _insert(project="1", unit_type="group", meeting_date="2024-01-15", participants=10, meeting_time="10:00", location="Hall"):
        with conn.connect() as c:
            result = c.execute(
                text(
                    """
                    INSERT INTO meetings (project, unit_type, meeting_date, meeting_time, location, participants_count, created_by)
                    VALUES (:project, :unit_type, :meeting_date, :meeting_time, :location, :participants, 1)
                    """
                ),
                {
                    "project": project,
                    "unit_type": unit_type,
                    "meeting_date": meeting_date,
                    "meeting_time": meeting_time,
                    "location": location,
                    "participants": participants,
                },
            )
            return int(result.lastrowid)

    return _insert


@pytest.fixture
def app(tmp_path, db_url):
    app = create_app({"DATABASE_URL": db_url, "UPLOAD_DIR": str(tmp_path / "uploads"), "TESTING": True})
    yield app
    app.extensions["meeting_tracker"].conn.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client):
    resp = client.post("/api/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}
