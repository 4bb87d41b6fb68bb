from __future__ import annotations

import pytest

from config import get_settings_module
from src.meeting_tracker.meeting_tracker.main import load_settings


@pytest.mark.parametrize(
    "env,expected",
    [
        ("prod", "config.production"),
        ("Production", "config.production"),
        ("test", "config.testing"),
        ("dev", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_settings(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_explicit_settings_module_wins(monkeypatch):
    monkeypatch.setenv("MEETING_TRACKER_SETTINGS", "config.production")

    assert get_settings_module() == "config.production"


def test_overrides_replace_module_values():
    settings = load_settings({"UPLOAD_DIR": "/tmp/elsewhere"})

    assert settings["SETTINGS_MODULE"] == "config.testing"
    assert settings["TESTING"] is True
    assert settings["UPLOAD_DIR"] == "/tmp/elsewhere"
