import os

_ALIASES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
    "dev": "development",
    "development": "development",
}


def get_settings_module() -> str:
    # MEETING_TRACKER_SETTINGS names a module directly; otherwise APP_ENV picks one
    explicit = os.getenv("MEETING_TRACKER_SETTINGS")
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_ALIASES.get(env, 'development')}"
