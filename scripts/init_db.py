from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.meeting_tracker.meeting_tracker.common.http import configure_logging
from src.meeting_tracker.meeting_tracker.database.bootstrap import ensure_default_admin, list_tables
from src.meeting_tracker.meeting_tracker.database.connection import DatabaseConnection
from src.meeting_tracker.meeting_tracker.database.migrations import run_migrations
from src.meeting_tracker.meeting_tracker.main import load_settings


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    configure_logging(settings.get("LOG_LEVEL", "INFO"))

    conn = DatabaseConnection.from_settings(settings)
    profile = run_migrations(conn)
    created = ensure_default_admin(conn)

    print(
        f"OK: schema v{profile.version} ({profile.meeting_shape.value} meetings) -> {conn.describe()} "
        f"(tables={len(list_tables(conn))}, default admin {'created' if created else 'present'})"
    )


if __name__ == "__main__":
    main()
