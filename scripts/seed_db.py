from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.meeting_tracker.meeting_tracker.database.bootstrap import ensure_default_admin, seed_sample_units
from src.meeting_tracker.meeting_tracker.database.connection import DatabaseConnection
from src.meeting_tracker.meeting_tracker.database.migrations import run_migrations
from src.meeting_tracker.meeting_tracker.main import load_settings


def main() -> None:
    load_dotenv(override=False)
    conn = DatabaseConnection.from_settings(load_settings())

    profile = run_migrations(conn)
    ensure_default_admin(conn)
    inserted = seed_sample_units(conn, profile)

    print(f"OK: Seeded database -> {conn.describe()} ({inserted} sample units)")


if __name__ == "__main__":
    main()
