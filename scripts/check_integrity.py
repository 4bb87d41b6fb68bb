"""Report rows and files left behind by non-cascading deletes.

Read-only: prints the report as JSON and exits 1 when anything is found.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.meeting_tracker.meeting_tracker.database.connection import DatabaseConnection
from src.meeting_tracker.meeting_tracker.database.integrity import check_integrity
from src.meeting_tracker.meeting_tracker.database.migrations import resolve_profile
from src.meeting_tracker.meeting_tracker.main import load_settings
from src.meeting_tracker.meeting_tracker.meetings.file_store import FileStore


def main() -> int:
    load_dotenv(override=False)
    settings = load_settings()
    conn = DatabaseConnection.from_settings(settings)

    profile = resolve_profile(conn, version=0)
    store = FileStore(settings.get("UPLOAD_DIR", "uploads"))
    report = check_integrity(conn, profile, stored_files=store.list_stored())

    print(json.dumps(report.to_dict(), indent=2))
    return 0 if report.is_clean else 1


if __name__ == "__main__":
    raise SystemExit(main())
