from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def is_hhmm(value: str) -> bool:
    return bool(_TIME_RE.match(value or ""))


def format_date(value: Any) -> Optional[str]:
    """Normalize DATE values across drivers.

    SQLite hands back the stored text, MySQL a ``datetime.date``.
    """

    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


def format_timestamp(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return str(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
