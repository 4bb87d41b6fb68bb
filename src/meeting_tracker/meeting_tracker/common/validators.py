from __future__ import annotations

from typing import Any, Optional

from ..core.enums import UnitType
from ..core.exceptions import ValidationError
from .datetime_utils import is_hhmm, parse_iso_date


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_unit_type(value: Any) -> UnitType:
    raw = require_non_empty(value, "type")
    try:
        return UnitType(raw)
    except ValueError:
        allowed = ", ".join(t.value for t in UnitType)
        raise ValidationError(f"Invalid unit type {raw!r} (expected one of: {allowed})")


def require_iso_date(value: Any, field_name: str) -> str:
    raw = require_non_empty(value, field_name)
    try:
        parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")
    return raw


def optional_iso_date(value: Any, field_name: str) -> Optional[str]:
    if value is None or not str(value).strip():
        return None
    return require_iso_date(value, field_name)


def require_hhmm(value: Any, field_name: str) -> str:
    raw = require_non_empty(value, field_name)
    if not is_hhmm(raw):
        raise ValidationError(f"{field_name} must be a time in HH:MM format")
    return raw


def non_negative_int(value: Any, field_name: str, *, default: int = 0) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be an integer")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def positive_int(value: Any, field_name: str, *, default: int) -> int:
    number = non_negative_int(value, field_name, default=default)
    if number < 1:
        raise ValidationError(f"{field_name} must be at least 1")
    return number
