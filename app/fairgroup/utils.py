from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from flask import request

from app.fairgroup.errors import ValidationError

# Bounds of the signed 32-bit INTEGER columns ids are stored in.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def json_body() -> dict[str, Any]:
    """Request JSON object, or {} when the body is missing or not an object."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def clean_str(value: Any) -> str | None:
    """Trimmed string, or None for missing/blank input."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_int(value: Any, field: str, *, required: bool = True) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field} is required")
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer") from None
    if not INT_MIN <= parsed <= INT_MAX:
        raise ValidationError(f"{field} must be an integer")
    return parsed


def parse_datetime(value: Any, field: str, *, required: bool = False) -> datetime | None:
    """Parse an ISO 8601 timestamp; a trailing Z is accepted and the result is naive UTC."""
    raw = clean_str(value)
    if raw is None:
        if required:
            raise ValidationError(f"{field} is required")
        return None
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        raise ValidationError(f"{field} must be an ISO 8601 datetime") from None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
