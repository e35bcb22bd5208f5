# /src/shared/utils/dates.py
"""
ISO-8601 helpers.

- utcnow() -> tz-aware UTC datetime
- parse_iso8601(value) -> datetime | None (never raises)
"""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_iso8601(value: object) -> datetime | None:
    """
    Convert an ISO-8601 string into a tz-aware UTC datetime.

    Accepts a trailing ``Z``; naive timestamps are treated as UTC.
    Returns None for non-strings, blank strings, anything
    ``datetime.fromisoformat`` rejects, and instants that fall outside the
    datetime range once shifted to UTC.
    """
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def to_iso8601(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
