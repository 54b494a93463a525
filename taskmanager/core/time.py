"""Time helpers shared by models and serializers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    """Render a datetime as ISO 8601, marking naive (stored UTC) values with Z."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.isoformat() + "Z"
    return value.isoformat()


def parse_datetime(raw: str) -> datetime:
    """Parse an ISO 8601 timestamp into UTC, accepting a trailing ``Z``."""

    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed


__all__ = ["isoformat", "parse_datetime", "utcnow"]
