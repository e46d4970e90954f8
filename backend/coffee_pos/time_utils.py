from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (aware)."""
    return datetime.now(timezone.utc)


def epoch_seconds() -> int:
    """Whole seconds since the epoch; the unit token expiry is expressed in."""
    return int(time.time())


def epoch_millis() -> int:
    return int(time.time() * 1000)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with millisecond precision and trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_timestamp() -> str:
    """Current time as an ISO-8601 'Z' string, the format orders and responses carry."""
    return to_utc_z(utcnow())
