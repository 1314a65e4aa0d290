"""Date utilities."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def cadence(start: datetime, steps: int, step: timedelta, include_start: bool = False) -> List[datetime]:
    """Timestamps at a fixed step after ``start``; the first one is ``start + step``."""
    offset = 0 if include_start else 1
    return [start + step * (i + offset) for i in range(steps)]


def to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def from_unix(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def to_ymd(dt: date | datetime) -> str:
    return dt.strftime("%Y-%m-%d")


def days_before(dt: Optional[datetime], days: int) -> datetime:
    return (dt or utcnow()) - timedelta(days=days)
