"""Timestamp helpers.

Stored comment dates come from several generations of clients and are not
always usable. Everything here tolerates bad input and never raises.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

import logfire

# Placeholder age for comments whose stored date is missing or unparseable
FALLBACK_AGE = timedelta(days=30)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def fallback_timestamp(now: datetime | None = None) -> datetime:
    """Placeholder timestamp: one month before ``now``."""
    return (now or utc_now()) - FALLBACK_AGE


def _ensure_aware(value: datetime) -> datetime:
    # Naive values come from SQLite CURRENT_TIMESTAMP, which is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a timestamp in any of the stored formats.

    Accepts datetimes, ISO-8601 strings (with or without 'Z'), SQLite
    ``YYYY-MM-DD HH:MM:SS`` strings and epoch numbers (seconds or
    milliseconds).

    Returns:
        Aware datetime, or None if the value is missing or unparseable
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _ensure_aware(value)
    if isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return _ensure_aware(datetime.fromisoformat(raw))
        except ValueError:
            return None
    return None


def fallback_anchor(values: Iterable[Any]) -> datetime | None:
    """Earliest usable timestamp among ``values``, or None if there is none.

    Passing it as ``now`` to ``normalize_timestamp`` ties the fallback of a
    batch to its oldest dated comment, so undated comments keep sorting
    oldest and do not move between fetches of the same list.
    """
    parsed = [p for p in (parse_timestamp(v) for v in values) if p is not None]
    return min(parsed, default=None)


def normalize_timestamp(value: Any, now: datetime | None = None) -> datetime:
    """Parse a timestamp, substituting the fallback when it is unusable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        logfire.debug("Malformed timestamp replaced with fallback", value=repr(value))
        return fallback_timestamp(now)
    return parsed


def format_relative_time(value: Any, now: datetime | None = None) -> str:
    """Format a timestamp as 'just now', '5 minutes ago', '2 weeks ago'...

    Future timestamps (clock skew) read as 'just now'.
    """
    now = now or utc_now()
    timestamp = normalize_timestamp(value, now=now)
    seconds = int((now - timestamp).total_seconds())

    if seconds < 60:
        return "just now"

    for unit, size in (("week", 604800), ("day", 86400), ("hour", 3600)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit if count == 1 else unit + 's'} ago"

    minutes = seconds // 60
    return f"{minutes} {'minute' if minutes == 1 else 'minutes'} ago"
