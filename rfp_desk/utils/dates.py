"""Date helpers shared by the store and the query engine.

All instants are timezone-aware UTC. A date-only deadline such as
``2026-04-30`` stands for midnight UTC of that day.
"""

import math
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

Clock = Callable[[], datetime]

ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or timestamp, returning None when unparseable."""
    if not value or not isinstance(value, str):
        return None
    try:
        return as_utc(datetime.fromisoformat(value.strip()))
    except ValueError:
        return None


def parse_deadline(value: str | None) -> datetime | None:
    """Parse a deadline into the instant it expires."""
    return parse_timestamp(value)


def format_timestamp(value: datetime) -> str:
    """Format an instant the way ``uploadedAt`` is stored: ``2026-10-18T09:30:00.000Z``."""
    return as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_deadline(value: str | None) -> str:
    """Display form of a deadline, e.g. ``Apr 30, 2026``.

    Unparseable values are shown as they were stored.
    """
    parsed = parse_deadline(value)
    if parsed is None:
        return value or ""
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def calculate_duration_days(deadline: str | None, now: datetime) -> int:
    """Whole days left until the deadline, rounded up and never negative."""
    parsed = parse_deadline(deadline)
    if parsed is None:
        return 0
    days = math.ceil((parsed - as_utc(now)) / ONE_DAY)
    return max(0, days)
