"""
Time-related utilities.

All timestamps are generated in UTC with timezone information, which is
what CloudWatch expects for metric windows and datum timestamps.
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return the current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def trailing_window(seconds: int, *, end: datetime | None = None) -> tuple[datetime, datetime]:
    """Return a (start, end) pair covering the last `seconds` before `end`.

    Example:
        trailing_window(3600) -> (now - 1h, now)
    """
    end = end or utc_now()
    return end - timedelta(seconds=seconds), end
