"""
Date utilities for API operations.
"""
from datetime import datetime, timezone
from calendar import monthrange


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """
    Normalise a datetime to naive UTC.

    Aware values are converted to UTC first; naive values are assumed to
    already be UTC and are returned unchanged.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in a month, leap years included.

    Args:
        year: Four digit year
        month: One-based month (1-12)
    """
    # monthrange returns (weekday_of_first_day, number_of_days_in_month)
    _, last_day_of_month = monthrange(year, month)
    return last_day_of_month


def today_utc() -> datetime:
    """Midnight at the start of the current UTC day, naive."""
    return utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
