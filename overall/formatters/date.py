"""Date and time formatting utilities."""

from datetime import datetime, timezone
from typing import Any, Optional


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_date(date: Any) -> str:
    """
    Format a date object to YYYY-MM-DD string.

    Args:
        date: Date object (datetime or string), or None

    Returns:
        Formatted date string, "-" when missing
    """
    if date is None:
        return "-"
    if hasattr(date, "strftime"):
        return date.strftime("%Y-%m-%d")
    return str(date)


def format_age(date: Optional[datetime], now: datetime) -> str:
    """
    Format the age of a timestamp in whole days.

    Naive timestamps on either side are read as UTC.

    Args:
        date: Timestamp, or None
        now: Reference time

    Returns:
        Age string such as "12d"; future timestamps show as "0d"
    """
    if date is None:
        return "-"
    days = (_as_utc(now) - _as_utc(date)).days
    return f"{max(0, days)}d"
