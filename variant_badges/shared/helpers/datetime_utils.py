"""
DateTime utility functions for Variant Badges
"""

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Get current UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes.

    Some drivers (SQLite) hand back naive values for timezone-aware columns,
    and comparing those against now_utc() would raise.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_timestamp(timestamp_str: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO timestamp string to timezone-aware datetime object.
    Handles both 'Z' suffix and '+00:00' formats for UTC timestamps.

    Args:
        timestamp_str: ISO timestamp string (e.g., "2024-01-15T10:30:00Z" or "2024-01-15T10:30:00+00:00")

    Returns:
        timezone-aware datetime object or None if parsing fails
    """
    if not timestamp_str:
        return None
    try:
        if timestamp_str.endswith("Z"):
            return ensure_utc(datetime.fromisoformat(timestamp_str.replace("Z", "+00:00")))
        return ensure_utc(datetime.fromisoformat(timestamp_str))
    except (ValueError, TypeError):
        return None
