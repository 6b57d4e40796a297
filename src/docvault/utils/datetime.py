"""
DateTime utilities for consistent timezone handling.
"""
from datetime import datetime, timezone, timedelta
from typing import Optional


def utc_now() -> datetime:
    """
    Get the current UTC time with timezone awareness.

    Returns:
        datetime: Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes coming back from the database.

    Args:
        dt: Datetime to normalize (None passes through)

    Returns:
        datetime: Timezone-aware datetime in UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def expires_at(seconds: int, now: Optional[datetime] = None) -> datetime:
    """Return the UTC instant `seconds` from now."""
    return (now or utc_now()) + timedelta(seconds=seconds)
