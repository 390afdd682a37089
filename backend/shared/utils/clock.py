"""
Timezone-aware time helpers.

Every instant handled by the application is an aware UTC datetime. Some
drivers (SQLite) hand back naive values; they are interpreted as UTC.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive values are assumed to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
