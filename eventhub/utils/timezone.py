"""Timezone helpers.

All timestamps are stored and compared as timezone-aware UTC datetimes.
SQLite hands back naive datetimes, so values read from it go through
ensure_utc before they are compared or returned.
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

UTC = ZoneInfo("UTC")

def now_utc() -> datetime:
    """Get the current time in UTC."""
    return datetime.now(UTC)

def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Make sure a datetime is timezone-aware and expressed in UTC.
    
    Naive datetimes are assumed to already be in UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
