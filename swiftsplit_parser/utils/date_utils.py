"""Date manipulation utilities"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def lookback_start(hours: int, now: Optional[datetime] = None) -> datetime:
    """Start of a lookback window ending at now (UTC)"""
    return (now or utcnow()) - timedelta(hours=hours)
