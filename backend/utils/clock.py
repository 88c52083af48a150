"""
Clock helper for timestamps.

Timestamps are naive UTC so they round-trip unchanged through SQLite.
"""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current UTC time without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
