"""Utility functions for time handling.

All event timestamps are UTC and timezone-aware.
"""

from __future__ import annotations

from datetime import datetime, timezone

LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def format_datetime(dt: datetime, fmt: str = LOG_TIMESTAMP_FORMAT) -> str:
    """Format a datetime into a string based on the given format."""
    return dt.strftime(fmt)
