"""
UTC time utilities for consistent timestamp handling.

Cache timestamps are integer milliseconds since the Unix epoch (the same
unit the mobile client persisted). Use these helpers instead of calling
time.time() directly so tests can substitute a clock.
"""

import time
from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], int]


def now_ms() -> int:
    """
    Return the current time as integer milliseconds since the Unix epoch.

    Returns:
        Milliseconds since epoch
    """
    return time.time_ns() // 1_000_000


def from_timestamp_ms_utc(timestamp_ms: int) -> datetime:
    """
    Create a UTC-aware datetime from a millisecond Unix timestamp.

    Args:
        timestamp_ms: Unix timestamp in milliseconds

    Returns:
        UTC-aware datetime
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)
