"""Shared utilities: datetime."""

from herbbuddy.shared.utils.datetime import Clock, from_timestamp_ms_utc, now_ms

__all__ = [
    "Clock",
    "now_ms",
    "from_timestamp_ms_utc",
]
