"""Shared utilities: telemetry and time helpers.

Used by domain, application, and infrastructure. No cache logic.
"""

from herbbuddy.shared.utils import Clock, from_timestamp_ms_utc, now_ms

__all__ = [
    "Clock",
    "now_ms",
    "from_timestamp_ms_utc",
]
