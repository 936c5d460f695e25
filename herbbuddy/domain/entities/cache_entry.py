"""Cache entry domain entity.

One payload per key, stamped with the time it was written. Freshness is
derived, never stored.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and its write timestamp (milliseconds since epoch)."""

    key: str
    payload: Any
    written_at_ms: int

    def age_ms(self, now_ms: int) -> int:
        """Return milliseconds elapsed since the entry was written."""
        return now_ms - self.written_at_ms

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        """Return whether the entry may still be served.

        The boundary is inclusive: an entry exactly ttl_ms old is fresh.

        Args:
            now_ms: Current time in milliseconds since epoch.
            ttl_ms: Time-to-live in milliseconds.

        Returns:
            True while (now_ms - written_at_ms) <= ttl_ms.
        """
        return self.age_ms(now_ms) <= ttl_ms
