"""Structured outcome of one cache lookup.

The store's public read() collapses these to ``value | None``; lookup()
returns them directly so faults stay observable in tests and logs.
"""

from dataclasses import dataclass
from typing import Any, Literal

from herbbuddy.domain.entities.cache_entry import CacheEntry


@dataclass(frozen=True)
class CacheHit:
    """A fresh entry was found."""

    entry: CacheEntry

    @property
    def value(self) -> Any:
        return self.entry.payload


@dataclass(frozen=True)
class CacheMiss:
    """No servable entry: never written, or expired (and now evicted)."""

    reason: Literal["absent", "expired"]


@dataclass(frozen=True)
class CacheFault:
    """Storage or decoding failed; treated as a miss by callers."""

    reason: str
    error: Exception | None = None


CacheLookup = CacheHit | CacheMiss | CacheFault
