"""Domain entities."""

from herbbuddy.domain.entities.cache_entry import CacheEntry

__all__ = ["CacheEntry"]
