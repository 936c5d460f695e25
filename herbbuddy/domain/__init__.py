"""Domain layer: cache entry entity, domain config value object, and exceptions.

No dependencies on infrastructure. Used by application and
infrastructure layers.
"""

from herbbuddy.domain.entities import CacheEntry
from herbbuddy.domain.exceptions import (
    CacheSerializationError,
    HerbBuddyException,
    KeyValueStorageError,
)
from herbbuddy.domain.value_objects import CacheDomainConfig

__all__ = [
    "CacheEntry",
    "CacheDomainConfig",
    "HerbBuddyException",
    "KeyValueStorageError",
    "CacheSerializationError",
]
