"""Cache: expiring key-value store, lookup results, and key builders.

ExpiringKeyValueStore wraps any KeyValueStorageProtocol backend; key
format is in keys.py (two slots per logical key).
"""

from herbbuddy.infrastructure.cache.expiring_store import ExpiringKeyValueStore
from herbbuddy.infrastructure.cache.keys import cache_key, timestamp_key
from herbbuddy.infrastructure.cache.lookup import (
    CacheFault,
    CacheHit,
    CacheLookup,
    CacheMiss,
)

__all__ = [
    "ExpiringKeyValueStore",
    "CacheLookup",
    "CacheHit",
    "CacheMiss",
    "CacheFault",
    "cache_key",
    "timestamp_key",
]
