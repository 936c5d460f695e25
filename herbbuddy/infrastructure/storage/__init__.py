"""Key-value storage: in-memory, JSON file, and Redis backends.

Factory creates backend from herbbuddy.core.config. Implementations are
loaded lazily inside StorageFactory.create_storage() so the Redis client
is only imported when the redis backend is selected.

Implementations implement KeyValueStorageProtocol (get, set, remove,
remove_many, close). Values are always serialized text.
"""

from herbbuddy.infrastructure.storage.factory import StorageFactory
from herbbuddy.infrastructure.storage.protocol import KeyValueStorageProtocol

__all__ = [
    "StorageFactory",
    "KeyValueStorageProtocol",
]
