"""Storage factory: creates memory, file, or Redis backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from herbbuddy.infrastructure.storage.protocol import KeyValueStorageProtocol

if TYPE_CHECKING:
    from herbbuddy.core.config import Settings


class StorageFactory:
    """Factory for key-value storage instances based on configuration."""

    @staticmethod
    def create_storage(settings: "Settings | None" = None) -> KeyValueStorageProtocol:
        """Create key-value storage from settings.

        Args:
            settings: Cache settings; if None, uses get_settings().

        Returns:
            InMemoryKeyValueStorage, FileKeyValueStorage, or RedisKeyValueStorage.
            Redis storage is not connected yet; call connect() on it.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from herbbuddy.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "memory":
            from herbbuddy.infrastructure.storage.memory_storage import (
                InMemoryKeyValueStorage,
            )

            return InMemoryKeyValueStorage()
        if backend == "file":
            from herbbuddy.infrastructure.storage.file_storage import (
                FileKeyValueStorage,
            )

            if not s.storage_path:
                raise ValueError("STORAGE_PATH required for file backend")
            return FileKeyValueStorage(s.storage_path)
        if backend == "redis":
            from herbbuddy.infrastructure.storage.redis_storage import (
                RedisKeyValueStorage,
            )

            return RedisKeyValueStorage(settings=s)
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: 'memory', 'file', 'redis'"
        )
