"""Pytest configuration and fixtures for the herbbuddy cache layer.

Stores and loaders run over InMemoryKeyValueStorage with a manual clock
so TTL behavior is tested without sleeping.
"""

import pytest

from herbbuddy.core.config import Settings
from herbbuddy.domain.exceptions import KeyValueStorageError
from herbbuddy.infrastructure.cache.expiring_store import ExpiringKeyValueStore
from herbbuddy.infrastructure.storage.memory_storage import InMemoryKeyValueStorage

TTL_MS = 300_000


class ManualClock:
    """Clock returning a settable time in milliseconds since epoch."""

    def __init__(self, start_ms: int = 0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, delta_ms: int) -> None:
        self.now_ms += delta_ms

    def set(self, now_ms: int) -> None:
        self.now_ms = now_ms


class FailingStorage:
    """Storage whose every operation raises, as a broken disk or dropped connection would."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or KeyValueStorageError("io", None, "disk unavailable")

    async def get(self, full_key: str) -> str | None:
        raise self.error

    async def set(self, full_key: str, value: str) -> None:
        raise self.error

    async def remove(self, full_key: str) -> None:
        raise self.error

    async def remove_many(self, full_keys: list[str]) -> None:
        raise self.error

    async def close(self) -> None:
        return None


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at t=0."""
    return ManualClock()


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    """Empty in-memory key-value storage."""
    return InMemoryKeyValueStorage()


@pytest.fixture
def store(storage: InMemoryKeyValueStorage, clock: ManualClock) -> ExpiringKeyValueStore:
    """Expiring store with a 5 minute TTL over in-memory storage."""
    return ExpiringKeyValueStore(storage, ttl_ms=TTL_MS, clock=clock)


@pytest.fixture
def settings() -> Settings:
    """Settings for the memory backend, independent of environment and .env."""
    return Settings(
        _env_file=None,
        storage_backend="memory",
        cache_namespace="herbbuddy",
        cache_ttl_ms=TTL_MS,
        telemetry_enabled=False,
    )


@pytest.fixture
def failing_storage() -> FailingStorage:
    """Storage that raises KeyValueStorageError on every call."""
    return FailingStorage()
