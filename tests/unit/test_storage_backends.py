"""Tests for key-value storage backends (memory, file, Redis) and StorageFactory."""

import json
from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from herbbuddy.core.config import Settings
from herbbuddy.domain.exceptions import KeyValueStorageError
from herbbuddy.infrastructure.cache.expiring_store import ExpiringKeyValueStore
from herbbuddy.infrastructure.storage.factory import StorageFactory
from herbbuddy.infrastructure.storage.file_storage import FileKeyValueStorage
from herbbuddy.infrastructure.storage.memory_storage import InMemoryKeyValueStorage
from herbbuddy.infrastructure.storage.redis_storage import RedisKeyValueStorage


class TestInMemoryStorage:
    """Dict-backed storage: get/set/remove/remove_many."""

    @pytest.mark.asyncio
    async def test_set_get_remove(self) -> None:
        storage = InMemoryKeyValueStorage()
        await storage.set("k", "v")
        assert await storage.get("k") == "v"
        await storage.remove("k")
        assert await storage.get("k") is None

    @pytest.mark.asyncio
    async def test_remove_many_skips_absent(self) -> None:
        storage = InMemoryKeyValueStorage({"a": "1", "b": "2", "c": "3"})
        await storage.remove_many(["a", "b", "missing"])
        assert storage.snapshot() == {"c": "3"}


class TestFileStorage:
    """JSON document storage survives new instances and rejects corrupt files."""

    @pytest.mark.asyncio
    async def test_values_survive_a_new_instance(self, tmp_path) -> None:
        path = tmp_path / "cache" / "store.json"
        first = FileKeyValueStorage(path)
        await first.set("herbbuddy_events_cache", "[1]")
        await first.set("herbbuddy_events_cache_time", "10")
        await first.close()

        second = FileKeyValueStorage(path)
        assert await second.get("herbbuddy_events_cache") == "[1]"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "herbbuddy_events_cache": "[1]",
            "herbbuddy_events_cache_time": "10",
        }

    @pytest.mark.asyncio
    async def test_missing_file_reads_as_empty(self, tmp_path) -> None:
        storage = FileKeyValueStorage(tmp_path / "absent.json")
        assert await storage.get("anything") is None
        await storage.remove("anything")
        assert not (tmp_path / "absent.json").exists()

    @pytest.mark.asyncio
    async def test_remove_many(self, tmp_path) -> None:
        storage = FileKeyValueStorage(tmp_path / "store.json")
        await storage.set("a", "1")
        await storage.set("b", "2")
        await storage.remove_many(["a", "b"])
        assert await storage.get("a") is None
        assert json.loads((tmp_path / "store.json").read_text(encoding="utf-8")) == {}

    @pytest.mark.asyncio
    async def test_no_temp_files_left_behind(self, tmp_path) -> None:
        storage = FileKeyValueStorage(tmp_path / "store.json")
        await storage.set("a", "1")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    @pytest.mark.asyncio
    async def test_corrupt_document_is_moved_aside_and_reads_empty(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{oops", encoding="utf-8")
        storage = FileKeyValueStorage(path)
        assert await storage.get("a") is None
        assert not path.exists()
        assert (tmp_path / "store.json.corrupt").read_text(encoding="utf-8") == "{oops"

    @pytest.mark.asyncio
    async def test_store_recovers_over_corrupt_document(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text('["not", "a", "map"]', encoding="utf-8")
        store = ExpiringKeyValueStore(FileKeyValueStorage(path))
        assert await store.read("herbbuddy_events_cache") is None
        assert await store.write("herbbuddy_events_cache", [{"id": 2}]) is True
        assert await store.read("herbbuddy_events_cache") == [{"id": 2}]

        reopened = ExpiringKeyValueStore(FileKeyValueStorage(path))
        assert await reopened.read("herbbuddy_events_cache") == [{"id": 2}]

    @pytest.mark.asyncio
    async def test_evict_all_clears_over_corrupt_document(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        storage = FileKeyValueStorage(path)
        store = ExpiringKeyValueStore(storage)
        await store.evict_all(["herbbuddy_events_cache", "herbbuddy_chats_cache"])
        assert await store.write("herbbuddy_chats_cache", []) is True
        assert await storage.get("herbbuddy_chats_cache") == "[]"


class TestRedisStorage:
    """Redis adapter: decoding, error mapping, and one reconnect attempt."""

    @pytest.fixture
    def client(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def redis_storage(self, client, settings) -> RedisKeyValueStorage:
        return RedisKeyValueStorage(redis_client=client, settings=settings)

    @pytest.mark.asyncio
    async def test_get_set_remove(self, redis_storage, client) -> None:
        client.get.return_value = b"[1]"
        assert await redis_storage.get("k") == "[1]"
        await redis_storage.set("k", "[2]")
        client.set.assert_awaited_once_with("k", "[2]")
        await redis_storage.remove("k")
        client.delete.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_remove_many_single_call(self, redis_storage, client) -> None:
        await redis_storage.remove_many(["a", "a_time"])
        client.delete.assert_awaited_once_with("a", "a_time")

    @pytest.mark.asyncio
    async def test_remove_many_empty_is_noop(self, redis_storage, client) -> None:
        await redis_storage.remove_many([])
        client.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_redis_error_maps_to_storage_error(self, redis_storage, client) -> None:
        client.get.side_effect = redis.RedisError("WRONGTYPE")
        with pytest.raises(KeyValueStorageError, match="WRONGTYPE") as exc_info:
            await redis_storage.get("k")
        assert exc_info.value.details["operation"] == "get"

    @pytest.mark.asyncio
    async def test_reconnects_once_on_connection_error(
        self, redis_storage, client, monkeypatch
    ) -> None:
        client.get.side_effect = redis.ConnectionError("reset by peer")
        fresh_client = AsyncMock()
        fresh_client.get.return_value = "ok"

        async def fake_connect():
            redis_storage.redis = fresh_client

        monkeypatch.setattr(redis_storage, "connect", fake_connect)

        assert await redis_storage.get("k") == "ok"
        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_reconnect_raises_storage_error(
        self, redis_storage, client, monkeypatch
    ) -> None:
        client.set.side_effect = redis.TimeoutError("timed out")
        monkeypatch.setattr(redis_storage, "connect", AsyncMock())

        with pytest.raises(KeyValueStorageError, match="disconnected"):
            await redis_storage.set("k", "v")
        assert redis_storage.is_available() is False

    @pytest.mark.asyncio
    async def test_unavailable_storage_raises(self, settings) -> None:
        storage = RedisKeyValueStorage(settings=settings)
        with pytest.raises(KeyValueStorageError, match="unavailable"):
            await storage.get("k")

    @pytest.mark.asyncio
    async def test_close(self, redis_storage, client) -> None:
        await redis_storage.close()
        client.aclose.assert_awaited_once()
        assert redis_storage.is_available() is False


class TestStorageFactory:
    """Factory picks the backend from settings."""

    def test_memory(self, settings) -> None:
        assert isinstance(StorageFactory.create_storage(settings), InMemoryKeyValueStorage)

    def test_file(self, tmp_path) -> None:
        settings = Settings(
            _env_file=None,
            storage_backend="file",
            storage_path=str(tmp_path / "c.json"),
        )
        storage = StorageFactory.create_storage(settings)
        assert isinstance(storage, FileKeyValueStorage)
        assert storage.path == (tmp_path / "c.json").resolve()

    def test_redis(self) -> None:
        settings = Settings(_env_file=None, storage_backend="redis")
        storage = StorageFactory.create_storage(settings)
        assert isinstance(storage, RedisKeyValueStorage)
        assert storage.is_available() is False
