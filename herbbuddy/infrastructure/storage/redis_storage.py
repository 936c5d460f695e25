"""Redis-backed key-value storage.

Used when several processes on one device share a cache, or when the
cache should outlive a reinstall of the client. Connection errors get
one reconnect attempt; anything else surfaces as KeyValueStorageError.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import redis.asyncio as redis

from herbbuddy.core.config import Settings, get_settings
from herbbuddy.domain.exceptions import KeyValueStorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RedisKeyValueStorage:
    """Async Redis key-value storage.

    Uses herbbuddy.core.config for connection settings. Call connect() at
    startup and close() at shutdown. A client passed in (tests, DI) is
    used as-is.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize Redis storage.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()

    async def connect(self) -> None:
        """Establish Redis connection. Call on startup."""
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=self.settings.redis_socket_timeout,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache storage unavailable.", e)
            await client.aclose()
            return
        self.redis = client
        logger.info(
            "Redis storage connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def close(self) -> None:
        """Close Redis connection. Call on shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            logger.info("Redis storage disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
        self.redis = None
        await self.connect()
        return self.redis is not None

    def is_available(self) -> bool:
        """Return True if a Redis client is connected."""
        return self.redis is not None

    async def _run(
        self,
        operation: str,
        key: str | None,
        command: Callable[[redis.Redis], Awaitable[T]],
    ) -> T:
        """Run one Redis command, retrying once after a reconnect."""
        if self.redis is None:
            raise KeyValueStorageError(operation, key, "redis unavailable")
        try:
            return await command(self.redis)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect() and self.redis is not None:
                try:
                    return await command(self.redis)
                except redis.RedisError as retry_error:
                    raise KeyValueStorageError(operation, key, str(retry_error)) from retry_error
            raise KeyValueStorageError(operation, key, f"redis disconnected: {e}") from e
        except redis.RedisError as e:
            raise KeyValueStorageError(operation, key, str(e)) from e

    async def get(self, full_key: str) -> str | None:
        value = await self._run("get", full_key, lambda r: r.get(full_key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, full_key: str, value: str) -> None:
        await self._run("set", full_key, lambda r: r.set(full_key, value))

    async def remove(self, full_key: str) -> None:
        await self._run("remove", full_key, lambda r: r.delete(full_key))

    async def remove_many(self, full_keys: list[str]) -> None:
        if not full_keys:
            return
        await self._run("remove_many", None, lambda r: r.delete(*full_keys))
