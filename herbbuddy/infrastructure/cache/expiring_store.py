"""Expiring key-value store over a text key-value backend.

Stores one JSON payload per key together with its write time and serves
it for a fixed TTL. Every operation is best-effort: storage and decoding
failures are logged and turned into a miss (read) or a no-op (write,
evict). Nothing raises past this class.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from herbbuddy.core.constants import DEFAULT_CACHE_TTL_MS
from herbbuddy.domain.entities.cache_entry import CacheEntry
from herbbuddy.domain.exceptions import CacheSerializationError, KeyValueStorageError
from herbbuddy.infrastructure.cache.keys import timestamp_key
from herbbuddy.infrastructure.cache.lookup import (
    CacheFault,
    CacheHit,
    CacheLookup,
    CacheMiss,
)
from herbbuddy.infrastructure.storage.protocol import KeyValueStorageProtocol
from herbbuddy.shared.utils.datetime import Clock, now_ms

logger = logging.getLogger(__name__)


class ExpiringKeyValueStore:
    """Timestamped JSON cache with a fixed TTL per store.

    The payload slot is written before the timestamp slot, and reads start
    from the timestamp slot, so a half-written entry is seen as a miss
    rather than as a timestamp with no payload. Evictions drop the
    timestamp first for the same reason.
    """

    def __init__(
        self,
        storage: KeyValueStorageProtocol,
        ttl_ms: int = DEFAULT_CACHE_TTL_MS,
        clock: Clock = now_ms,
    ) -> None:
        """Initialize the store.

        Args:
            storage: Key-value backend holding serialized text.
            ttl_ms: Time-to-live in milliseconds for every entry.
            clock: Returns current time in ms since epoch (injectable for tests).
        """
        if ttl_ms <= 0:
            raise ValueError(f"ttl_ms must be positive, got: {ttl_ms!r}")
        self.storage = storage
        self.ttl_ms = ttl_ms
        self._clock = clock

    async def write(self, key: str, payload: Any) -> bool:
        """Store payload under key, stamped with the current time.

        Overwrites any previous entry wholesale.

        Args:
            key: Payload slot key (use herbbuddy.infrastructure.cache.keys builders).
            payload: JSON-serializable value.

        Returns:
            True if both slots were written, False otherwise.
        """
        try:
            serialized = json.dumps(payload)
        except (TypeError, ValueError) as e:
            logger.warning(
                "Cache write skipped: %s", CacheSerializationError(key, str(e)).message
            )
            return False
        written_at = self._clock()
        try:
            await self.storage.set(key, serialized)
        except KeyValueStorageError as e:
            logger.warning("Cache write error for key %s: %s", key, e.message)
            return False
        except Exception:
            logger.exception("Cache write error for key %s", key)
            return False
        try:
            await self.storage.set(timestamp_key(key), str(written_at))
        except Exception as e:
            # New payload may now sit beside an older timestamp.
            logger.warning("Cache timestamp write failed for key %s: %s", key, e)
            await self.evict(key)
            return False
        logger.debug("Cache SET: %s (TTL: %sms)", key, self.ttl_ms)
        return True

    async def read(self, key: str) -> Any | None:
        """Return the cached payload, or None on miss, expiry, or fault.

        An expired entry is evicted before None is returned.
        """
        result = await self.lookup(key)
        if isinstance(result, CacheHit):
            return result.value
        return None

    async def lookup(self, key: str) -> CacheLookup:
        """Look up key and report exactly what happened.

        Args:
            key: Payload slot key.

        Returns:
            CacheHit with the entry, CacheMiss("absent" | "expired"),
            or CacheFault when storage or decoding failed.
        """
        try:
            raw_time = await self.storage.get(timestamp_key(key))
            if raw_time is None:
                logger.debug("Cache MISS: %s", key)
                return CacheMiss("absent")
            try:
                written_at = int(raw_time)
            except ValueError:
                error = CacheSerializationError(key, f"invalid timestamp {raw_time!r}")
                logger.warning("Cache read error: %s", error.message)
                return CacheFault("invalid_timestamp", error)

            if not CacheEntry(key, None, written_at).is_fresh(self._clock(), self.ttl_ms):
                await self.evict(key)
                logger.debug("Cache EXPIRED: %s", key)
                return CacheMiss("expired")

            raw = await self.storage.get(key)
            if raw is None:
                logger.debug("Cache MISS: %s (timestamp without payload)", key)
                return CacheMiss("absent")
            try:
                entry = CacheEntry(key=key, payload=json.loads(raw), written_at_ms=written_at)
            except json.JSONDecodeError as e:
                error = CacheSerializationError(key, str(e))
                logger.warning("Cache read error: %s", error.message)
                return CacheFault("invalid_payload", error)
        except KeyValueStorageError as e:
            logger.warning("Cache read error for key %s: %s", key, e.message)
            return CacheFault("storage_error", e)
        except Exception as e:
            logger.exception("Cache read error for key %s", key)
            return CacheFault("storage_error", e)

        logger.debug("Cache HIT: %s", key)
        return CacheHit(entry)

    async def evict(self, key: str) -> None:
        """Delete both slots for key. Evicting an absent key is a no-op."""
        try:
            await self.storage.remove_many([timestamp_key(key), key])
        except KeyValueStorageError as e:
            logger.warning("Cache evict error for key %s: %s", key, e.message)
            return
        except Exception:
            logger.exception("Cache evict error for key %s", key)
            return
        logger.debug("Cache DELETE: %s", key)

    async def evict_all(self, keys: Iterable[str]) -> None:
        """Evict every key in keys, one at a time (no cross-key atomicity)."""
        evicted = sorted(set(keys))
        for key in evicted:
            await self.evict(key)
        if evicted:
            logger.info("Cache INVALIDATE: %s keys", len(evicted))
