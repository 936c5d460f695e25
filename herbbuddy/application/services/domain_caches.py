"""Named cache domains: events, profile, chats, and caller-chosen generic ones.

Each domain owns an ExpiringKeyValueStore and a StaleWhileRevalidateLoader
configured by a CacheDomainConfig; all domains share one storage backend.
"""

from __future__ import annotations

import logging
from typing import Any

from herbbuddy.application.interfaces.services import OnUpdate, RemoteFetch
from herbbuddy.application.services.revalidation_service import (
    LoadResult,
    StaleWhileRevalidateLoader,
)
from herbbuddy.core.config import Settings, get_settings
from herbbuddy.core.constants import (
    CACHE_ENTITY_CHATS,
    CACHE_ENTITY_EVENTS,
    CACHE_ENTITY_PROFILE,
)
from herbbuddy.domain.value_objects.cache_domain import CacheDomainConfig
from herbbuddy.infrastructure.cache.expiring_store import ExpiringKeyValueStore
from herbbuddy.infrastructure.cache.keys import cache_key
from herbbuddy.infrastructure.storage.protocol import KeyValueStorageProtocol
from herbbuddy.shared.utils.datetime import Clock, now_ms

logger = logging.getLogger(__name__)


class DomainCache:
    """Cache for one domain: one key, one TTL, one store/loader pair."""

    def __init__(
        self,
        config: CacheDomainConfig,
        storage: KeyValueStorageProtocol,
        clock: Clock = now_ms,
    ) -> None:
        self.config = config
        self.key = cache_key(config.namespace, config.entity)
        self.store = ExpiringKeyValueStore(storage, ttl_ms=config.ttl_ms, clock=clock)
        self.loader = StaleWhileRevalidateLoader(self.store)

    async def get_cached(self) -> Any | None:
        """Return the fresh cached payload for this domain, or None."""
        return await self.store.read(self.key)

    async def set_cached(self, data: Any) -> bool:
        """Overwrite this domain's cached payload. Returns False if not written."""
        return await self.store.write(self.key, data)

    async def clear(self) -> None:
        """Evict this domain's entry."""
        await self.store.evict(self.key)

    async def load(
        self,
        remote_fetch: RemoteFetch[Any],
        on_update: OnUpdate[Any],
        *,
        use_cache: bool = True,
    ) -> LoadResult[Any]:
        """Stale-while-revalidate load for this domain's key."""
        return await self.loader.load(
            self.key, remote_fetch, on_update, use_cache=use_cache
        )

    async def drain(self) -> None:
        await self.loader.drain()


class CacheDomains:
    """The client's cache domains over one shared storage backend.

    Fixed domains (events, profile, chats) are built up front; generic
    domains are built on first use and remembered so clear_all_caches()
    can reach them.
    """

    def __init__(
        self,
        storage: KeyValueStorageProtocol,
        settings: Settings | None = None,
        clock: Clock = now_ms,
    ) -> None:
        """Initialize the domains.

        Args:
            storage: Key-value backend shared by every domain.
            settings: Cache settings (namespace, TTLs); defaults to get_settings().
            clock: Time source in ms since epoch, passed to every store.
        """
        self.storage = storage
        self.settings = settings or get_settings()
        self._clock = clock
        self.events = self._build(CACHE_ENTITY_EVENTS)
        self.profile = self._build(CACHE_ENTITY_PROFILE)
        self.chats = self._build(CACHE_ENTITY_CHATS)
        self._generic: dict[str, DomainCache] = {}

    def _build(self, entity: str) -> DomainCache:
        config = CacheDomainConfig(
            entity=entity,
            namespace=self.settings.cache_namespace,
            ttl_ms=self.settings.ttl_for(entity),
        )
        return DomainCache(config, self.storage, clock=self._clock)

    def generic(self, entity: str) -> DomainCache:
        """Return the domain cache for a caller-chosen entity.

        Fixed entity names resolve to the fixed domains so loads for the
        same key always share one loader.
        """
        fixed = {
            CACHE_ENTITY_EVENTS: self.events,
            CACHE_ENTITY_PROFILE: self.profile,
            CACHE_ENTITY_CHATS: self.chats,
        }
        if entity in fixed:
            return fixed[entity]
        domain = self._generic.get(entity)
        if domain is None:
            domain = self._build(entity)
            self._generic[entity] = domain
        return domain

    def domains(self) -> list[DomainCache]:
        """Return every domain built so far (fixed first)."""
        return [self.events, self.profile, self.chats, *self._generic.values()]

    # Events
    async def get_cached_events(self) -> Any | None:
        return await self.events.get_cached()

    async def set_cached_events(self, events: Any) -> bool:
        return await self.events.set_cached(events)

    async def clear_events_cache(self) -> None:
        await self.events.clear()

    # Profile
    async def get_cached_profile(self) -> Any | None:
        return await self.profile.get_cached()

    async def set_cached_profile(self, profile: Any) -> bool:
        return await self.profile.set_cached(profile)

    async def clear_profile_cache(self) -> None:
        await self.profile.clear()

    # Chats
    async def get_cached_chats(self) -> Any | None:
        return await self.chats.get_cached()

    async def set_cached_chats(self, chats: Any) -> bool:
        return await self.chats.set_cached(chats)

    async def clear_chats_cache(self) -> None:
        await self.chats.clear()

    async def clear_all_caches(self) -> None:
        """Evict every known domain (e.g. on logout)."""
        domains = self.domains()
        logger.info("Clearing %s cache domains", len(domains))
        await self.events.store.evict_all(d.key for d in domains)

    async def drain(self) -> None:
        """Wait for outstanding background refreshes in every domain."""
        for domain in self.domains():
            await domain.drain()
