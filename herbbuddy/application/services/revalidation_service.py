"""Stale-while-revalidate loader: serve cached data now, refresh in the background.

A hit hands the cached payload to the caller immediately and always
starts a remote refresh; when the refresh lands it is written back to the
store and handed to the caller a second time. A miss awaits the remote
fetch directly. Refreshes are single-flight per key: a load issued while
one is outstanding joins it instead of fetching again, so refresh results
for a key are written strictly in issue order.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from herbbuddy.application.interfaces.services import (
    IExpiringStore,
    OnUpdate,
    RemoteFetch,
)
from herbbuddy.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """First value handed to the caller by one load() call.

    Attributes:
        value: The cached payload (source="cache") or fresh payload (source="remote").
        source: Where value came from.
        refresh: On a hit, the background task delivering the fresh value;
            it resolves to the fresh payload, or None if the refresh failed.
    """

    value: T
    source: Literal["cache", "remote"]
    refresh: asyncio.Task[Any] | None = None


async def _deliver(on_update: OnUpdate[T], value: T) -> None:
    """Call the caller's update hook, awaiting it when it is a coroutine function."""
    result = on_update(value)
    if inspect.isawaitable(result):
        await result


class StaleWhileRevalidateLoader:
    """Cache-then-revalidate orchestration over an expiring store.

    Holds no state beyond the in-flight refresh per key and the background
    tasks delivering fresh values; the store owns all cached data.
    """

    def __init__(self, store: IExpiringStore) -> None:
        self.store = store
        self._in_flight: dict[str, asyncio.Task[Any]] = {}
        self._background: set[asyncio.Task[Any]] = set()

    def in_flight(self, key: str) -> bool:
        """Return True while a remote refresh for key is outstanding."""
        task = self._in_flight.get(key)
        return task is not None and not task.done()

    def _refresh(self, key: str, remote_fetch: RemoteFetch[T]) -> asyncio.Task[T]:
        """Return the in-flight refresh for key, starting one if none is running."""
        task = self._in_flight.get(key)
        if task is not None and not task.done():
            logger.debug("Joining in-flight refresh: %s", key)
            return task
        task = asyncio.create_task(self._fetch_and_store(key, remote_fetch))
        self._in_flight[key] = task
        task.add_done_callback(lambda done: self._forget(key, done))
        return task

    def _forget(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _fetch_and_store(self, key: str, remote_fetch: RemoteFetch[T]) -> T:
        value = await remote_fetch()
        await self.store.write(key, value)
        return value

    @traced("herbbuddy.cache.revalidate")
    async def _revalidate(
        self,
        key: str,
        refresh: asyncio.Task[T],
        on_update: OnUpdate[T],
    ) -> T | None:
        """Wait for the shared refresh and hand its value to one caller."""
        add_span_attributes(**{"cache.key": key})
        try:
            fresh = await asyncio.shield(refresh)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            add_span_event("cache.refresh.failed", {"error.type": type(e).__name__})
            logger.warning("Background refresh failed for %s; keeping cached data: %s", key, e)
            return None
        add_span_event("cache.refresh.ok")
        try:
            await _deliver(on_update, fresh)
        except Exception:
            logger.exception("Update hook failed after refresh of %s", key)
            return None
        return fresh

    @traced("herbbuddy.cache.load")
    async def load(
        self,
        key: str,
        remote_fetch: RemoteFetch[T],
        on_update: OnUpdate[T],
        *,
        use_cache: bool = True,
    ) -> LoadResult[T]:
        """Load data for key, serving the cache first when allowed.

        Args:
            key: Payload slot key shared by the store and the refresh.
            remote_fetch: Coroutine function returning fresh data.
            on_update: Receives the cached value (on a hit) and then the fresh one.
                Hook failures on a hit are logged and do not stop the refresh;
                on a miss they propagate like a fetch failure.
            use_cache: When False, skip the cache read and go straight to the fetch.

        Returns:
            LoadResult with the first value delivered.

        Raises:
            Exception: Whatever remote_fetch raised, on a miss only; with
                nothing cached there is no fallback to show.
        """
        add_span_attributes(**{"cache.key": key, "cache.use_cache": use_cache})
        if use_cache:
            cached = await self.store.read(key)
            if cached is not None:
                add_span_event("cache.hit")
                try:
                    await _deliver(on_update, cached)
                except Exception:
                    logger.exception("Update hook failed on cached value of %s", key)
                refresh = self._refresh(key, remote_fetch)
                watcher = asyncio.create_task(self._revalidate(key, refresh, on_update))
                self._background.add(watcher)
                watcher.add_done_callback(self._background.discard)
                return LoadResult(value=cached, source="cache", refresh=watcher)
            add_span_event("cache.miss")

        try:
            fresh = await asyncio.shield(self._refresh(key, remote_fetch))
        except Exception as e:
            add_span_event("cache.refresh.failed", {"error.type": type(e).__name__})
            raise
        add_span_event("cache.refresh.ok")
        await _deliver(on_update, fresh)
        return LoadResult(value=fresh, source="remote")

    async def drain(self) -> None:
        """Wait for every outstanding refresh and background delivery."""
        while True:
            pending = [
                t
                for t in (*self._background, *self._in_flight.values())
                if not t.done()
            ]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)
