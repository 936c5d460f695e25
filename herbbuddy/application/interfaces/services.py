"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Protocol, TypeVar

T = TypeVar("T")

# Caller-supplied coroutine that fetches fresh data from the backend.
RemoteFetch = Callable[[], Awaitable[T]]

# Caller's state-update path; may be a plain function or a coroutine function.
OnUpdate = Callable[[T], Awaitable[None] | None]


class IExpiringStore(Protocol):
    """Protocol for the expiring key-value store (best-effort, never raises)."""

    async def write(self, key: str, payload: Any) -> bool:
        """Store payload with the current time. Returns False if nothing was written."""

    async def read(self, key: str) -> Any | None:
        """Return fresh payload or None (miss, expired, or fault)."""

    async def evict(self, key: str) -> None:
        """Delete the entry for key. Idempotent."""

    async def evict_all(self, keys: Iterable[str]) -> None:
        """Delete the entries for every key."""
