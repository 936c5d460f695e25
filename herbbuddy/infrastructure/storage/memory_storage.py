"""Process-local key-value storage."""

from __future__ import annotations


class InMemoryKeyValueStorage:
    """Dict-backed storage for tests and ephemeral sessions.

    Does not survive the process; use FileKeyValueStorage for that.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._rows: dict[str, str] = dict(initial or {})

    async def get(self, full_key: str) -> str | None:
        return self._rows.get(full_key)

    async def set(self, full_key: str, value: str) -> None:
        self._rows[full_key] = value

    async def remove(self, full_key: str) -> None:
        self._rows.pop(full_key, None)

    async def remove_many(self, full_keys: list[str]) -> None:
        for full_key in full_keys:
            self._rows.pop(full_key, None)

    async def close(self) -> None:
        return None

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every stored row (for inspection and tests)."""
        return dict(self._rows)
