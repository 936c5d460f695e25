"""Key-value storage protocol (DIP). Implementations: in-memory, file, Redis."""

from typing import Protocol


class KeyValueStorageProtocol(Protocol):
    """Protocol for persistent text key-value backends.

    Implementations raise KeyValueStorageError on any backend failure; a
    missing key is not a failure.
    """

    async def get(self, full_key: str) -> str | None:
        """Return stored text or None if the key is absent."""
        ...

    async def set(self, full_key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""
        ...

    async def remove(self, full_key: str) -> None:
        """Delete key. Absent key is a no-op."""
        ...

    async def remove_many(self, full_keys: list[str]) -> None:
        """Delete several keys. Absent keys are skipped."""
        ...

    async def close(self) -> None:
        """Release connections or file handles."""
        ...
