"""Domain exceptions for the herbbuddy cache layer.

Storage adapters raise these; the expiring store catches them at its
boundary and converts them into a miss or a no-op, so callers of the
cache never see them.
"""

from typing import Any


class HerbBuddyException(Exception):
    """Base exception for all herbbuddy errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. key, operation).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class KeyValueStorageError(HerbBuddyException):
    """Raised when the key-value persistence backend fails (I/O, connection, corruption)."""

    def __init__(self, operation: str, key: str | None, reason: str) -> None:
        """Initialize with the failed operation, affected key, and reason.

        Args:
            operation: Storage operation name (get, set, remove, remove_many).
            key: Full storage key, or None for whole-store failures.
            reason: Underlying error description.
        """
        target = f" for key {key!r}" if key is not None else ""
        super().__init__(
            f"Storage {operation} failed{target}: {reason}",
            "STORAGE_ERROR",
            {"operation": operation, "key": key, "reason": reason},
        )


class CacheSerializationError(HerbBuddyException):
    """Raised when a payload cannot be encoded, or stored text cannot be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Cache serialization failed for key {key!r}: {reason}",
            "CACHE_SERIALIZATION_ERROR",
            {"key": key, "reason": reason},
        )
