"""Cache key builders. Single place for the persisted slot layout.

Each logical key occupies two storage slots: the payload under
``<namespace>_<entity>_cache`` and its write time under the same key
plus ``_time``.
"""

from herbbuddy.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PAYLOAD_SUFFIX,
    CACHE_TIME_SUFFIX,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if a key component is empty.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must be a non-empty string")


def cache_key(namespace: str, entity: str) -> str:
    """Payload slot key for an entity, e.g. herbbuddy_events_cache."""
    _validate_key_component(namespace, "namespace")
    _validate_key_component(entity, "entity")
    return f"{namespace}{CACHE_KEY_SEP}{entity}{CACHE_KEY_SEP}{CACHE_PAYLOAD_SUFFIX}"


def timestamp_key(key: str) -> str:
    """Timestamp slot key paired with a payload key."""
    _validate_key_component(key, "key")
    return f"{key}{CACHE_TIME_SUFFIX}"
