"""Domain value object for a named cache domain.

A cache domain is one logical resource the client caches (events, the
user's profile, chat list, ...). It replaces per-domain module constants
with an explicit record that carries its own TTL.
"""

import re
from dataclasses import dataclass

from herbbuddy.core.constants import CACHE_NAMESPACE, DEFAULT_CACHE_TTL_MS

# Key components are used verbatim in storage keys: no whitespace allowed.
_COMPONENT_RE = re.compile(r"^\S+$")


def _validate_component(value: str, field_name: str) -> None:
    """Validate a non-empty, whitespace-free key component. Raises ValueError on failure."""
    if not value:
        raise ValueError(f"{field_name} must be a non-empty string")
    if not _COMPONENT_RE.match(value):
        raise ValueError(f"{field_name} must not contain whitespace: {value!r}")


@dataclass(frozen=True)
class CacheDomainConfig:
    """Value object for one cache domain: {namespace, entity, ttl}.

    Entries written through this domain expire ttl_ms milliseconds after
    their write. Validation runs on construction.
    """

    entity: str
    namespace: str = CACHE_NAMESPACE
    ttl_ms: int = DEFAULT_CACHE_TTL_MS

    def __post_init__(self) -> None:
        _validate_component(self.namespace, "Cache namespace")
        _validate_component(self.entity, "Cache entity")
        if self.ttl_ms <= 0:
            raise ValueError(f"Cache TTL must be positive, got: {self.ttl_ms!r}")
