"""Domain value objects."""

from herbbuddy.domain.value_objects.cache_domain import CacheDomainConfig

__all__ = ["CacheDomainConfig"]
