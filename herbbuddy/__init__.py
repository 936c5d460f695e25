"""herbbuddy: local expiring cache and stale-while-revalidate loading.

Layers follow the same split as the rest of the app: core (config,
lifespan), domain (entities, value objects, exceptions), infrastructure
(key-value storage adapters, expiring store), application (SWR loader,
named domain caches) and shared (telemetry, utilities).
"""

from herbbuddy.application.services.domain_caches import CacheDomains, DomainCache
from herbbuddy.application.services.revalidation_service import (
    LoadResult,
    StaleWhileRevalidateLoader,
)
from herbbuddy.core.lifespan import cache_lifespan
from herbbuddy.domain.value_objects.cache_domain import CacheDomainConfig
from herbbuddy.infrastructure.cache.expiring_store import ExpiringKeyValueStore

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "CacheDomainConfig",
    "CacheDomains",
    "DomainCache",
    "ExpiringKeyValueStore",
    "LoadResult",
    "StaleWhileRevalidateLoader",
    "cache_lifespan",
]
