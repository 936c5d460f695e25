"""Application services: SWR loader and named domain caches."""

from herbbuddy.application.services.domain_caches import CacheDomains, DomainCache
from herbbuddy.application.services.revalidation_service import (
    LoadResult,
    StaleWhileRevalidateLoader,
)

__all__ = [
    "CacheDomains",
    "DomainCache",
    "LoadResult",
    "StaleWhileRevalidateLoader",
]
