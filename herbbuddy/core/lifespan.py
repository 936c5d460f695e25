"""Cache lifespan: startup and shutdown.

Single place for startup/shutdown wiring (storage backend, telemetry).
Yields the client's CacheDomains; on exit waits for background refreshes,
then closes storage and flushes telemetry.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from herbbuddy.application.services.domain_caches import CacheDomains
from herbbuddy.core.config import Settings, get_settings
from herbbuddy.infrastructure.storage.factory import StorageFactory
from herbbuddy.infrastructure.storage.protocol import KeyValueStorageProtocol
from herbbuddy.shared.utils.datetime import Clock, now_ms

logger = logging.getLogger(__name__)


@asynccontextmanager
async def cache_lifespan(
    settings: Settings | None = None,
    storage: KeyValueStorageProtocol | None = None,
    clock: Clock = now_ms,
) -> AsyncIterator[CacheDomains]:
    """Build storage and cache domains, yield them, then shut down.

    Startup order: telemetry (if enabled), storage (connect when the
    backend needs it). Shutdown order: drain background refreshes,
    close storage, telemetry shutdown.
    """
    settings = settings or get_settings()

    # ---- Startup ----
    telemetry = None
    if settings.telemetry_enabled:
        from herbbuddy.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_logging()
        if settings.storage_backend.lower() == "redis":
            telemetry.instrument_redis()
        set_telemetry(telemetry)
        logger.info("Telemetry initialized")

    if storage is None:
        storage = StorageFactory.create_storage(settings)
    connect = getattr(storage, "connect", None)
    if connect is not None:
        await connect()
    logger.info("Cache storage ready: backend=%s", settings.storage_backend)

    domains = CacheDomains(storage, settings=settings, clock=clock)
    try:
        yield domains
    finally:
        # ---- Shutdown ----
        await domains.drain()
        await storage.close()
        logger.info("Cache storage closed")
        if telemetry is not None:
            from herbbuddy.shared.telemetry.telemetry import set_telemetry

            telemetry.shutdown()
            set_telemetry(None)
