"""Cache configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific fields (storage_path for the file
backend) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from herbbuddy.core.constants import (
    CACHE_NAMESPACE,
    DEFAULT_CACHE_TTL_MS,
    STORAGE_BACKENDS,
)


class Settings(BaseSettings):
    """Cache settings loaded from environment and .env.

    Every field has a default; validate_backend_and_ttls rejects unknown
    storage backends, non-positive TTLs and a file backend without a path.
    """

    # App
    app_name: str = "herbbuddy"
    app_version: str = "1.0.0"
    debug: bool = False

    # Cache: one TTL for every domain unless a per-domain override is set
    cache_namespace: str = CACHE_NAMESPACE
    cache_ttl_ms: int = DEFAULT_CACHE_TTL_MS
    cache_ttl_events_ms: int | None = None
    cache_ttl_profile_ms: int | None = None
    cache_ttl_chats_ms: int | None = None

    # Storage: "memory" (process-local), "file" (single JSON document) or "redis"
    storage_backend: str = "file"
    storage_path: str = ".herbbuddy/cache.json"

    # Redis storage
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_timeout: float = 5.0

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_prefix="HERBBUDDY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backend_and_ttls(self) -> "Settings":
        """Validate storage backend and cache TTLs.

        - storage_backend must be one of memory, file, redis.
        - File backend: STORAGE_PATH required.
        - All TTLs (default and overrides) must be positive.
        """
        backend = self.storage_backend.lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                f"Must be one of: {', '.join(STORAGE_BACKENDS)}"
            )
        if backend == "file" and not self.storage_path:
            raise ValueError(
                "storage_path is required when storage_backend is 'file'. "
                "Set HERBBUDDY_STORAGE_PATH environment variable or update .env file."
            )
        for name in (
            "cache_ttl_ms",
            "cache_ttl_events_ms",
            "cache_ttl_profile_ms",
            "cache_ttl_chats_ms",
        ):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got: {value!r}")
        if not self.cache_namespace:
            raise ValueError("cache_namespace must be a non-empty string")
        return self

    def ttl_for(self, entity: str) -> int:
        """Return the TTL in milliseconds for a cache entity.

        Args:
            entity: Cache entity name (e.g. events, profile, chats).

        Returns:
            Per-entity override when set, otherwise cache_ttl_ms.
        """
        override = getattr(self, f"cache_ttl_{entity}_ms", None)
        return override if override is not None else self.cache_ttl_ms


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
