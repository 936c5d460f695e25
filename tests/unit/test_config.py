"""Tests for Settings validation and per-domain TTL resolution."""

import pytest
from pydantic import ValidationError

from herbbuddy.core.config import Settings, get_settings
from herbbuddy.core.constants import DEFAULT_CACHE_TTL_MS


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.cache_namespace == "herbbuddy"
    assert settings.cache_ttl_ms == DEFAULT_CACHE_TTL_MS == 300_000
    assert settings.storage_backend == "file"


def test_unknown_backend_rejected() -> None:
    with pytest.raises(ValidationError, match="storage_backend"):
        Settings(_env_file=None, storage_backend="sqlite")


def test_file_backend_requires_path() -> None:
    with pytest.raises(ValidationError, match="storage_path"):
        Settings(_env_file=None, storage_backend="file", storage_path="")


def test_non_positive_ttl_rejected() -> None:
    with pytest.raises(ValidationError, match="cache_ttl_events_ms"):
        Settings(_env_file=None, storage_backend="memory", cache_ttl_events_ms=0)


def test_ttl_for_uses_override_then_default() -> None:
    settings = Settings(
        _env_file=None,
        storage_backend="memory",
        cache_ttl_ms=1000,
        cache_ttl_profile_ms=50,
    )
    assert settings.ttl_for("profile") == 50
    assert settings.ttl_for("events") == 1000
    assert settings.ttl_for("discover") == 1000


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    """HERBBUDDY_* variables are picked up after get_settings.cache_clear()."""
    monkeypatch.setenv("HERBBUDDY_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("HERBBUDDY_CACHE_TTL_MS", "1234")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.storage_backend == "memory"
        assert settings.cache_ttl_ms == 1234
    finally:
        get_settings.cache_clear()
