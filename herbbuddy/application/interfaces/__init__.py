"""Application interfaces (ports)."""

from herbbuddy.application.interfaces.services import (
    IExpiringStore,
    OnUpdate,
    RemoteFetch,
)

__all__ = ["IExpiringStore", "OnUpdate", "RemoteFetch"]
