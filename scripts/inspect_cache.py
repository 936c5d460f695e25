"""Show the state of every cache domain in the configured storage.

For each domain prints HIT (with age), MISS (absent/expired), or FAULT.
Reading an expired entry evicts it, same as the client would.

Usage:
    uv run python -m scripts.inspect_cache [--clear] [entity ...]

With no entities, inspects events, profile and chats. --clear evicts the
listed domains (or all of them) after printing.
Storage backend and path come from HERBBUDDY_* settings / .env.
"""

from __future__ import annotations

import asyncio
import sys

from herbbuddy.core.config import get_settings
from herbbuddy.core.lifespan import cache_lifespan
from herbbuddy.infrastructure.cache.lookup import CacheFault, CacheHit
from herbbuddy.shared.telemetry.logging import setup_logging
from herbbuddy.shared.utils.datetime import from_timestamp_ms_utc, now_ms


async def main() -> None:
    """Print lookup results per domain; optionally clear them."""
    setup_logging()
    args = sys.argv[1:]
    clear = "--clear" in args
    entities = [a for a in args if a != "--clear"]
    settings = get_settings()

    async with cache_lifespan(settings) as caches:
        domains = [caches.generic(e) for e in entities] or caches.domains()
        now = now_ms()
        for domain in domains:
            result = await domain.store.lookup(domain.key)
            if isinstance(result, CacheHit):
                entry = result.entry
                written = from_timestamp_ms_utc(entry.written_at_ms).isoformat()
                print(
                    f"{domain.key}: HIT age={entry.age_ms(now)}ms "
                    f"ttl={domain.config.ttl_ms}ms written_at={written}"
                )
            elif isinstance(result, CacheFault):
                print(f"{domain.key}: FAULT {result.reason}", file=sys.stderr)
            else:
                print(f"{domain.key}: MISS ({result.reason})")
        if clear:
            await domains[0].store.evict_all(d.key for d in domains)
            print(f"Cleared {len(domains)} cache domain(s)")


if __name__ == "__main__":
    asyncio.run(main())
