"""Core constants: cache key layout and default cache domains.

Single source of truth for the persisted key format
``<namespace>_<entity>_cache`` / ``<namespace>_<entity>_cache_time``.
"""

# Default namespace prefix for every persisted cache slot
CACHE_NAMESPACE = "herbbuddy"

# Delimiter between namespace and entity, and the slot suffixes
CACHE_KEY_SEP = "_"
CACHE_PAYLOAD_SUFFIX = "cache"
CACHE_TIME_SUFFIX = "_time"

# 5 minutes
DEFAULT_CACHE_TTL_MS = 5 * 60 * 1000

# Named cache domains
CACHE_ENTITY_EVENTS = "events"
CACHE_ENTITY_PROFILE = "profile"
CACHE_ENTITY_CHATS = "chats"

STORAGE_BACKENDS = ("memory", "file", "redis")
