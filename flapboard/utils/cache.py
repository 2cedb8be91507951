"""TTL memory of recently reported keys, so repeated warnings stay quiet."""

from __future__ import annotations

import logging

from cachetools import TTLCache

logger = logging.getLogger(__name__)

_seen: TTLCache = TTLCache(maxsize=1024, ttl=3600)


def configure_cache(ttl: int) -> None:
    global _seen
    _seen = TTLCache(maxsize=1024, ttl=ttl)


def first_sighting(key: str) -> bool:
    """True the first time *key* is seen within the TTL, False afterwards."""
    if key in _seen:
        logger.debug("Cache hit: %s", key)
        return False
    _seen[key] = True
    return True


def invalidate_all() -> None:
    _seen.clear()
