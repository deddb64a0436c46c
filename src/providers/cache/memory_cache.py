"""In-memory cache provider using cachetools.TLRUCache.

Each item carries its own time-to-use, computed from the TTL passed to
:meth:`MemoryCacheProvider.set`.  Expiry is checked lazily against the
injected ``timer`` whenever the cache is touched; there is no background
eviction thread.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import structlog
from cachetools import TLRUCache

from src.interfaces.cache_provider import CacheEntry, ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


def _time_to_use(_key: str, entry: CacheEntry, _now: float) -> float:
    return entry.expires_at


class MemoryCacheProvider(ICacheProvider):
    """In-memory per-item TTL cache backed by ``cachetools.TLRUCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Default time-to-live in seconds for entries written without one.
    timer:
        Monotonic clock returning seconds.  Tests inject a fake clock here
        to move time forward without sleeping.
    """

    def __init__(
        self,
        max_size: int = 64,
        ttl: float = 60.0,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = ttl
        self._timer = timer
        self._cache: TLRUCache[str, CacheEntry] = TLRUCache(
            maxsize=max_size, ttu=_time_to_use, timer=timer
        )

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> CacheEntry | None:
        """Return the entry for *key*, or ``None`` if missing/expired."""
        entry = self._cache.get(key)
        if entry is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
        return entry

    async def set(self, key: str, value: Any, ttl: float | None = None) -> CacheEntry:
        """Store *value* under *key* with its own expiry."""
        entry = CacheEntry(
            value=value,
            filled_at=self._timer(),
            ttl=self._default_ttl if ttl is None else ttl,
        )
        self._cache[key] = entry
        logger.debug("cache_set", key=key, ttl=entry.ttl)
        return entry

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    def get_provider_name(self) -> str:
        return "memory_cache"
