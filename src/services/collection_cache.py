"""Read-through cache for the "list all" endpoints, one instance per kind.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services.
# Depends on: IResourceStore (source of truth), ICacheProvider (the keyed
#             TTL store holding the snapshot).
#
# Each CollectionCache owns exactly one cache slot, keyed by its
# ResourceKind.cache_key ("riders_all", "drivers_all", "trips_all").
#
#   list()        fresh entry      → return the stored snapshot as-is
#                 missing/expired  → store.get_all(), store, return
#   invalidate()  drop the slot (idempotent)
#
# Route handlers call invalidate() after every successful add/update/
# delete and before they return, so a client that has seen a mutation's
# response never reads the pre-mutation snapshot afterwards.
#
# CONCURRENCY (single asyncio event loop):
#   - Concurrent misses coalesce.  Fills run under a per-kind asyncio.Lock
#     and a waiter re-checks the slot once it holds the lock, so N cold
#     list() calls cost one get_all().
#   - invalidate() bumps a generation counter.  A fill only writes its
#     result if the generation is unchanged since the fill started, so a
#     fetch that raced a mutation can never install a stale snapshot.
#   - A failed get_all() writes nothing and re-raises unchanged.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass
from typing import Any, Generic

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.resource_store import IResourceStore, ResourceT
from src.models.entities import ResourceKind
from src.utils.errors import CacheInvalidationError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_TTL_SECONDS = 60.0


@dataclass
class CacheStats:
    """Running counters for one collection cache."""

    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    fills: int = 0
    discarded_fills: int = 0
    failed_fills: int = 0
    invalidations: int = 0


class CollectionCache(Generic[ResourceT]):
    """Single-slot, time-bounded memo of ``store.get_all()`` for one kind.

    Instances are plain objects owned by whoever builds them (``main.py``
    or a test); there is no module-level cache state.

    Parameters
    ----------
    store:
        The resource store to read through to.
    cache:
        Keyed cache holding the snapshot.  May be shared between kinds,
        since every kind has its own key.
    ttl:
        Seconds a snapshot stays fresh after it was filled.
    """

    def __init__(
        self,
        store: IResourceStore[ResourceT],
        cache: ICacheProvider,
        ttl: float = DEFAULT_TTL_SECONDS,
    ) -> None:
        if ttl <= 0:
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        self._store = store
        self._cache = cache
        self._ttl = ttl
        self._kind: ResourceKind = store.kind
        self._key = self._kind.cache_key
        self._fill_lock = asyncio.Lock()
        self._generation = 0
        self._stats = CacheStats()

    @property
    def kind(self) -> ResourceKind:
        return self._kind

    @property
    def key(self) -> str:
        return self._key

    @property
    def ttl(self) -> float:
        return self._ttl

    # ── Public API ─────────────────────────────────────────────────────

    async def list(self) -> list[ResourceT]:
        """Return the current snapshot, filling it from the store on a miss.

        The returned list is the cached object itself; callers must treat
        it as read-only.
        """
        entry = await self._cache.get(self._key)
        if entry is not None:
            self._stats.hits += 1
            return entry.value

        self._stats.misses += 1
        async with self._fill_lock:
            entry = await self._cache.get(self._key)
            if entry is not None:
                self._stats.coalesced += 1
                logger.debug("collection_fill_coalesced", kind=self._kind.value)
                return entry.value
            return await self._fill()

    async def invalidate(self) -> None:
        """Drop the cached snapshot, if any.  Safe to call repeatedly."""
        self._generation += 1
        self._stats.invalidations += 1
        try:
            await self._cache.delete(self._key)
        except Exception as exc:
            logger.critical(
                "collection_invalidation_failed",
                kind=self._kind.value,
                key=self._key,
                error=str(exc),
            )
            raise CacheInvalidationError(
                f"could not evict {self._key}: {exc}",
                provider_name=type(self._cache).__name__,
            ) from exc
        logger.debug("collection_invalidated", kind=self._kind.value, generation=self._generation)

    def stats(self) -> dict[str, Any]:
        """Counters plus the static configuration, for health output."""
        return {"key": self._key, "ttl_seconds": self._ttl, **asdict(self._stats)}

    # ── Internals ──────────────────────────────────────────────────────

    async def _fill(self) -> list[ResourceT]:
        """Fetch from the store and cache the result unless invalidated meanwhile.

        Must be called with ``_fill_lock`` held.
        """
        generation = self._generation
        try:
            items = await self._store.get_all()
        except Exception as exc:
            self._stats.failed_fills += 1
            logger.warning(
                "collection_fill_failed",
                kind=self._kind.value,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        # An empty collection is a valid snapshot and is cached like any other.
        snapshot = [] if items is None else items
        self._stats.fills += 1

        if generation != self._generation:
            self._stats.discarded_fills += 1
            logger.info(
                "collection_fill_discarded",
                kind=self._kind.value,
                started_generation=generation,
                current_generation=self._generation,
            )
            return snapshot

        await self._cache.set(self._key, snapshot, ttl=self._ttl)
        logger.debug("collection_filled", kind=self._kind.value, size=len(snapshot))
        return snapshot


def build_collection_caches(
    stores: dict[ResourceKind, IResourceStore],
    cache: ICacheProvider,
    ttls: dict[ResourceKind, float] | None = None,
) -> dict[ResourceKind, CollectionCache]:
    """Create one CollectionCache per store, all sharing *cache*."""
    ttls = ttls or {}
    return {
        kind: CollectionCache(store, cache, ttl=ttls.get(kind, DEFAULT_TTL_SECONDS))
        for kind, store in stores.items()
    }
