"""Unit tests for CollectionCache, the per-kind read-through list cache."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.cache_provider import ICacheProvider
from src.models.entities import ResourceKind
from src.services.collection_cache import CollectionCache, build_collection_caches
from src.utils.errors import CacheInvalidationError, StoreUnavailableError


# ======================================================================
# Read-through and TTL
# ======================================================================


class TestReadThrough:
    @pytest.mark.asyncio
    async def test_first_list_fetches_from_store(self, mock_rider_store, cache_provider, sample_rider) -> None:
        cache = CollectionCache(mock_rider_store, cache_provider, ttl=60)

        result = await cache.list()

        assert result == [sample_rider]
        mock_rider_store.get_all.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_repeat_list_within_ttl_hits_cache(self, mock_rider_store, cache_provider, fake_clock) -> None:
        cache = CollectionCache(mock_rider_store, cache_provider, ttl=60)

        first = await cache.list()
        fake_clock.advance(59)
        second = await cache.list()

        assert second is first
        mock_rider_store.get_all.assert_awaited_once()
        assert cache.stats()["hits"] == 1
        assert cache.stats()["misses"] == 1

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self, mock_rider_store, cache_provider, fake_clock) -> None:
        cache = CollectionCache(mock_rider_store, cache_provider, ttl=60)

        await cache.list()
        fake_clock.advance(60)
        await cache.list()

        assert mock_rider_store.get_all.await_count == 2

    @pytest.mark.asyncio
    async def test_empty_collection_is_cached(self, store_factory, cache_provider) -> None:
        store = store_factory(ResourceKind.DRIVER, [])
        cache = CollectionCache(store, cache_provider, ttl=60)

        assert await cache.list() == []
        assert await cache.list() == []
        store.get_all.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_none_from_store_is_cached_as_empty_list(self, store_factory, cache_provider) -> None:
        store = store_factory(ResourceKind.TRIP)
        store.get_all = AsyncMock(return_value=None)
        cache = CollectionCache(store, cache_provider, ttl=60)

        assert await cache.list() == []
        assert await cache.list() == []
        store.get_all.assert_awaited_once()

    def test_non_positive_ttl_rejected(self, mock_rider_store, cache_provider) -> None:
        with pytest.raises(ValueError, match="ttl must be positive"):
            CollectionCache(mock_rider_store, cache_provider, ttl=0)

    def test_key_follows_resource_kind(self, mock_driver_store, cache_provider) -> None:
        cache = CollectionCache(mock_driver_store, cache_provider)
        assert cache.kind is ResourceKind.DRIVER
        assert cache.key == "drivers_all"
        assert cache.ttl == 60.0


# ======================================================================
# Invalidation
# ======================================================================


class TestInvalidate:
    @pytest.mark.asyncio
    async def test_list_after_invalidate_refetches(self, mock_rider_store, cache_provider, sample_rider) -> None:
        cache = CollectionCache(mock_rider_store, cache_provider, ttl=60)
        await cache.list()

        await cache.invalidate()
        mock_rider_store.get_all.return_value = [sample_rider, sample_rider]
        result = await cache.list()

        assert len(result) == 2
        assert mock_rider_store.get_all.await_count == 2

    @pytest.mark.asyncio
    async def test_invalidate_empty_slot_is_noop(self, mock_rider_store, cache_provider) -> None:
        cache = CollectionCache(mock_rider_store, cache_provider, ttl=60)

        await cache.invalidate()
        await cache.invalidate()

        assert await cache_provider.get("riders_all") is None
        assert cache.stats()["invalidations"] == 2

    @pytest.mark.asyncio
    async def test_invalidate_leaves_other_kinds_alone(
        self, mock_rider_store, mock_driver_store, cache_provider
    ) -> None:
        riders = CollectionCache(mock_rider_store, cache_provider, ttl=60)
        drivers = CollectionCache(mock_driver_store, cache_provider, ttl=60)
        await riders.list()
        await drivers.list()

        await riders.invalidate()
        await drivers.list()

        mock_driver_store.get_all.assert_awaited_once()
        assert await cache_provider.get("riders_all") is None
        assert await cache_provider.get("drivers_all") is not None

    @pytest.mark.asyncio
    async def test_failed_eviction_raises_invalidation_error(self, mock_rider_store) -> None:
        provider = MagicMock(spec=ICacheProvider)
        provider.delete = AsyncMock(side_effect=RuntimeError("backend gone"))
        cache = CollectionCache(mock_rider_store, provider, ttl=60)

        with pytest.raises(CacheInvalidationError, match="riders_all"):
            await cache.invalidate()


# ======================================================================
# Store failures
# ======================================================================


class TestStoreFailure:
    @pytest.mark.asyncio
    async def test_failure_propagates_and_caches_nothing(
        self, mock_rider_store, cache_provider, sample_rider
    ) -> None:
        mock_rider_store.get_all = AsyncMock(
            side_effect=[StoreUnavailableError("database is locked"), [sample_rider]]
        )
        cache = CollectionCache(mock_rider_store, cache_provider, ttl=60)

        with pytest.raises(StoreUnavailableError):
            await cache.list()
        assert await cache_provider.get("riders_all") is None

        assert await cache.list() == [sample_rider]
        assert mock_rider_store.get_all.await_count == 2
        assert cache.stats()["failed_fills"] == 1

    @pytest.mark.asyncio
    async def test_failure_keeps_no_stale_snapshot(self, mock_rider_store, cache_provider, fake_clock) -> None:
        cache = CollectionCache(mock_rider_store, cache_provider, ttl=60)
        await cache.list()
        fake_clock.advance(61)
        mock_rider_store.get_all = AsyncMock(side_effect=StoreUnavailableError())

        with pytest.raises(StoreUnavailableError):
            await cache.list()


# ======================================================================
# Concurrency
# ======================================================================


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_misses_share_one_fetch(self, store_factory, cache_provider, sample_rider) -> None:
        release = asyncio.Event()
        store = store_factory(ResourceKind.RIDER)

        async def _slow_get_all():
            await release.wait()
            return [sample_rider]

        store.get_all = AsyncMock(side_effect=_slow_get_all)
        cache = CollectionCache(store, cache_provider, ttl=60)

        tasks = [asyncio.create_task(cache.list()) for _ in range(5)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        store.get_all.assert_awaited_once()
        assert all(r == [sample_rider] for r in results)
        assert cache.stats()["coalesced"] == 4

    @pytest.mark.asyncio
    async def test_fill_racing_invalidate_is_not_stored(self, store_factory, cache_provider, sample_rider) -> None:
        release = asyncio.Event()
        store = store_factory(ResourceKind.RIDER)

        async def _slow_get_all():
            await release.wait()
            return [sample_rider]

        store.get_all = AsyncMock(side_effect=_slow_get_all)
        cache = CollectionCache(store, cache_provider, ttl=60)

        in_flight = asyncio.create_task(cache.list())
        await asyncio.sleep(0)
        await cache.invalidate()
        release.set()

        assert await in_flight == [sample_rider]
        assert await cache_provider.get("riders_all") is None
        assert cache.stats()["discarded_fills"] == 1

        store.get_all = AsyncMock(return_value=[])
        assert await cache.list() == []
        store.get_all.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_started_after_invalidate_waits_for_fresh_fill(self, store_factory, cache_provider) -> None:
        release = asyncio.Event()
        store = store_factory(ResourceKind.RIDER)
        snapshots = [["stale"], ["fresh"]]

        async def _slow_get_all():
            await release.wait()
            return snapshots.pop(0)

        store.get_all = AsyncMock(side_effect=_slow_get_all)
        cache = CollectionCache(store, cache_provider, ttl=60)

        before = asyncio.create_task(cache.list())
        await asyncio.sleep(0)
        await cache.invalidate()
        after = asyncio.create_task(cache.list())
        await asyncio.sleep(0)
        release.set()

        assert await before == ["stale"]
        assert await after == ["fresh"]
        assert store.get_all.await_count == 2
        assert (await cache_provider.get("riders_all")).value == ["fresh"]


# ======================================================================
# Factory
# ======================================================================


class TestBuildCollectionCaches:
    def test_one_cache_per_store_with_ttls(self, mock_rider_store, mock_driver_store, cache_provider) -> None:
        stores = {ResourceKind.RIDER: mock_rider_store, ResourceKind.DRIVER: mock_driver_store}

        caches = build_collection_caches(stores, cache_provider, {ResourceKind.RIDER: 5.0})

        assert set(caches) == {ResourceKind.RIDER, ResourceKind.DRIVER}
        assert caches[ResourceKind.RIDER].ttl == 5.0
        assert caches[ResourceKind.DRIVER].ttl == 60.0
