"""Unit tests for MemoryCacheProvider."""

from __future__ import annotations

import pytest

from src.interfaces.cache_provider import ICacheProvider
from src.providers.cache.memory_cache import MemoryCacheProvider


class TestMemoryCacheProvider:
    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache_provider: MemoryCacheProvider) -> None:
        assert await cache_provider.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache_provider: MemoryCacheProvider, fake_clock) -> None:
        await cache_provider.set("riders_all", ["a", "b"], ttl=30)

        entry = await cache_provider.get("riders_all")

        assert entry is not None
        assert entry.value == ["a", "b"]
        assert entry.filled_at == fake_clock.now
        assert entry.expires_at == fake_clock.now + 30

    @pytest.mark.asyncio
    async def test_set_overwrites_existing(self, cache_provider: MemoryCacheProvider) -> None:
        await cache_provider.set("key1", "old")
        await cache_provider.set("key1", "new")

        entry = await cache_provider.get("key1")
        assert entry is not None
        assert entry.value == "new"

    @pytest.mark.asyncio
    async def test_default_ttl_applies(self, cache_provider: MemoryCacheProvider) -> None:
        entry = await cache_provider.set("key1", "value1")
        assert entry.ttl == 60.0

    @pytest.mark.asyncio
    async def test_entries_expire_independently(self, cache_provider: MemoryCacheProvider, fake_clock) -> None:
        await cache_provider.set("short", 1, ttl=10)
        await cache_provider.set("long", 2, ttl=100)

        fake_clock.advance(10)

        assert await cache_provider.get("short") is None
        assert (await cache_provider.get("long")).value == 2

    @pytest.mark.asyncio
    async def test_entry_fresh_just_before_expiry(self, cache_provider: MemoryCacheProvider, fake_clock) -> None:
        await cache_provider.set("key1", "value1", ttl=10)
        fake_clock.advance(9.5)
        assert await cache_provider.get("key1") is not None

    @pytest.mark.asyncio
    async def test_delete_removes_key(self, cache_provider: MemoryCacheProvider) -> None:
        await cache_provider.set("key1", "value1")
        await cache_provider.delete("key1")
        assert await cache_provider.get("key1") is None

    @pytest.mark.asyncio
    async def test_delete_nonexistent_is_noop(self, cache_provider: MemoryCacheProvider) -> None:
        await cache_provider.delete("nonexistent")

    @pytest.mark.asyncio
    async def test_least_recently_used_evicted_at_capacity(self, fake_clock) -> None:
        cache = MemoryCacheProvider(max_size=2, ttl=60, timer=fake_clock)
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.get("a")

        await cache.set("c", 3)

        assert await cache.get("a") is not None
        assert await cache.get("b") is None
        assert await cache.get("c") is not None

    def test_provider_name(self, cache_provider: MemoryCacheProvider) -> None:
        assert cache_provider.get_provider_name() == "memory_cache"


class TestCacheProviderContract:
    def test_abstract_surface(self) -> None:
        assert ICacheProvider.__abstractmethods__ == {"get", "set", "delete", "get_provider_name"}

    def test_memory_provider_is_a_cache_provider(self, cache_provider: MemoryCacheProvider) -> None:
        assert isinstance(cache_provider, ICacheProvider)
