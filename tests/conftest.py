"""Shared pytest fixtures for the SafeBoda API test suite."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.resource_store import IResourceStore
from src.models.entities import Driver, Location, ResourceKind, Rider, Trip
from src.providers.cache.memory_cache import MemoryCacheProvider


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Clock / cache
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_provider(fake_clock: FakeClock) -> MemoryCacheProvider:
    """A MemoryCacheProvider driven by the fake clock."""
    return MemoryCacheProvider(max_size=16, ttl=60.0, timer=fake_clock)


# ---------------------------------------------------------------------------
# Sample resources
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_rider() -> Rider:
    return Rider(
        id=uuid.UUID("aaaaaaaa-0000-0000-0000-000000000001"),
        name="Amina Nakato",
        phone_number="0772000111",
    )


@pytest.fixture
def sample_driver() -> Driver:
    return Driver(
        id=uuid.UUID("bbbbbbbb-0000-0000-0000-000000000001"),
        name="John Doe",
        phone_number="0701234567",
        moto_plate_number="UBE123",
    )


@pytest.fixture
def sample_trip(sample_rider: Rider, sample_driver: Driver) -> Trip:
    return Trip(
        id=uuid.UUID("cccccccc-0000-0000-0000-000000000001"),
        rider_id=sample_rider.id,
        driver_id=sample_driver.id,
        start=Location(latitude=0.3136, longitude=32.5811),
        end=Location(latitude=0.3476, longitude=32.5825),
        fare=Decimal("3500.50"),
        request_time=datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc),  # noqa: UP017
    )


# ---------------------------------------------------------------------------
# Mock stores
# ---------------------------------------------------------------------------


def make_mock_store(kind: ResourceKind, items: list[Any] | None = None) -> MagicMock:
    """Return an IResourceStore mock whose ``get_all`` yields *items*."""
    store = MagicMock(spec=IResourceStore)
    store.kind = kind
    store.get_provider_name.return_value = f"mock_{kind.collection_name}"
    store.initialize = AsyncMock(return_value=None)
    store.get_all = AsyncMock(return_value=list(items or []))
    store.get_by_id = AsyncMock(return_value=None)
    store.add = AsyncMock(side_effect=lambda resource: resource)
    store.update = AsyncMock(return_value=True)
    store.delete = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_rider_store(sample_rider: Rider) -> MagicMock:
    return make_mock_store(ResourceKind.RIDER, [sample_rider])


@pytest.fixture
def mock_driver_store(sample_driver: Driver) -> MagicMock:
    return make_mock_store(ResourceKind.DRIVER, [sample_driver])


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path to a throwaway SQLite database file."""
    return tmp_path / "safeboda_test.db"


@pytest.fixture
def store_factory():
    """Factory for IResourceStore mocks: ``store_factory(kind, items)``."""
    return make_mock_store
