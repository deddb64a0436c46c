"""Demo records inserted into a fresh database.

One rider, one driver and a trip linking them, with fixed ids so repeated
seeding is a no-op.  Seeding goes through the IResourceStore interface, so
it works with any store implementation.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import structlog

from src.interfaces.resource_store import IResourceStore
from src.models.entities import Driver, Location, ResourceKind, Rider, Trip

logger = structlog.get_logger(logger_name=__name__)

DEMO_RIDER = Rider(
    id=uuid.UUID("22222222-2222-2222-2222-222222222222"),
    name="Test Rider",
    phone_number="1234567890",
)

DEMO_DRIVER = Driver(
    id=uuid.UUID("33333333-3333-3333-3333-333333333333"),
    name="Test Driver",
    phone_number="0987654321",
    moto_plate_number="RAA123A",
)

DEMO_TRIP = Trip(
    id=uuid.UUID("11111111-1111-1111-1111-111111111111"),
    rider_id=DEMO_RIDER.id,
    driver_id=DEMO_DRIVER.id,
    start=Location(latitude=-1.94995, longitude=30.05885),
    end=Location(latitude=-1.95765, longitude=30.09123),
    fare=Decimal("1500"),
    request_time=datetime(2024, 1, 1, tzinfo=timezone.utc),  # noqa: UP017
)

DEMO_DATA = {
    ResourceKind.RIDER: [DEMO_RIDER],
    ResourceKind.DRIVER: [DEMO_DRIVER],
    ResourceKind.TRIP: [DEMO_TRIP],
}


async def seed_demo_data(stores: dict[ResourceKind, IResourceStore]) -> int:
    """Insert any demo record that is missing.  Returns how many were added."""
    added = 0
    for kind, records in DEMO_DATA.items():
        store = stores.get(kind)
        if store is None:
            continue
        for record in records:
            if await store.get_by_id(record.id) is None:
                await store.add(record)
                added += 1
    logger.info("demo_data_seeded", added=added)
    return added
