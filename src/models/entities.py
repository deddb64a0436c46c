"""Core domain entities for the SafeBoda administration API.

Defines the resource kinds the API manages and the frozen Pydantic v2 models
for riders, drivers and trips.  Every model is immutable; an update produces
a new instance via ``model_copy(update={...})`` rather than mutating in place.

Key relationships:
    - A Trip references one Rider and one Driver by id (no foreign-key
      enforcement at this layer; the store is the source of truth)
    - Start and end points of a Trip are embedded Location values
    - ResourceKind ties each model to its own collection cache key
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Flat fare charged for every trip created through the API.
DEFAULT_TRIP_FARE = Decimal("2500")


class ResourceKind(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """The three independently cached collections exposed by the API."""

    RIDER = "RIDER"
    DRIVER = "DRIVER"
    TRIP = "TRIP"

    @property
    def collection_name(self) -> str:
        """Plural, lower-case name used in URLs, tables and config keys."""
        return f"{self.value.lower()}s"

    @property
    def cache_key(self) -> str:
        """Fixed cache key for the kind's "list all" snapshot.

        Keys are distinct per kind, so the three collections can share one
        keyed cache without ever colliding.
        """
        return f"{self.collection_name}_all"


class Rider(BaseModel):
    """A passenger registered with the platform."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(min_length=1, max_length=200)
    phone_number: str = Field(min_length=1, max_length=32)


class Driver(BaseModel):
    """A motorcycle taxi driver and the plate of the bike they ride."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(min_length=1, max_length=200)
    phone_number: str = Field(min_length=1, max_length=32)
    moto_plate_number: str = Field(min_length=1, max_length=32)


class Location(BaseModel):
    """A WGS84 coordinate pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class Trip(BaseModel):
    """A single ride from ``start`` to ``end`` for one rider and one driver."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    rider_id: uuid.UUID
    driver_id: uuid.UUID
    start: Location
    end: Location
    fare: Decimal = Field(default=DEFAULT_TRIP_FARE, ge=0)
    request_time: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)  # noqa: UP017
    )

    @field_serializer("fare", when_used="json")
    def serialize_fare(self, fare: Decimal) -> float:
        """JSON output carries the fare as a number; Python and the store keep the Decimal."""
        return float(fare)


class TripRequest(BaseModel):
    """What a client submits to book a trip.

    The server fills in the id, the driver assignment, the fare and the
    request time; see :meth:`to_trip`.
    """

    model_config = ConfigDict(frozen=True)

    start_location: Location
    end_location: Location
    rider_id: uuid.UUID

    def to_trip(self) -> Trip:
        """Materialise a new Trip from this request.

        Driver matching is not implemented yet, so the driver id is a
        freshly generated placeholder.
        """
        return Trip(
            id=uuid.uuid4(),
            rider_id=self.rider_id,
            driver_id=uuid.uuid4(),
            start=self.start_location,
            end=self.end_location,
            fare=DEFAULT_TRIP_FARE,
            request_time=datetime.now(tz=timezone.utc),  # noqa: UP017
        )
