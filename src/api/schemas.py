"""Request and response schemas for the SafeBoda API.

Domain models (src/models/entities.py) double as response bodies.  The
request schemas here exist because clients must not pick server-assigned
fields: a create request carries no id, while an update request must carry
the id so it can be checked against the path.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.models.entities import Driver, Location, Rider, Trip

# ---------------------------------------------------------------------------
# Riders
# ---------------------------------------------------------------------------


class RiderCreateRequest(BaseModel):
    """Body of ``POST /riders``.  Any client-supplied id is ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1, max_length=200)
    phone_number: str = Field(min_length=1, max_length=32)

    def to_model(self) -> Rider:
        return Rider(name=self.name, phone_number=self.phone_number)


class RiderUpdateRequest(BaseModel):
    """Body of ``PUT /riders/{id}``."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    name: str = Field(min_length=1, max_length=200)
    phone_number: str = Field(min_length=1, max_length=32)

    def to_model(self) -> Rider:
        return Rider(id=self.id, name=self.name, phone_number=self.phone_number)


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------


class DriverCreateRequest(BaseModel):
    """Body of ``POST /drivers``.  Any client-supplied id is ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1, max_length=200)
    phone_number: str = Field(min_length=1, max_length=32)
    moto_plate_number: str = Field(min_length=1, max_length=32)

    def to_model(self) -> Driver:
        return Driver(
            name=self.name,
            phone_number=self.phone_number,
            moto_plate_number=self.moto_plate_number,
        )


class DriverUpdateRequest(BaseModel):
    """Body of ``PUT /drivers/{id}``."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    name: str = Field(min_length=1, max_length=200)
    phone_number: str = Field(min_length=1, max_length=32)
    moto_plate_number: str = Field(min_length=1, max_length=32)

    def to_model(self) -> Driver:
        return Driver(
            id=self.id,
            name=self.name,
            phone_number=self.phone_number,
            moto_plate_number=self.moto_plate_number,
        )


# ---------------------------------------------------------------------------
# Trips (creation uses src.models.entities.TripRequest directly)
# ---------------------------------------------------------------------------


class TripUpdateRequest(BaseModel):
    """Body of ``PUT /trips/{id}``: a full trip record."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    rider_id: uuid.UUID
    driver_id: uuid.UUID
    start: Location
    end: Location
    fare: Decimal = Field(ge=0)
    request_time: datetime

    def to_model(self) -> Trip:
        return Trip(**self.model_dump())


# ---------------------------------------------------------------------------
# Operational responses
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    auth_enabled: bool
    caches: dict[str, dict[str, Any]]


class AdminDashboardResponse(BaseModel):
    """Admin-only landing payload."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
