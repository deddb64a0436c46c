"""SafeBoda domain models - re-exports all public model classes.

Other modules can import straight from ``src.models`` instead of reaching
into the individual submodule:

    - entities.py - ResourceKind plus the Rider, Driver and Trip resources
    - auth.py     - the authenticated Principal handed out by the auth gate
"""

from __future__ import annotations

from src.models.auth import Principal
from src.models.entities import (
    DEFAULT_TRIP_FARE,
    Driver,
    Location,
    ResourceKind,
    Rider,
    Trip,
    TripRequest,
)

__all__ = [
    "DEFAULT_TRIP_FARE",
    "Driver",
    "Location",
    "Principal",
    "ResourceKind",
    "Rider",
    "Trip",
    "TripRequest",
]
