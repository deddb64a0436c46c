"""Unit tests for the domain models and request schemas."""

from __future__ import annotations

import uuid
from datetime import timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.api.schemas import RiderCreateRequest, TripUpdateRequest
from src.models.entities import DEFAULT_TRIP_FARE, Location, ResourceKind, Rider, TripRequest


class TestResourceKind:
    @pytest.mark.parametrize(
        ("kind", "key"),
        [
            (ResourceKind.RIDER, "riders_all"),
            (ResourceKind.DRIVER, "drivers_all"),
            (ResourceKind.TRIP, "trips_all"),
        ],
    )
    def test_cache_keys_are_distinct_per_kind(self, kind, key) -> None:
        assert kind.cache_key == key


class TestEntities:
    def test_rider_is_immutable(self, sample_rider) -> None:
        with pytest.raises(ValidationError):
            sample_rider.name = "Changed"

    def test_new_rider_gets_id(self) -> None:
        assert isinstance(Rider(name="A", phone_number="1").id, uuid.UUID)

    def test_location_bounds_enforced(self) -> None:
        with pytest.raises(ValidationError):
            Location(latitude=91, longitude=0)

    def test_fare_is_a_json_number_but_stays_decimal(self, sample_trip) -> None:
        assert sample_trip.model_dump()["fare"] == Decimal("3500.50")
        assert sample_trip.model_dump(mode="json")["fare"] == 3500.5
        assert '"fare":3500.5' in sample_trip.model_dump_json()


class TestTripRequest:
    def test_to_trip_fills_server_fields(self) -> None:
        rider_id = uuid.uuid4()
        request = TripRequest(
            rider_id=rider_id,
            start_location=Location(latitude=-1.94995, longitude=30.05885),
            end_location=Location(latitude=-1.95765, longitude=30.09123),
        )

        first = request.to_trip()
        second = request.to_trip()

        assert first.rider_id == rider_id
        assert first.fare == DEFAULT_TRIP_FARE == Decimal("2500")
        assert first.request_time.tzinfo == timezone.utc  # noqa: UP017
        assert first.start == request.start_location
        assert first.id != second.id
        assert first.driver_id != second.driver_id


class TestSchemas:
    def test_create_request_drops_client_id(self) -> None:
        body = RiderCreateRequest.model_validate(
            {"id": str(uuid.uuid4()), "name": "A", "phone_number": "1"}
        )
        assert "id" not in body.model_dump()
        assert isinstance(body.to_model().id, uuid.UUID)

    def test_trip_update_builds_trip(self, sample_trip) -> None:
        body = TripUpdateRequest.model_validate(sample_trip.model_dump(mode="json"))
        assert body.to_model() == sample_trip
