"""FastAPI route handlers for the SafeBoda administration API.

Collection reads go through the per-kind CollectionCache; everything else
talks to the resource store directly.  Store and cache instances are
resolved from ``app.state`` via FastAPI's ``Depends`` using the
``Annotated`` pattern.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                         Method  Auth   Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/riders                   GET     -      List riders (cached)
# /api/v1/riders                   POST    Admin  Create rider
# /api/v1/riders/{id}              GET     -      Get one rider
# /api/v1/riders/{id}              PUT     Admin  Replace rider
# /api/v1/riders/{id}              DELETE  Admin  Delete rider (idempotent)
# /api/v1/drivers[...]             …       …      Same shape as riders
# /api/v1/trips                    POST    Admin  Book trip from TripRequest
# /api/v1/trips[...]               …       …      Same shape as riders
# /api/v1/admin/dashboard          GET     Admin  Admin landing payload
# /api/v1/health                   GET     -      Health + cache counters
#
# INVALIDATION RULE:
# Every successful create/update/delete awaits the kind's
# CollectionCache.invalidate() before the handler returns.  Requests
# rejected by validation (id mismatch, bad body) or by the role gate never
# reach the store, and a failed mutation (store raised, update of an
# unknown id) never invalidates.  Deletes invalidate whether or not the
# id existed.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import uuid
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from src.api.auth import AdminDep
from src.api.schemas import (
    AdminDashboardResponse,
    DriverCreateRequest,
    DriverUpdateRequest,
    HealthResponse,
    RiderCreateRequest,
    RiderUpdateRequest,
    TripUpdateRequest,
)
from src.interfaces.resource_store import IResourceStore
from src.models.entities import Driver, ResourceKind, Rider, Trip, TripRequest
from src.services.collection_cache import CollectionCache
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _get_stores(request: Request) -> dict[ResourceKind, IResourceStore]:
    """Return the per-kind resource stores from application state."""
    return request.app.state.stores


def _get_collection_caches(request: Request) -> dict[ResourceKind, CollectionCache]:
    """Return the per-kind collection caches from application state."""
    return request.app.state.collection_caches


StoresDep = Annotated[dict[ResourceKind, IResourceStore], Depends(_get_stores)]
CachesDep = Annotated[dict[ResourceKind, CollectionCache], Depends(_get_collection_caches)]


# ---------------------------------------------------------------------------
# Shared handler steps
# ---------------------------------------------------------------------------


async def _get_or_404(store: IResourceStore, resource_id: uuid.UUID) -> BaseModel:
    resource = await store.get_by_id(resource_id)
    if resource is None:
        raise HTTPException(
            status_code=404,
            detail=f"{store.kind.value.title()} not found: {resource_id}",
        )
    return resource


async def _create(
    kind: ResourceKind,
    resource: BaseModel,
    stores: dict[ResourceKind, IResourceStore],
    caches: dict[ResourceKind, CollectionCache],
    request: Request,
    response: Response,
    detail_route: str,
) -> BaseModel:
    created = await stores[kind].add(resource)
    await caches[kind].invalidate()
    _logger.info("resource_created", kind=kind.value, id=str(created.id))
    response.headers["Location"] = str(request.url_for(detail_route, resource_id=str(created.id)))
    return created


async def _update(
    kind: ResourceKind,
    path_id: uuid.UUID,
    resource: BaseModel,
    stores: dict[ResourceKind, IResourceStore],
    caches: dict[ResourceKind, CollectionCache],
) -> Response:
    found = await stores[kind].update(resource)
    if not found:
        raise HTTPException(status_code=404, detail=f"{kind.value.title()} not found: {path_id}")
    await caches[kind].invalidate()
    _logger.info("resource_updated", kind=kind.value, id=str(path_id))
    return Response(status_code=204)


async def _delete(
    kind: ResourceKind,
    resource_id: uuid.UUID,
    stores: dict[ResourceKind, IResourceStore],
    caches: dict[ResourceKind, CollectionCache],
) -> Response:
    removed = await stores[kind].delete(resource_id)
    await caches[kind].invalidate()
    _logger.info("resource_deleted", kind=kind.value, id=str(resource_id), existed=removed)
    return Response(status_code=204)


def _ensure_ids_match(kind: ResourceKind, path_id: uuid.UUID, body_id: uuid.UUID) -> None:
    if path_id != body_id:
        _logger.info("update_id_mismatch", kind=kind.value, path_id=str(path_id), body_id=str(body_id))
        raise HTTPException(status_code=400, detail=f"{kind.value.title()} ID mismatch")


# ---------------------------------------------------------------------------
# Riders
# ---------------------------------------------------------------------------


@router.get("/riders", response_model=list[Rider], summary="List all riders")
async def list_riders(caches: CachesDep) -> list[Rider]:
    return await caches[ResourceKind.RIDER].list()


@router.get("/riders/{resource_id}", response_model=Rider, summary="Get a rider")
async def get_rider(resource_id: uuid.UUID, stores: StoresDep) -> Rider:
    return await _get_or_404(stores[ResourceKind.RIDER], resource_id)


@router.post("/riders", response_model=Rider, status_code=201, summary="Create a rider")
async def create_rider(
    body: RiderCreateRequest,
    request: Request,
    response: Response,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Rider:
    return await _create(
        ResourceKind.RIDER, body.to_model(), stores, caches, request, response, "get_rider"
    )


@router.put("/riders/{resource_id}", status_code=204, summary="Replace a rider")
async def update_rider(
    resource_id: uuid.UUID,
    body: RiderUpdateRequest,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Response:
    _ensure_ids_match(ResourceKind.RIDER, resource_id, body.id)
    return await _update(ResourceKind.RIDER, resource_id, body.to_model(), stores, caches)


@router.delete("/riders/{resource_id}", status_code=204, summary="Delete a rider")
async def delete_rider(
    resource_id: uuid.UUID,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Response:
    return await _delete(ResourceKind.RIDER, resource_id, stores, caches)


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------


@router.get("/drivers", response_model=list[Driver], summary="List all drivers")
async def list_drivers(caches: CachesDep) -> list[Driver]:
    return await caches[ResourceKind.DRIVER].list()


@router.get("/drivers/{resource_id}", response_model=Driver, summary="Get a driver")
async def get_driver(resource_id: uuid.UUID, stores: StoresDep) -> Driver:
    return await _get_or_404(stores[ResourceKind.DRIVER], resource_id)


@router.post("/drivers", response_model=Driver, status_code=201, summary="Create a driver")
async def create_driver(
    body: DriverCreateRequest,
    request: Request,
    response: Response,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Driver:
    return await _create(
        ResourceKind.DRIVER, body.to_model(), stores, caches, request, response, "get_driver"
    )


@router.put("/drivers/{resource_id}", status_code=204, summary="Replace a driver")
async def update_driver(
    resource_id: uuid.UUID,
    body: DriverUpdateRequest,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Response:
    _ensure_ids_match(ResourceKind.DRIVER, resource_id, body.id)
    return await _update(ResourceKind.DRIVER, resource_id, body.to_model(), stores, caches)


@router.delete("/drivers/{resource_id}", status_code=204, summary="Delete a driver")
async def delete_driver(
    resource_id: uuid.UUID,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Response:
    return await _delete(ResourceKind.DRIVER, resource_id, stores, caches)


# ---------------------------------------------------------------------------
# Trips
# ---------------------------------------------------------------------------


@router.get("/trips", response_model=list[Trip], summary="List all trips")
async def list_trips(caches: CachesDep) -> list[Trip]:
    return await caches[ResourceKind.TRIP].list()


@router.get("/trips/{resource_id}", response_model=Trip, summary="Get a trip")
async def get_trip(resource_id: uuid.UUID, stores: StoresDep) -> Trip:
    return await _get_or_404(stores[ResourceKind.TRIP], resource_id)


@router.post("/trips", response_model=Trip, status_code=201, summary="Book a trip")
async def create_trip(
    body: TripRequest,
    request: Request,
    response: Response,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Trip:
    return await _create(
        ResourceKind.TRIP, body.to_trip(), stores, caches, request, response, "get_trip"
    )


@router.put("/trips/{resource_id}", status_code=204, summary="Replace a trip")
async def update_trip(
    resource_id: uuid.UUID,
    body: TripUpdateRequest,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Response:
    _ensure_ids_match(ResourceKind.TRIP, resource_id, body.id)
    return await _update(ResourceKind.TRIP, resource_id, body.to_model(), stores, caches)


@router.delete("/trips/{resource_id}", status_code=204, summary="Delete a trip")
async def delete_trip(
    resource_id: uuid.UUID,
    stores: StoresDep,
    caches: CachesDep,
    _admin: AdminDep,
) -> Response:
    return await _delete(ResourceKind.TRIP, resource_id, stores, caches)


# ---------------------------------------------------------------------------
# Admin / operational
# ---------------------------------------------------------------------------


@router.get(
    "/admin/dashboard",
    response_model=AdminDashboardResponse,
    summary="Admin-only landing endpoint",
)
async def admin_dashboard(_admin: AdminDep) -> AdminDashboardResponse:
    return AdminDashboardResponse(message="Admin OK")


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request, caches: CachesDep) -> HealthResponse:
    """Return version, auth mode and per-collection cache counters."""
    gate = getattr(request.app.state, "auth_gate", None)
    return HealthResponse(
        status="ok",
        version=request.app.version,
        auth_enabled=bool(gate is not None and gate.enabled),
        caches={kind.collection_name: cache.stats() for kind, cache in caches.items()},
    )
