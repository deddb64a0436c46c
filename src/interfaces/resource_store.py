"""Abstract base class for resource persistence providers.

# ─── ADAPTER PATTERN ─────────────────────────────────────────────────
#
# IResourceStore is the one contract behind the riders, drivers and trips
# tables.  The concrete implementations are the SQLite stores in
# src/providers/store/sqlite_resource_store.py; unit tests swap in
# AsyncMock objects built with ``spec=IResourceStore``.
#
# A store does no caching of its own.  Every call is a fresh round trip
# to the backing database; the collection cache sits in front of
# ``get_all`` only.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from src.models.entities import ResourceKind

ResourceT = TypeVar("ResourceT", bound=BaseModel)


class IResourceStore(ABC, Generic[ResourceT]):
    """Contract for create/read/update/delete on one resource kind.

    All storage operations are async.  Implementations translate backend
    failures into :class:`~src.utils.errors.StoreUnavailableError`.
    """

    kind: ResourceKind

    # ── Lifecycle ──────────────────────────────────────────────────────

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""

    # ── Reads ──────────────────────────────────────────────────────────

    @abstractmethod
    async def get_by_id(self, resource_id: uuid.UUID) -> ResourceT | None:
        """Return the resource with *resource_id*, or ``None`` if absent."""

    @abstractmethod
    async def get_all(self) -> list[ResourceT]:
        """Return every resource of this kind in insertion order.

        An empty table yields an empty list, never ``None``.
        """

    # ── Writes ─────────────────────────────────────────────────────────

    @abstractmethod
    async def add(self, resource: ResourceT) -> ResourceT:
        """Persist a new resource and return it as stored."""

    @abstractmethod
    async def update(self, resource: ResourceT) -> bool:
        """Replace the stored resource that has ``resource.id``.

        Returns
        -------
        bool
            ``True`` if a row was updated, ``False`` if no resource with
            that id exists.
        """

    @abstractmethod
    async def delete(self, resource_id: uuid.UUID) -> bool:
        """Delete the resource with *resource_id*.

        Idempotent: deleting an absent id is not an error.

        Returns
        -------
        bool
            ``True`` if a row was removed.
        """
