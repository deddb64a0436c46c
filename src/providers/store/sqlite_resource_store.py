"""SQLite-backed resource stores for riders, drivers and trips.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Providers (concrete adapters implementing IResourceStore).
# Database: ``data/safeboda.db`` - one table per resource kind.
#
# The three stores share _SQLiteResourceStore, which owns connection
# handling, error translation and the generic CRUD statements.  Each
# subclass only declares its table DDL, its column list and how to map a
# model to and from a row.
#
# Uses ``aiosqlite`` for async I/O and ``PRAGMA journal_mode=WAL`` so
# readers are not blocked while a write is in progress.  A connection is
# opened per call; nothing is cached at this layer.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

import aiosqlite
import structlog

from src.interfaces.resource_store import IResourceStore, ResourceT
from src.models.entities import Driver, Location, ResourceKind, Rider, Trip
from src.utils.errors import StoreUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/safeboda.db")

# ── Schema DDL ────────────────────────────────────────────────────────

_CREATE_RIDERS_TABLE = """\
CREATE TABLE IF NOT EXISTS riders (
    id            TEXT NOT NULL PRIMARY KEY,
    name          TEXT NOT NULL,
    phone_number  TEXT NOT NULL
);
"""

_CREATE_DRIVERS_TABLE = """\
CREATE TABLE IF NOT EXISTS drivers (
    id                 TEXT NOT NULL PRIMARY KEY,
    name               TEXT NOT NULL,
    phone_number       TEXT NOT NULL,
    moto_plate_number  TEXT NOT NULL
);
"""

_CREATE_TRIPS_TABLE = """\
CREATE TABLE IF NOT EXISTS trips (
    id               TEXT NOT NULL PRIMARY KEY,
    rider_id         TEXT NOT NULL,
    driver_id        TEXT NOT NULL,
    start_latitude   REAL NOT NULL,
    start_longitude  REAL NOT NULL,
    end_latitude     REAL NOT NULL,
    end_longitude    REAL NOT NULL,
    fare             TEXT NOT NULL,
    request_time     TEXT NOT NULL
);
"""

_CREATE_TRIPS_INDICES = [
    "CREATE INDEX IF NOT EXISTS idx_trips_rider ON trips(rider_id);",
    "CREATE INDEX IF NOT EXISTS idx_trips_driver ON trips(driver_id);",
]


class _SQLiteResourceStore(IResourceStore[ResourceT]):
    """Shared CRUD plumbing for the per-kind SQLite stores.

    Subclasses set ``kind``, ``_table``, ``_columns`` (``id`` first) and
    ``_ddl``, and implement ``_to_row`` / ``_from_row``.
    """

    _table: str
    _columns: tuple[str, ...]
    _ddl: list[str]

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)
        cols = ", ".join(self._columns)
        placeholders = ", ".join("?" for _ in self._columns)
        assignments = ", ".join(f"{c} = ?" for c in self._columns[1:])
        self._select_one_sql = f"SELECT {cols} FROM {self._table} WHERE id = ?;"
        self._select_all_sql = f"SELECT {cols} FROM {self._table} ORDER BY rowid;"
        self._insert_sql = f"INSERT INTO {self._table} ({cols}) VALUES ({placeholders});"
        self._update_sql = f"UPDATE {self._table} SET {assignments} WHERE id = ?;"
        self._delete_sql = f"DELETE FROM {self._table} WHERE id = ?;"

    # ── Row mapping ────────────────────────────────────────────────────

    def _to_row(self, resource: ResourceT) -> tuple[Any, ...]:
        raise NotImplementedError

    def _from_row(self, row: aiosqlite.Row) -> ResourceT:
        raise NotImplementedError

    # ── Connection handling ────────────────────────────────────────────

    @asynccontextmanager
    async def _connect(self, operation: str) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection and translate any sqlite failure."""
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                yield db
        except aiosqlite.Error as exc:
            logger.error(
                "store_operation_failed",
                store=self.get_provider_name(),
                operation=operation,
                error=str(exc),
            )
            raise StoreUnavailableError(
                f"{operation} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    # ── Lifecycle ──────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Create this store's table and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self._connect("initialize") as db:
            await db.execute("PRAGMA journal_mode=WAL;")
            for sql in self._ddl:
                await db.execute(sql)
            await db.commit()
        logger.info("store_initialized", store=self.get_provider_name(), path=str(self._db_path))

    def get_provider_name(self) -> str:
        return f"sqlite_{self.kind.collection_name}"

    # ── IResourceStore ─────────────────────────────────────────────────

    async def get_by_id(self, resource_id: uuid.UUID) -> ResourceT | None:
        async with self._connect("get_by_id") as db:
            cursor = await db.execute(self._select_one_sql, (str(resource_id),))
            row = await cursor.fetchone()
        return self._from_row(row) if row is not None else None

    async def get_all(self) -> list[ResourceT]:
        async with self._connect("get_all") as db:
            cursor = await db.execute(self._select_all_sql)
            rows = await cursor.fetchall()
        return [self._from_row(r) for r in rows]

    async def add(self, resource: ResourceT) -> ResourceT:
        async with self._connect("add") as db:
            await db.execute(self._insert_sql, self._to_row(resource))
            await db.commit()
        logger.info("resource_added", store=self.get_provider_name(), id=str(resource.id))
        return resource

    async def update(self, resource: ResourceT) -> bool:
        row = self._to_row(resource)
        async with self._connect("update") as db:
            cursor = await db.execute(self._update_sql, (*row[1:], row[0]))
            await db.commit()
            updated = cursor.rowcount > 0
        logger.info(
            "resource_updated",
            store=self.get_provider_name(),
            id=str(resource.id),
            found=updated,
        )
        return updated

    async def delete(self, resource_id: uuid.UUID) -> bool:
        async with self._connect("delete") as db:
            cursor = await db.execute(self._delete_sql, (str(resource_id),))
            await db.commit()
            removed = cursor.rowcount > 0
        logger.info(
            "resource_deleted",
            store=self.get_provider_name(),
            id=str(resource_id),
            found=removed,
        )
        return removed


class SQLiteRiderStore(_SQLiteResourceStore[Rider]):
    """Riders table."""

    kind = ResourceKind.RIDER
    _table = "riders"
    _columns = ("id", "name", "phone_number")
    _ddl = [_CREATE_RIDERS_TABLE]

    def _to_row(self, resource: Rider) -> tuple[Any, ...]:
        return (str(resource.id), resource.name, resource.phone_number)

    def _from_row(self, row: aiosqlite.Row) -> Rider:
        return Rider(id=uuid.UUID(row["id"]), name=row["name"], phone_number=row["phone_number"])


class SQLiteDriverStore(_SQLiteResourceStore[Driver]):
    """Drivers table."""

    kind = ResourceKind.DRIVER
    _table = "drivers"
    _columns = ("id", "name", "phone_number", "moto_plate_number")
    _ddl = [_CREATE_DRIVERS_TABLE]

    def _to_row(self, resource: Driver) -> tuple[Any, ...]:
        return (
            str(resource.id),
            resource.name,
            resource.phone_number,
            resource.moto_plate_number,
        )

    def _from_row(self, row: aiosqlite.Row) -> Driver:
        return Driver(
            id=uuid.UUID(row["id"]),
            name=row["name"],
            phone_number=row["phone_number"],
            moto_plate_number=row["moto_plate_number"],
        )


class SQLiteTripStore(_SQLiteResourceStore[Trip]):
    """Trips table.  Locations are flattened into lat/long column pairs."""

    kind = ResourceKind.TRIP
    _table = "trips"
    _columns = (
        "id",
        "rider_id",
        "driver_id",
        "start_latitude",
        "start_longitude",
        "end_latitude",
        "end_longitude",
        "fare",
        "request_time",
    )
    _ddl = [_CREATE_TRIPS_TABLE, *_CREATE_TRIPS_INDICES]

    def _to_row(self, resource: Trip) -> tuple[Any, ...]:
        # Fare is stored as text so Decimal precision survives the round trip.
        return (
            str(resource.id),
            str(resource.rider_id),
            str(resource.driver_id),
            resource.start.latitude,
            resource.start.longitude,
            resource.end.latitude,
            resource.end.longitude,
            str(resource.fare),
            resource.request_time.isoformat(),
        )

    def _from_row(self, row: aiosqlite.Row) -> Trip:
        return Trip(
            id=uuid.UUID(row["id"]),
            rider_id=uuid.UUID(row["rider_id"]),
            driver_id=uuid.UUID(row["driver_id"]),
            start=Location(latitude=row["start_latitude"], longitude=row["start_longitude"]),
            end=Location(latitude=row["end_latitude"], longitude=row["end_longitude"]),
            fare=Decimal(row["fare"]),
            request_time=datetime.fromisoformat(row["request_time"]),
        )


def build_sqlite_stores(db_path: str | Path = _DEFAULT_DB_PATH) -> dict[ResourceKind, IResourceStore]:
    """Return one SQLite store per resource kind, all sharing *db_path*."""
    return {
        ResourceKind.RIDER: SQLiteRiderStore(db_path=db_path),
        ResourceKind.DRIVER: SQLiteDriverStore(db_path=db_path),
        ResourceKind.TRIP: SQLiteTripStore(db_path=db_path),
    }
