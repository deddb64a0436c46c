"""Resource store providers.

The SQLite stores persist riders, drivers and trips in data/safeboda.db.
``build_sqlite_stores`` returns one store per resource kind; ``seed_demo_data``
fills a fresh database with a small, fixed demo set.
"""

from src.providers.store.seed import seed_demo_data
from src.providers.store.sqlite_resource_store import (
    SQLiteDriverStore,
    SQLiteRiderStore,
    SQLiteTripStore,
    build_sqlite_stores,
)

__all__ = [
    "SQLiteDriverStore",
    "SQLiteRiderStore",
    "SQLiteTripStore",
    "build_sqlite_stores",
    "seed_demo_data",
]
