"""Public interface definitions for all swappable collaborators.

Business logic depends only on the abstract base classes in this package.
Concrete adapters implement them and are injected at startup in
``src/main.py``, so tests can hand in fakes without touching the database.

CONCRETE PROVIDER MAP:
    Interface          →  Concrete implementations
    ─────────────────────────────────────────────────────────────────────
    IResourceStore     →  SQLiteRiderStore, SQLiteDriverStore,
                          SQLiteTripStore      (src/providers/store/)
    ICacheProvider     →  MemoryCacheProvider  (src/providers/cache/)
    IAuthGate          →  StaticTokenAuthGate  (src/providers/auth/)
"""

from src.interfaces.auth_gate import IAuthGate
from src.interfaces.cache_provider import CacheEntry, ICacheProvider
from src.interfaces.resource_store import IResourceStore

__all__ = [
    "CacheEntry",
    "IAuthGate",
    "ICacheProvider",
    "IResourceStore",
]
