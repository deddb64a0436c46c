"""Abstract base class for cache service providers.

Defines the contract for the process-local key-value store that holds the
collection snapshots.  Implementations may use an in-memory mapping or any
other backend; the collection caches only ever talk to this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """One cached value plus the bookkeeping needed to expire it.

    Attributes
    ----------
    value:
        The cached object, stored and returned by reference.
    filled_at:
        Clock reading (seconds) at the moment the entry was written.
    ttl:
        Lifetime in seconds, measured from ``filled_at``.
    """

    value: Any
    filled_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.filled_at + self.ttl


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async so a network-backed store could be dropped in
    without changing callers.
    """

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Return the entry stored under *key*.

        Returns
        -------
        CacheEntry or None
            The entry if present and not expired; ``None`` otherwise.
        """

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: float | None = None) -> CacheEntry:
        """Store *value* under *key*, replacing any previous entry.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.  It is kept by reference, never copied.
        ttl:
            Time-to-live in seconds.  ``None`` uses the provider default.

        Returns
        -------
        CacheEntry
            The entry as written, including its fill timestamp.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key*.

        This is a no-op if the key does not exist.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this cache backend, used in logs."""
