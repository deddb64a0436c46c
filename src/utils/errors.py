"""Custom exception hierarchy for the SafeBoda API.

All application exceptions inherit from :class:`SafeBodaError`, which
carries an optional ``provider_name`` so error handlers can tell which
adapter (e.g. "sqlite_riders", "memory_cache") raised the failure.

    SafeBodaError  (base -- catch-all for any application error)
    +-- StoreUnavailableError   (resource store unreachable / query failed)
    +-- CacheInvalidationError  (collection cache could not be cleared; fatal)
    +-- ConfigurationError      (startup / invalid config)

Each class declares the HTTP status the error middleware answers with, so
route handlers never have to translate these themselves.
"""


class SafeBodaError(Exception):
    """Base exception for all SafeBoda errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying the adapter that triggered the error.
    ``__str__`` prefixes the provider name in brackets, e.g.
    ``[sqlite_drivers] database is locked``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Store / cache errors
# ---------------------------------------------------------------------------

class StoreUnavailableError(SafeBodaError):
    """Raised when a resource store call fails.

    Treated as transient: the collection cache propagates it unchanged and
    caches nothing, and clients see a 503 they may retry.
    """

    status_code = 503

    def __init__(
        self,
        message: str = "Resource store is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CacheInvalidationError(SafeBodaError):
    """Raised when clearing a collection cache entry fails.

    Invalidation has no recoverable failure mode; if this is raised the
    process can no longer guarantee cache/store coherence.
    """

    def __init__(
        self,
        message: str = "Collection cache invalidation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(SafeBodaError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
