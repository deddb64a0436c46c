"""Utility modules for the SafeBoda API.

- **errors** -- exception hierarchy rooted at SafeBodaError; each class
  knows the HTTP status the error middleware should answer with.
- **logging** -- structlog setup with console output in development and
  structured JSON in production.
"""

from src.utils.errors import (
    CacheInvalidationError,
    ConfigurationError,
    SafeBodaError,
    StoreUnavailableError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "CacheInvalidationError",
    "ConfigurationError",
    "SafeBodaError",
    "StoreUnavailableError",
    "configure_logging",
    "get_logger",
]
