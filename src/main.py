"""SafeBoda administration API entry point.

Wires together the resource stores, the shared keyed cache, the per-kind
collection caches and the auth gate via dependency injection.  Loads
configuration from ``.env`` and ``config/config.yaml`` and configures
structured logging.

# ─── COMPONENT GRAPH ─────────────────────────────────────────────────
#
#   stores             {RIDER: SQLiteRiderStore, DRIVER: ..., TRIP: ...}
#   cache_provider     MemoryCacheProvider (one instance, three keys)
#   collection_caches  {kind: CollectionCache(stores[kind], cache_provider)}
#   auth_gate          StaticTokenAuthGate(settings.get_token_roles())
#
# Every component lands on ``app.state`` during lifespan startup; route
# dependencies read them from there.  Tests pass pre-built components to
# create_app() instead of letting the lifespan build SQLite-backed ones.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_config, resolve_cache_ttls
from src.config.settings import Settings
from src.providers.auth.static_token_gate import StaticTokenAuthGate
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.store.seed import seed_demo_data
from src.providers.store.sqlite_resource_store import build_sqlite_stores
from src.services.collection_cache import build_collection_caches
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, app_config: dict[str, Any]) -> dict[str, Any]:
    """Construct every component for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    stores = build_sqlite_stores(app_settings.database_path)

    ttls = resolve_cache_ttls(app_config)
    cache_provider = MemoryCacheProvider(
        max_size=app_settings.cache_max_entries,
        ttl=app_settings.cache_ttl_seconds,
    )
    collection_caches = build_collection_caches(stores, cache_provider, ttls)

    auth_gate = StaticTokenAuthGate(app_settings.get_token_roles())
    if not auth_gate.enabled:
        _logger.warning("auth_gate_disabled", reason="API_TOKENS is empty")

    _logger.info(
        "components_built",
        stores=[s.get_provider_name() for s in stores.values()],
        cache=cache_provider.get_provider_name(),
        ttls={kind.collection_name: ttl for kind, ttl in ttls.items()},
    )

    return {
        "stores": stores,
        "cache_provider": cache_provider,
        "collection_caches": collection_caches,
        "auth_gate": auth_gate,
        "seed_demo_data": app_settings.seed_demo_data,
    }


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build (or adopt) components on startup and initialise the stores."""
    components = getattr(application.state, "injected_components", None)
    if components is None:
        components = _build_all(application.state.settings, application.state.config)

    for key, value in components.items():
        setattr(application.state, key, value)

    for store in application.state.stores.values():
        await store.initialize()

    if getattr(application.state, "seed_demo_data", False):
        await seed_demo_data(application.state.stores)

    _logger.info("app_started", version=application.version)
    yield
    _logger.info("app_stopped")


def create_app(
    app_settings: Settings | None = None,
    components: dict[str, Any] | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings to build from.  Defaults to the module-level settings.
    components:
        Optional pre-built components (``stores``, ``collection_caches``,
        ``auth_gate``, ...).  When given, the lifespan uses them as-is
        instead of building SQLite-backed ones.
    """
    app_settings = app_settings or settings
    app_config = config if app_settings is settings else load_config(settings=app_settings)

    application = FastAPI(
        title=app_config.get("app", {}).get("name", "SafeBoda API"),
        description="Administration API for riders, drivers and trips.",
        version=str(app_config.get("app", {}).get("version", "0.1.0")),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings
    application.state.config = app_config
    if components is not None:
        application.state.injected_components = components

    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=app_settings.get_cors_origins())

    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "development",
    )
