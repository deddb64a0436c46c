# =============================================================================
# src/cli/manage.py - Operator Commands (database + server)
# =============================================================================
#
# Small management CLI for running the SafeBoda API outside of a container:
#
#   python -m src.cli init-db            # create the riders/drivers/trips tables
#   python -m src.cli init-db --seed     # ...and insert the demo records
#   python -m src.cli counts             # print how many records each table holds
#   python -m src.cli serve --port 8080  # run the API under uvicorn
#
# Paths, host and port default to the values from Settings (environment
# variables / .env), and every flag overrides them for a single run.
# =============================================================================

"""Management CLI for the SafeBoda API: database setup and serving."""

from __future__ import annotations

import argparse
import asyncio
import sys

import uvicorn

from src.config.settings import Settings
from src.providers.store.seed import seed_demo_data
from src.providers.store.sqlite_resource_store import build_sqlite_stores
from src.utils.errors import SafeBodaError
from src.utils.logging import configure_logging

# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _handle_init_db(args: argparse.Namespace, app_settings: Settings) -> int:
    """Create every table, optionally seeding the demo records."""
    db_path = args.db or app_settings.database_path
    stores = build_sqlite_stores(db_path)
    for store in stores.values():
        await store.initialize()
    print(f"Initialised database: {db_path}")

    if args.seed:
        added = await seed_demo_data(stores)
        print(f"  Demo records added: {added}")
    return 0


async def _handle_counts(args: argparse.Namespace, app_settings: Settings) -> int:
    """Print the number of records per collection."""
    db_path = args.db or app_settings.database_path
    stores = build_sqlite_stores(db_path)

    print(f"Database: {db_path}")
    print("=" * 40)
    for kind, store in stores.items():
        await store.initialize()
        records = await store.get_all()
        print(f"  {kind.collection_name:<10} {len(records)}")
    return 0


def _handle_serve(args: argparse.Namespace, app_settings: Settings) -> int:
    """Run the API under uvicorn (blocks until interrupted)."""
    uvicorn.run(
        "src.main:app",
        host=args.host or app_settings.app_host,
        port=args.port or app_settings.app_port,
        reload=args.reload,
    )
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the management CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="Manage the SafeBoda API database and server.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Management commands")

    # -- init-db --
    init_parser = subparsers.add_parser("init-db", help="Create the database tables")
    init_parser.add_argument("--db", help="SQLite file path (default: DATABASE_PATH)")
    init_parser.add_argument("--seed", action="store_true", help="Insert the demo records")

    # -- counts --
    counts_parser = subparsers.add_parser("counts", help="Show record counts per collection")
    counts_parser.add_argument("--db", help="SQLite file path (default: DATABASE_PATH)")

    # -- serve --
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", help="Bind address (default: APP_HOST)")
    serve_parser.add_argument("--port", type=int, help="Bind port (default: APP_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.  Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    app_settings = Settings()
    configure_logging(log_level=app_settings.log_level)

    if args.command == "serve":
        return _handle_serve(args, app_settings)

    handler = _handle_init_db if args.command == "init-db" else _handle_counts
    try:
        return asyncio.run(handler(args, app_settings))
    except SafeBodaError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
