# =============================================================================
# src/cli/__init__.py - CLI Module Overview
# =============================================================================
#
# Operator commands for the SafeBoda API, run via `python -m src.cli`:
#
#   init-db   create the SQLite tables, optionally inserting demo records
#   counts    print how many records each collection holds
#   serve     run the FastAPI app under uvicorn
#
# argparse only; each command builds the stores it needs directly instead
# of going through the web app's lifespan.
# =============================================================================

"""CLI tools for the SafeBoda API (``python -m src.cli``)."""
