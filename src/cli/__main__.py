# =============================================================================
# src/cli/__main__.py - Package Entry Point
# =============================================================================
#
# Enables running the CLI package itself as a module:
#     python -m src.cli init-db --seed
#     python -m src.cli serve
# =============================================================================

"""Allow ``python -m src.cli`` execution."""

import sys

from src.cli.manage import main

sys.exit(main())
