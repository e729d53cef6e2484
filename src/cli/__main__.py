# =============================================================================
# src/cli/__main__.py: Package Entry Point
# =============================================================================
#
# Enables running the CLI package itself as a module:
#     python -m src.cli random
#
# Delegates to the facts CLI, the only command set this package provides.
# =============================================================================

"""Allow ``python -m src.cli`` execution."""

import sys

from src.cli.facts import main

sys.exit(main())
