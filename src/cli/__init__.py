# =============================================================================
# src/cli/__init__.py: CLI Module Overview
# =============================================================================
#
# Command-line access to the wildfacts resolution pipeline, for operators
# and developers who want a fact without writing any code.
#
#   FACTS (facts.py)
#      Subcommands random, search, category and species, each backed by one
#      WildlifeFactService operation. Prints text or JSON to stdout.
#
# Architecture Notes:
#   - argparse is used for argument parsing (not Click/Typer).
#   - Service construction is deferred inside the command runner so that
#     --help and argument errors return without importing the providers.
# =============================================================================

"""CLI tools for the wildfacts pipeline.

Usage::

    python -m src.cli random
    python -m src.cli search "red fox" --json
"""
