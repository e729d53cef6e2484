# =============================================================================
# src/cli/facts.py: CLI Facts Command
# =============================================================================
#
# Command-line front end for the wildlife fact resolution pipeline. Each
# subcommand maps onto one WildlifeFactService operation:
#
#   random              : get_random_fact()
#   search <query>      : search_by_name(query)
#   category <name>     : get_random_by_category(name)
#   species <title>     : get_species_by_title(title)
#
# Typical usage:
#   python -m src.cli random
#   python -m src.cli search "red fox" --json
#   python -m src.cli category bird --blocked
#
# Output goes to stdout; log lines always go to stderr. The --quiet flag
# (implied by --json) raises the log threshold to WARNING so only real
# problems are reported.
# =============================================================================

"""Standalone CLI for querying wildlife facts.

Usage::

    python -m src.cli random
    python -m src.cli search "snow leopard"
    python -m src.cli category mammal --json
    python -m src.cli species "Red fox"

Exit status is 0 when at least one record is printed (an empty search is
also 0), 1 when a single-record command finds nothing, and 2 on a
configuration error.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from src.config.settings import Settings
from src.models.animal import UNKNOWN, CanonicalAnimal
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


def _format_animal_text(animal: CanonicalAnimal) -> str:
    """Render one record as an indented, human-readable block."""
    lines = [animal.name, "-" * len(animal.name)]
    if animal.fact:
        lines.append(animal.fact)
        lines.append("")

    for label, value in (
        ("Category", animal.category),
        ("Habitat", animal.habitat),
        ("Diet", animal.diet),
        ("Lifespan", animal.lifespan),
        ("Danger", animal.danger),
    ):
        if value != UNKNOWN:
            lines.append(f"  {label + ':':<10} {value}")

    if animal.image:
        lines.append(f"  {'Image:':<10} {animal.image}")
    if animal.source_url:
        lines.append(f"  {'Source:':<10} {animal.source_url}")
    elif animal.source:
        lines.append(f"  {'Source:':<10} {animal.source}")
    return "\n".join(lines)


def _format_text_output(animals: Sequence[CanonicalAnimal]) -> str:
    if not animals:
        return "No animals found."
    return "\n\n".join(_format_animal_text(animal) for animal in animals)


def _format_json_output(animals: Sequence[CanonicalAnimal], single: bool) -> str:
    """Serialize records with their wire field names (``sourceUrl``)."""
    payload = [animal.model_dump(by_alias=True) for animal in animals]
    if single:
        return json.dumps(payload[0] if payload else None, indent=2, ensure_ascii=False)
    return json.dumps(payload, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _suppress_logs(app_env: str) -> None:
    """Keep only WARNING+ log lines, on stderr, so stdout stays clean."""
    configure_logging(log_level="WARNING", app_env=app_env)


# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def _settings_from_args(args: argparse.Namespace) -> Settings:
    app_settings = Settings()
    overrides: dict[str, object] = {}
    if args.blocked:
        overrides["random_source_blocked"] = True
    if args.memory_cache:
        overrides["cache_backend"] = "memory"
    if overrides:
        app_settings = app_settings.model_copy(update=overrides)
    return app_settings


async def _run(args: argparse.Namespace, app_settings: Settings) -> int:
    """Run one subcommand against a fresh service session.

    Returns 0 on success, 1 when a single-record command finds nothing.
    """
    # Deferred import: building the service pulls in httpx, aiosqlite and
    # every provider module.
    from src.main import wildlife_service_session

    async with wildlife_service_session(app_settings) as service:
        if args.command == "random":
            found = await service.get_random_fact()
            animals = [found] if found else []
        elif args.command == "category":
            found = await service.get_random_by_category(args.category)
            animals = [found] if found else []
        elif args.command == "species":
            found = await service.get_species_by_title(args.title)
            animals = [found] if found else []
        else:
            animals = await service.search_by_name(args.query)

    single = args.command != "search"
    if args.json_output:
        print(_format_json_output(animals, single))
    else:
        print(_format_text_output(animals))

    if single and not animals:
        return 1
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with one subparser per service operation.

    The output and source flags are shared by every subcommand and go after
    it, e.g. ``search "red fox" --json``.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output records as JSON instead of formatted text.",
    )
    common.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors (implied by --json).",
    )
    common.add_argument(
        "--blocked",
        action="store_true",
        help="Skip the random-animal API (same as RANDOM_SOURCE_BLOCKED=true).",
    )
    common.add_argument(
        "--memory-cache",
        action="store_true",
        dest="memory_cache",
        help="Keep the page-info cache in memory for this run only.",
    )

    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="Look up wildlife facts from live sources with a local fallback.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")
    subparsers.add_parser("random", parents=[common], help="Show a random animal.")

    search = subparsers.add_parser("search", parents=[common], help="Search animals by name.")
    search.add_argument("query", help="Free-text name or species query.")

    category = subparsers.add_parser(
        "category", parents=[common], help="Show a random animal of a category."
    )
    category.add_argument("category", help="Category name, e.g. Mammal or Bird.")

    species = subparsers.add_parser(
        "species", parents=[common], help="Resolve one exact Wikipedia title."
    )
    species.add_argument("title", help="Wikipedia page title.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        app_settings = _settings_from_args(args)
    except ValidationError as exc:
        print(f"Error: invalid settings: {exc}", file=sys.stderr)
        return 2

    if args.quiet or args.json_output:
        _suppress_logs(app_settings.app_env)
    else:
        configure_logging(log_level=app_settings.log_level, app_env=app_settings.app_env)

    try:
        return asyncio.run(_run(args, app_settings))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
