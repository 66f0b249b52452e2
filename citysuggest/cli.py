"""Command-line interface for querying the city suggestions locally."""
from __future__ import annotations

import argparse
import os
import logging
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from citysuggest.api import parse_query, run
from citysuggest.container import SuggestionsConfig, SuggestionsContainer, initialize
from citysuggest.errors import DataLoadError, ValidationError
from citysuggest.settings import get_log_level

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Suggest Canadian and US cities")
    parser.add_argument(
        "--admin-codes",
        type=Path,
        default=None,
        help="Admin2 code table (default: CITYSUGGEST_ADMIN_CODES_PATH or bundled data)",
    )
    parser.add_argument(
        "--cities",
        type=Path,
        default=None,
        help="City table (default: CITYSUGGEST_CITIES_PATH or bundled data)",
    )
    parser.add_argument(
        "--min-population",
        type=int,
        default=None,
        help="Minimum population for a city to be loaded",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    suggest = subparsers.add_parser("suggest", help="Rank cities for a partial name")
    suggest.add_argument("query", help="Partial city name")
    suggest.add_argument("--latitude", type=float, default=None)
    suggest.add_argument("--longitude", type=float, default=None)
    suggest.add_argument(
        "--limit", type=int, default=10, help="Rows to display (default: %(default)s)"
    )

    subparsers.add_parser("stats", help="Show dataset load statistics")
    subparsers.add_parser("serve", help="Run the HTTP API with Uvicorn")
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> SuggestionsConfig:
    config = SuggestionsConfig.from_env()
    if args.admin_codes is not None:
        config.admin_codes_path = args.admin_codes
    if args.cities is not None:
        config.cities_path = args.cities
    if args.min_population is not None:
        config.min_population = args.min_population
    return config


def _export_overrides(args: argparse.Namespace) -> None:
    # The API factory builds its own config from the environment.
    if args.admin_codes is not None:
        os.environ["CITYSUGGEST_ADMIN_CODES_PATH"] = str(args.admin_codes)
    if args.cities is not None:
        os.environ["CITYSUGGEST_CITIES_PATH"] = str(args.cities)
    if args.min_population is not None:
        os.environ["CITYSUGGEST_MIN_POPULATION"] = str(args.min_population)


def _run_suggest(
    args: argparse.Namespace, container: SuggestionsContainer, console: Console
) -> int:
    latitude = None if args.latitude is None else str(args.latitude)
    longitude = None if args.longitude is None else str(args.longitude)
    try:
        query = parse_query(args.query, latitude, longitude)
    except ValidationError as exc:
        log.error("%s", exc)
        return 2

    result = container.query_service.get_suggestions(
        query.q, query.latitude, query.longitude
    )
    if not result.ok:
        log.error("Query failed (%s)", result.failure)
        return 1
    if not result.suggestions:
        console.print(f"No city matches {query.q!r}", markup=False)
        return 0

    table = Table(title=f"Suggestions for {query.q!r}")
    table.add_column("Score", justify="right")
    table.add_column("City")
    table.add_column("Latitude", justify="right")
    table.add_column("Longitude", justify="right")
    for suggestion in result.suggestions[: max(args.limit, 0)]:
        table.add_row(
            f"{suggestion.score:.3f}",
            suggestion.name,
            f"{suggestion.latitude:.5f}",
            f"{suggestion.longitude:.5f}",
        )
    console.print(table)
    return 0


def _run_stats(container: SuggestionsContainer, console: Console) -> int:
    stats = container.dataset.stats
    table = Table(title="Dataset")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Rows read", str(stats.rows_read))
    table.add_row("Dropped (country)", str(stats.dropped_country))
    table.add_row("Dropped (population)", str(stats.dropped_population))
    table.add_row("Dropped (ambiguous)", str(stats.dropped_ambiguous))
    table.add_row("Renamed", str(stats.renamed))
    table.add_row("Loaded", str(stats.loaded))
    console.print(table)
    return 0


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    console = console or Console()
    level_name = args.log_level or get_log_level()
    handler = RichHandler(console=console, markup=False, rich_tracebacks=True)
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    if args.command == "serve":
        _export_overrides(args)
        run(str(level_name))
        return 0

    try:
        container = initialize(_build_config(args))
    except DataLoadError as exc:
        log.error("Failed to load the city dataset: %s", exc)
        return 1

    if args.command == "suggest":
        return _run_suggest(args, container, console)
    return _run_stats(container, console)


if __name__ == "__main__":  # pragma: no cover - CLI
    sys.exit(main())
