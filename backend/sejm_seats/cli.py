"""
Seat allocation from published vote counts

Usage:
  sejm-seats                                  # fetch from SOURCE_BASE_URL
  sejm-seats --print-names                    # also list elected candidates
  sejm-seats --source directory --data-dir ./data/sejm2023
  sejm-seats --election-config my_election.json --output results/
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError

from sejm_seats.config import Settings, load_election_config, settings
from sejm_seats.exceptions import DataUnavailableError
from sejm_seats.schemas.allocation import ElectionResult
from sejm_seats.services.allocation.engine import AllocationEngine
from sejm_seats.services.allocation.exporter import export_results
from sejm_seats.services.allocation.national import rank_groupings
from sejm_seats.services.sources import make_source
from sejm_seats.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sejm-seats",
        description="D'Hondt seat allocation per region with national totals",
    )
    parser.add_argument(
        "--print_names", "--print-names", dest="print_names", action="store_true",
        default=settings.PRINT_NAMES,
        help="Whether to print the names of candidates who got in.",
    )
    parser.add_argument(
        "--source", choices=["http", "directory"], default=settings.DATA_SOURCE,
        help=f"vote data source (default: {settings.DATA_SOURCE})",
    )
    parser.add_argument("--data-dir", default=settings.DATA_DIR, help="directory for --source directory")
    parser.add_argument("--base-url", default=settings.SOURCE_BASE_URL, help="base URL for --source http")
    parser.add_argument(
        "--election-config", default=settings.ELECTION_CONFIG,
        help="JSON with seats_per_region and aliases (default: bundled Sejm 2023)",
    )
    parser.add_argument(
        "--parallel", type=int, default=settings.PARALLEL_REGIONS,
        help=f"regions fetched concurrently (default: {settings.PARALLEL_REGIONS})",
    )
    parser.add_argument("--output", default=None, help="write CSV/JSON results into this directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def print_results(result: ElectionResult, print_names: bool = False) -> None:
    for r in result.regions:
        print(f"Region {r.region_index}:")
        for row in rank_groupings(r.seats_by_grouping):
            print(f"\t{row.grouping}: {row.seats}")
            if print_names and r.winners_by_grouping:
                for name in r.winners_by_grouping.get(row.grouping, []):
                    print(f"\t\t{name}")

    print("Total:")
    for row in result.national.ranking:
        print(f"\t{row.grouping}: {row.seats}")

    if result.failures:
        print("Skipped regions:")
        for f in result.failures:
            print(f"\t{f.region_index}: {f.kind} ({f.detail})")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else settings.LOG_LEVEL)

    config = Settings(
        DATA_SOURCE=args.source,
        DATA_DIR=args.data_dir,
        SOURCE_BASE_URL=args.base_url,
        PARALLEL_REGIONS=args.parallel,
    )
    try:
        election = load_election_config(args.election_config)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("Cannot load election config %s: %s", args.election_config or "(bundled)", e)
        return 1

    engine = AllocationEngine(with_winners=args.print_names, parallel_regions=args.parallel)

    try:
        result = asyncio.run(engine.run(make_source(config), election))
    except DataUnavailableError as e:
        logger.error("Cannot load candidate roster: %s", e)
        return 1

    print_results(result, print_names=args.print_names)
    if args.output:
        export_results(result, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
