from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from statrank.aggregate import aggregate
from statrank.config import DEFAULT_LIMIT, RankOptions
from statrank.errors import ConfigurationFatal, IncomparableValueError
from statrank.identity import build_identity_table
from statrank.ranking import rank_sections, render_report
from statrank.records import iter_stat_records
from statrank.server import list_stat_files, read_level_name, stats_dir

logger = logging.getLogger("statrank")


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("limit must be zero or more")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Get stats from world and rank them.")
    parser.add_argument("-p", "--path", default=".", help="The server path (default: .).")
    parser.add_argument("-k", "--key", required=True, help="The stats key to rank.")
    parser.add_argument("-i", "--inverse", action="store_true", help="Inverse the rank.")
    parser.add_argument("-e", "--exact", action="store_true", help="Match the rank key exactly.")
    parser.add_argument(
        "-s",
        "--show-uuid",
        action="store_true",
        help="Show the uuid even when the name was found.",
    )
    parser.add_argument(
        "-l",
        "--limit",
        type=_non_negative,
        default=DEFAULT_LIMIT,
        help=f"The rank limit for display (default: {DEFAULT_LIMIT}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-file progress.")
    return parser


def run(options: RankOptions) -> list[str]:
    identities = build_identity_table(options.path)
    world = read_level_name(options.path)
    print(f"Found world name: {world}")

    paths = list_stat_files(stats_dir(options.path, world))
    aggregator = aggregate(iter_stat_records(paths, options.key, options.exact))
    sections = rank_sections(
        aggregator.buckets,
        identities,
        limit=options.limit,
        inverse=options.inverse,
        show_identifier=options.show_uuid,
    )
    return render_report(sections)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    options = RankOptions.from_args(args)

    try:
        lines = run(options)
    except ConfigurationFatal as exc:
        logger.error("%s", exc)
        return 1
    except IncomparableValueError as exc:
        logger.error("Ranking failed: %s", exc)
        return 1

    for line in lines:
        print(line)
    return 0
