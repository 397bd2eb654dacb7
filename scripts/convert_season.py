from __future__ import annotations

import argparse
import logging
import os
import sys
from functools import partial

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_PATH = os.path.join(PROJECT_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from jarchive_convert.acquisition import CLUE_SOURCE_URL, DEFAULT_TIMEOUT, fetch_show
from jarchive_convert.aggregation import (
    convert_season,
    season_output_path,
    write_failures,
    write_season,
)
from jarchive_convert.discovery import SEASON_URL, locate_shows
from jarchive_convert.errors import ClueSourceError, MalformedListingError


MAX_SEASON = 37

logger = logging.getLogger("convert_season")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Fetch a season of clues from J-Archive and convert them into the "
            "JSON format expected by Zoom Jeopardy."
        )
    )
    parser.add_argument(
        "-s",
        "--season",
        type=int,
        required=True,
        help=f"Season number to fetch clues from (0-{MAX_SEASON}).",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for jeopardy_season_<season>.json.",
    )
    parser.add_argument(
        "--failures-out",
        default=None,
        help="Optional JSONL path listing skipped and failed shows.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Socket timeout in seconds for each request.",
    )
    parser.add_argument("--listing-url", default=SEASON_URL, help="Season listing page URL.")
    parser.add_argument(
        "--clue-source-url", default=CLUE_SOURCE_URL, help="Base URL of the clue JSON service."
    )
    parser.add_argument(
        "--strict-daily-doubles",
        action="store_true",
        help="Skip shows whose Daily Double value is ambiguous instead of guessing.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    args = parser.parse_args(argv)
    if args.season < 0 or args.season > MAX_SEASON:
        parser.error(f"--season must be between 0 and {MAX_SEASON}")
    return args


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        listings = locate_shows(args.season, base_url=args.listing_url, timeout=args.timeout)
    except (MalformedListingError, ClueSourceError) as exc:
        logger.error("Could not read the season %s listing: %s", args.season, exc)
        raise SystemExit(f"listing_failed:{exc}")

    fetch = partial(fetch_show, base_url=args.clue_source_url, timeout=args.timeout)
    # Route log records through tqdm.write while the bar is shown.
    with logging_redirect_tqdm():
        result = convert_season(
            tqdm(listings, desc=f"Season {args.season}", unit="show"),
            fetch,
            strict=args.strict_daily_doubles,
        )

    output_path = season_output_path(args.output_dir, args.season)
    write_season(output_path, result)
    if args.failures_out:
        write_failures(args.failures_out, result.failures)

    print(f"Skipped {result.skipped_incomplete} shows because of incomplete boards")
    print(f"shows_listed={len(listings)}")
    print(f"shows_written={len(result.shows)}")
    print(f"skipped_incomplete={result.skipped_incomplete}")
    print(f"skipped_ambiguous={result.skipped_ambiguous}")
    print(f"failed_source={result.failed_source}")
    print(f"output={output_path}")


if __name__ == "__main__":
    main()
