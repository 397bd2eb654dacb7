from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from functools import partial, reduce
from typing import Any, Callable, Iterable

from jarchive_convert.clues import (
    DOUBLE_JEOPARDY_ROUND,
    FINAL_JEOPARDY_ROUND,
    JEOPARDY_ROUND,
    RawShow,
    ShowListing,
    category_map_to_dict,
)
from jarchive_convert.errors import (
    AmbiguousDailyDoubleError,
    ClueSourceError,
    IncompleteGameError,
)
from jarchive_convert.transform import transform_final, transform_round


FAILURE_INCOMPLETE = "incomplete"
FAILURE_AMBIGUOUS = "ambiguous"
FAILURE_SOURCE = "source_error"

logger = logging.getLogger(__name__)

ShowFetcher = Callable[[ShowListing], RawShow]


@dataclass(frozen=True)
class ShowFailure:
    show_number: int
    air_date: str
    kind: str
    detail: str


@dataclass(frozen=True)
class SeasonResult:
    shows: dict[str, dict[str, Any]] = field(default_factory=dict)
    failures: tuple[ShowFailure, ...] = ()

    def count(self, kind: str) -> int:
        return sum(1 for failure in self.failures if failure.kind == kind)

    @property
    def skipped_incomplete(self) -> int:
        return self.count(FAILURE_INCOMPLETE)

    @property
    def skipped_ambiguous(self) -> int:
        return self.count(FAILURE_AMBIGUOUS)

    @property
    def failed_source(self) -> int:
        return self.count(FAILURE_SOURCE)


def build_show_record(
    raw_show: RawShow, listing: ShowListing, strict: bool = False
) -> dict[str, Any]:
    show_number = str(listing.show_number)
    air_date = listing.air_date
    return {
        FINAL_JEOPARDY_ROUND: category_map_to_dict(
            transform_final(raw_show.final, air_date, show_number)
        ),
        DOUBLE_JEOPARDY_ROUND: category_map_to_dict(
            transform_round(
                raw_show.double_jeopardy,
                air_date,
                DOUBLE_JEOPARDY_ROUND,
                show_number,
                strict=strict,
            )
        ),
        JEOPARDY_ROUND: category_map_to_dict(
            transform_round(
                raw_show.jeopardy, air_date, JEOPARDY_ROUND, show_number, strict=strict
            )
        ),
    }


def with_failure(
    result: SeasonResult, listing: ShowListing, kind: str, exc: Exception
) -> SeasonResult:
    failure = ShowFailure(
        show_number=listing.show_number,
        air_date=listing.air_date,
        kind=kind,
        detail=str(exc),
    )
    return replace(result, failures=result.failures + (failure,))


def fold_show(
    result: SeasonResult,
    listing: ShowListing,
    fetch_show: ShowFetcher,
    strict: bool = False,
) -> SeasonResult:
    try:
        raw_show = fetch_show(listing)
    except ClueSourceError as exc:
        logger.warning("Show #%s (%s) not fetched: %s", listing.show_number, listing.air_date, exc)
        return with_failure(result, listing, FAILURE_SOURCE, exc)

    try:
        record = build_show_record(raw_show, listing, strict=strict)
    except IncompleteGameError as exc:
        logger.info("Show #%s skipped, incomplete board: %s", listing.show_number, exc)
        return with_failure(result, listing, FAILURE_INCOMPLETE, exc)
    except AmbiguousDailyDoubleError as exc:
        logger.warning("Show #%s skipped, ambiguous Daily Double: %s", listing.show_number, exc)
        return with_failure(result, listing, FAILURE_AMBIGUOUS, exc)

    return replace(result, shows={**result.shows, str(listing.show_number): record})


def convert_season(
    listings: Iterable[ShowListing], fetch_show: ShowFetcher, strict: bool = False
) -> SeasonResult:
    step = partial(fold_show, fetch_show=fetch_show, strict=strict)
    return reduce(step, listings, SeasonResult())


def season_output_path(output_dir: str, season: int) -> str:
    return os.path.join(output_dir, f"jeopardy_season_{season}.json")


def write_season(path: str, result: SeasonResult) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(result.shows, handle, indent=2)
        handle.write("\n")


def write_failures(path: str, failures: Iterable[ShowFailure]) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        for failure in failures:
            handle.write(json.dumps(failure.__dict__, sort_keys=True))
            handle.write("\n")
