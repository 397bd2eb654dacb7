from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from jarchive_convert.acquisition import DEFAULT_TIMEOUT, fetch_text
from jarchive_convert.clues import ShowListing
from jarchive_convert.errors import MalformedListingError


SEASON_URL = "https://j-archive.com/showseason.php"

# e.g. "#8045, aired\xa02019-07-26"
SHOW_NUMBER_PATTERN = re.compile(r"^#(?P<show_number>[0-9]+),")
AIR_DATE_PATTERN = re.compile(r"^(?P<year>[0-9]{4})-(?P<month>[0-9]{1,2})-(?P<day>[0-9]{1,2})")

logger = logging.getLogger(__name__)


def season_url(season: int, base_url: str = SEASON_URL) -> str:
    return f"{base_url}?season={season}"


def extract_listing_texts(html: str) -> list[str]:
    soup = BeautifulSoup(html, "html.parser")
    texts: list[str] = []
    for anchor in soup.select("table a"):
        text = anchor.get_text()
        if text.startswith("#"):
            texts.append(text)
    return texts


def parse_listing_text(text: str) -> ShowListing:
    show_match = SHOW_NUMBER_PATTERN.match(text)
    if show_match is None:
        raise MalformedListingError(f"show_number_missing:{text}")
    parts = text.split("\xa0")
    if len(parts) < 2:
        raise MalformedListingError(f"air_date_missing:{text}")
    date_match = AIR_DATE_PATTERN.match(parts[1].strip())
    if date_match is None:
        raise MalformedListingError(f"air_date_invalid:{text}")
    return ShowListing(
        show_number=int(show_match.group("show_number")),
        year=int(date_match.group("year")),
        month=int(date_match.group("month")),
        day=int(date_match.group("day")),
    )


def parse_season_listing(html: str) -> list[ShowListing]:
    texts = extract_listing_texts(html)
    if not texts:
        raise MalformedListingError("no_shows_listed")
    return [parse_listing_text(text) for text in texts]


def locate_shows(
    season: int, base_url: str = SEASON_URL, timeout: float = DEFAULT_TIMEOUT
) -> list[ShowListing]:
    """Return the shows of ``season`` in the order J-Archive lists them."""
    url = season_url(season, base_url)
    logger.info("Fetching season %s listing from %s", season, url)
    listings = parse_season_listing(fetch_text(url, timeout=timeout))
    logger.info("Found %d shows in season %s", len(listings), season)
    return listings
