from __future__ import annotations

import gzip
import json
import logging
import zlib
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any
from urllib.error import URLError
from urllib.request import Request, urlopen

from jarchive_convert.clues import (
    RawClue,
    RawFinalClue,
    RawShow,
    ShowListing,
    parse_clue_text,
    parse_clue_value,
)
from jarchive_convert.errors import ClueSourceError


CLUE_SOURCE_URL = "https://jarchive-json.glitch.me"
USER_AGENT = "jarchive-convert/0.1"
ACCEPT_ENCODING = "gzip"
DEFAULT_TIMEOUT = 20

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    status: int
    content_encoding: str | None
    raw_bytes: bytes


def fetch_bytes(url: str, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:
    request = Request(
        url,
        headers={
            "User-Agent": USER_AGENT,
            "Accept-Encoding": ACCEPT_ENCODING,
        },
    )
    with urlopen(request, timeout=timeout) as response:
        status = int(getattr(response, "status", 0) or 0)
        content_encoding = response.headers.get("Content-Encoding")
        payload = response.read()
    return FetchResult(
        status=status,
        content_encoding=content_encoding,
        raw_bytes=payload,
    )


def decode_text(payload: bytes, content_encoding: str | None = None) -> str:
    if content_encoding and "gzip" in content_encoding.lower():
        payload = gzip.decompress(payload)
    elif payload[:2] == b"\x1f\x8b":
        payload = gzip.decompress(payload)
    return payload.decode("utf-8", errors="replace")


def fetch_text(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Fetch ``url`` and return its decoded body, raising ClueSourceError on failure."""
    try:
        result = fetch_bytes(url, timeout=timeout)
    except (URLError, OSError, HTTPException) as exc:
        raise ClueSourceError(f"fetch_error:{url}:{exc!r}") from exc
    if result.status < 200 or result.status >= 300:
        raise ClueSourceError(f"http_{result.status}:{url}")
    try:
        return decode_text(result.raw_bytes, result.content_encoding)
    except (EOFError, OSError, zlib.error) as exc:
        raise ClueSourceError(f"decode_error:{url}:{exc!r}") from exc


def clue_source_url(listing: ShowListing, base_url: str = CLUE_SOURCE_URL) -> str:
    return (
        f"{base_url.rstrip('/')}/game/"
        f"{listing.padded_month}/{listing.padded_day}/{listing.year}"
    )


def require_field(entry: dict[str, Any], field: str) -> Any:
    if not isinstance(entry, dict):
        raise ClueSourceError(f"invalid_record:{type(entry).__name__}")
    if field not in entry:
        raise ClueSourceError(f"missing_field:{field}")
    return entry[field]


def require_text(entry: dict[str, Any], field: str) -> str:
    value = require_field(entry, field)
    if not isinstance(value, str):
        raise ClueSourceError(f"invalid_field:{field}")
    return value


def parse_raw_clue(entry: dict[str, Any]) -> RawClue:
    raw_value = require_field(entry, "value")
    try:
        value = parse_clue_value(raw_value)
    except ValueError as exc:
        raise ClueSourceError(str(exc)) from exc
    order = entry.get("order")
    return RawClue(
        category=require_text(entry, "category"),
        value=value,
        text=parse_clue_text(require_text(entry, "clue")),
        answer=require_text(entry, "answer"),
        order=int(order) if isinstance(order, int) else None,
    )


def parse_raw_round(entries: Any, field: str) -> list[RawClue]:
    if not isinstance(entries, list):
        raise ClueSourceError(f"invalid_round:{field}")
    return [parse_raw_clue(entry) for entry in entries]


def parse_show_payload(payload: Any) -> RawShow:
    final = require_field(payload, "final jeopardy")
    return RawShow(
        jeopardy=parse_raw_round(require_field(payload, "jeopardy"), "jeopardy"),
        double_jeopardy=parse_raw_round(
            require_field(payload, "double jeopardy"), "double jeopardy"
        ),
        final=RawFinalClue(
            category=require_text(final, "category"),
            text=require_text(final, "clue"),
            answer=require_text(final, "answer"),
        ),
    )


def fetch_show(
    listing: ShowListing,
    base_url: str = CLUE_SOURCE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> RawShow:
    url = clue_source_url(listing, base_url)
    logger.debug("Fetching show #%s from %s", listing.show_number, url)
    text = fetch_text(url, timeout=timeout)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ClueSourceError(f"invalid_json:{url}") from exc
    return parse_show_payload(payload)
