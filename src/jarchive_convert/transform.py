from __future__ import annotations

import logging
from typing import Iterable, Sequence

from jarchive_convert.clues import (
    CANONICAL_VALUES,
    FINAL_JEOPARDY_ROUND,
    CategoryMap,
    DailyDouble,
    KnownValue,
    NormalizedClue,
    RawClue,
    RawFinalClue,
    Unrevealed,
)
from jarchive_convert.errors import AmbiguousDailyDoubleError, IncompleteGameError


logger = logging.getLogger(__name__)


def canonical_values(round_name: str) -> tuple[int, ...]:
    try:
        return CANONICAL_VALUES[round_name]
    except KeyError:
        raise ValueError(f"unknown_round:{round_name}") from None


def format_value(amount: int) -> str:
    return f"${amount}"


def quote_question(text: str) -> str:
    # Downstream player expects the question wrapped in single quotes.
    return f"'{text}'"


def missing_values(known: Iterable[int], canonical: Sequence[int]) -> list[int]:
    known_set = set(known)
    return [value for value in canonical if value not in known_set]


def infer_daily_double_value(
    known: Iterable[int], canonical: Sequence[int], strict: bool = False, label: str = ""
) -> int:
    """Return the canonical value the Daily Double displaced.

    With more than one canonical value missing the first one in ascending
    order is used and a warning is logged; ``strict`` raises instead.
    """
    missing = missing_values(known, canonical)
    if not missing:
        raise AmbiguousDailyDoubleError("no_missing_value")
    if len(missing) > 1:
        if strict:
            raise AmbiguousDailyDoubleError(
                f"multiple_missing_values:{','.join(str(value) for value in missing)}"
            )
        logger.warning(
            "Ambiguous Daily Double %s: missing values %s, using %s",
            label or "(unlabelled)",
            missing,
            missing[0],
        )
    return missing[0]


def group_by_category(clues: Iterable[RawClue]) -> dict[str, list[RawClue]]:
    grouped: dict[str, list[RawClue]] = {}
    for clue in clues:
        if isinstance(clue.text, Unrevealed):
            raise IncompleteGameError(f"unrevealed_clue:{clue.category}")
        grouped.setdefault(clue.category, []).append(clue)
    return grouped


def resolve_category_amounts(
    clues: Sequence[RawClue], canonical: Sequence[int], strict: bool = False, label: str = ""
) -> list[int]:
    daily_doubles = [clue for clue in clues if isinstance(clue.value, DailyDouble)]
    known = [clue.value.amount for clue in clues if isinstance(clue.value, KnownValue)]
    if not daily_doubles:
        return known
    if len(daily_doubles) > 1:
        raise AmbiguousDailyDoubleError(f"multiple_daily_doubles:{len(daily_doubles)}")

    inferred = infer_daily_double_value(known, canonical, strict=strict, label=label)
    return [
        inferred if isinstance(clue.value, DailyDouble) else clue.value.amount
        for clue in clues
    ]


def transform_round(
    clues: Iterable[RawClue],
    air_date: str,
    round_name: str,
    show_number: str,
    strict: bool = False,
) -> CategoryMap:
    """Group one Jeopardy! or Double Jeopardy! round by category.

    Raises IncompleteGameError if any clue in the round is unrevealed, and
    AmbiguousDailyDoubleError if a category's Daily Double value cannot be
    inferred.
    """
    canonical = canonical_values(round_name)
    grouped = group_by_category(clues)

    output: CategoryMap = {}
    for category, category_clues in grouped.items():
        label = f"show={show_number}:round={round_name}:category={category}"
        try:
            amounts = resolve_category_amounts(
                category_clues, canonical, strict=strict, label=label
            )
        except AmbiguousDailyDoubleError as exc:
            raise AmbiguousDailyDoubleError(f"{exc}:{label}") from exc
        output[category] = [
            NormalizedClue(
                category=category,
                air_date=air_date,
                question=quote_question(clue.text.text),
                value=format_value(amount),
                answer=clue.answer,
                round=round_name,
                show_number=show_number,
            )
            for clue, amount in zip(category_clues, amounts)
        ]
    return output


def transform_final(clue: RawFinalClue, air_date: str, show_number: str) -> CategoryMap:
    return {
        clue.category: [
            NormalizedClue(
                category=clue.category,
                air_date=air_date,
                question=clue.text,
                value=None,
                answer=clue.answer,
                round=FINAL_JEOPARDY_ROUND,
                show_number=show_number,
            )
        ]
    }
