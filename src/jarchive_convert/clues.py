from __future__ import annotations

from dataclasses import dataclass
from typing import Union


JEOPARDY_ROUND = "Jeopardy!"
DOUBLE_JEOPARDY_ROUND = "Double Jeopardy!"
FINAL_JEOPARDY_ROUND = "Final Jeopardy!"

CANONICAL_VALUES = {
    JEOPARDY_ROUND: (200, 400, 600, 800, 1000),
    DOUBLE_JEOPARDY_ROUND: (400, 800, 1200, 1600, 2000),
}

DAILY_DOUBLE_SENTINEL = "Daily Double"
UNREVEALED_SENTINEL = "Unrevealed"


@dataclass(frozen=True)
class ShowListing:
    show_number: int
    year: int
    month: int
    day: int

    @property
    def padded_month(self) -> str:
        return f"{self.month:02d}"

    @property
    def padded_day(self) -> str:
        return f"{self.day:02d}"

    @property
    def air_date(self) -> str:
        return f"{self.year}-{self.padded_month}-{self.padded_day}"


@dataclass(frozen=True)
class KnownValue:
    amount: int


@dataclass(frozen=True)
class DailyDouble:
    pass


@dataclass(frozen=True)
class Revealed:
    text: str


@dataclass(frozen=True)
class Unrevealed:
    pass


DAILY_DOUBLE = DailyDouble()
UNREVEALED = Unrevealed()

ClueValue = Union[KnownValue, DailyDouble]
ClueText = Union[Revealed, Unrevealed]


@dataclass(frozen=True)
class RawClue:
    category: str
    value: ClueValue
    text: ClueText
    answer: str
    order: int | None = None


@dataclass(frozen=True)
class RawFinalClue:
    category: str
    text: str
    answer: str


@dataclass(frozen=True)
class RawShow:
    jeopardy: list[RawClue]
    double_jeopardy: list[RawClue]
    final: RawFinalClue


@dataclass(frozen=True)
class NormalizedClue:
    category: str
    air_date: str
    question: str
    value: str | None
    answer: str
    round: str
    show_number: str


CategoryMap = dict[str, list[NormalizedClue]]


def parse_clue_value(raw: object) -> ClueValue:
    if raw == DAILY_DOUBLE_SENTINEL:
        return DAILY_DOUBLE
    if isinstance(raw, bool):
        raise ValueError(f"invalid_clue_value:{raw!r}")
    if isinstance(raw, int):
        return KnownValue(raw)
    if isinstance(raw, float) and raw.is_integer():
        return KnownValue(int(raw))
    if isinstance(raw, str):
        digits = raw.strip().lstrip("$").replace(",", "")
        if digits.isdigit():
            return KnownValue(int(digits))
    raise ValueError(f"invalid_clue_value:{raw!r}")


def parse_clue_text(raw: str) -> ClueText:
    if raw == UNREVEALED_SENTINEL:
        return UNREVEALED
    return Revealed(raw)


def category_map_to_dict(category_map: CategoryMap) -> dict[str, list[dict]]:
    return {
        category: [clue.__dict__ for clue in clues]
        for category, clues in category_map.items()
    }
