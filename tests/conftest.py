"""
Shared builders for converter tests.
"""

import pytest

from jarchive_convert.clues import (
    DAILY_DOUBLE,
    UNREVEALED,
    KnownValue,
    RawClue,
    RawFinalClue,
    RawShow,
    Revealed,
    ShowListing,
)


JEOPARDY_VALUES = [200, 400, 600, 800, 1000]
DOUBLE_JEOPARDY_VALUES = [400, 800, 1200, 1600, 2000]


def make_clue(category, value, text=None, answer=None, order=None):
    """Build a RawClue; ``value`` may be an int or "Daily Double"."""
    clue_value = DAILY_DOUBLE if value == "Daily Double" else KnownValue(value)
    clue_text = UNREVEALED if text == "Unrevealed" else Revealed(text or f"{category} for {value}")
    return RawClue(
        category=category,
        value=clue_value,
        text=clue_text,
        answer=answer or f"What is {category} {value}?",
        order=order,
    )


def make_round(values, categories=None, daily_doubles=None, unrevealed=None):
    """Build a 5x5 round, replacing the given (category, row) cells."""
    categories = categories or [f"CATEGORY {index}" for index in range(1, 6)]
    daily_doubles = set(daily_doubles or [])
    unrevealed = set(unrevealed or [])
    clues = []
    for row, value in enumerate(values):
        for column, category in enumerate(categories):
            cell = (column, row)
            clues.append(
                make_clue(
                    category,
                    "Daily Double" if cell in daily_doubles else value,
                    text="Unrevealed" if cell in unrevealed else None,
                )
            )
    return clues


def make_show(unrevealed=None):
    return RawShow(
        jeopardy=make_round(JEOPARDY_VALUES, daily_doubles=[(2, 3)], unrevealed=unrevealed),
        double_jeopardy=make_round(
            DOUBLE_JEOPARDY_VALUES,
            categories=[f"DJ CATEGORY {index}" for index in range(1, 6)],
            daily_doubles=[(0, 1), (4, 4)],
        ),
        final=RawFinalClue(
            category="WORLD CAPITALS",
            text="It sits on the Tiber",
            answer="Rome",
        ),
    )


@pytest.fixture
def jeopardy_round():
    return make_round(JEOPARDY_VALUES)


@pytest.fixture
def listing():
    return ShowListing(show_number=8045, year=2019, month=7, day=6)


@pytest.fixture
def raw_show():
    return make_show()
