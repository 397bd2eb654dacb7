from __future__ import annotations


class IncompleteGameError(ValueError):
    """A Jeopardy! or Double Jeopardy! clue was never revealed on air."""


class AmbiguousDailyDoubleError(ValueError):
    """The value of a Daily Double cannot be inferred from its category."""


class MalformedListingError(ValueError):
    """The season listing page does not have the expected show/date shape."""


class ClueSourceError(ValueError):
    """The clue service could not be reached or returned an unusable payload."""
