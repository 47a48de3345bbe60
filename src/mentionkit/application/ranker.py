"""Turns raw lookup results into the option list shown in the menu."""

from collections.abc import Sequence

from mentionkit.domain.types import TypeaheadOption

SUGGESTION_LIST_LENGTH_LIMIT = 5


class SuggestionRanker:
    """Keeps the lookup's order and caps the list at ``limit`` options.

    Results are assumed unique per lookup; each name becomes both the key
    and the label of its option.
    """

    def __init__(self, limit: int = SUGGESTION_LIST_LENGTH_LIMIT) -> None:
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        self.limit = limit

    def rank(self, raw_results: Sequence[str]) -> list[TypeaheadOption]:
        return [TypeaheadOption(key=name, label=name) for name in raw_results[: self.limit]]
