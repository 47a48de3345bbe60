"""
Strategy interfaces for input completions.

An input widget hands the orchestrator a snapshot of its text and cursor;
each strategy decides whether it owns that state and, if so, which
options to show.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from mentionkit.domain.types import TypeaheadOption


@dataclass(slots=True, frozen=True)
class CompletionRequest:
    """Snapshot of the target input state used by completion strategies."""

    text: str
    cursor_position: int

    @property
    def text_before_cursor(self) -> str:
        return self.text[: self.cursor_position]

    @classmethod
    def at_end(cls, text: str) -> "CompletionRequest":
        return cls(text=text, cursor_position=len(text))


class CompletionStrategy(Protocol):
    """Contract implemented by all completion strategies."""

    def can_handle(self, request: CompletionRequest) -> bool:
        """Return ``True`` when this strategy should produce candidates."""

        ...

    def get_candidates(self, request: CompletionRequest) -> list[TypeaheadOption]:
        """Return the options for the current state."""

        ...
