"""Value types shared across mentionkit layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class MatchResult:
    """A mention candidate found at the tail of the scanned text.

    Attributes:
        lead_offset: Index into the scanned text where the replaceable span begins
        matching_string: Query text used for lookup (no trigger character)
        replaceable_string: Full span replaced on selection (trigger included)
    """

    lead_offset: int
    matching_string: str
    replaceable_string: str


@dataclass(frozen=True, slots=True)
class Pending:
    """Cache entry for a lookup that has been issued but not answered."""


@dataclass(frozen=True, slots=True)
class Resolved:
    """Cache entry holding the ordered results of a finished lookup."""

    results: tuple[str, ...] = ()


CacheEntry = Union[Pending, Resolved]


@dataclass(frozen=True, slots=True)
class TypeaheadOption:
    """A displayable candidate. ``key`` is unique within one option list."""

    key: str
    label: str


@dataclass(frozen=True, slots=True)
class EditRequest:
    """Replacement the document model should perform for a selected option."""

    lead_offset: int
    replace_length: int
    inserted_entity: str


@dataclass(frozen=True, slots=True)
class ControllerState:
    """Snapshot of the trigger controller, replaced wholesale on every change."""

    current_query: str | None = None
    options: tuple[TypeaheadOption, ...] = field(default_factory=tuple)
    selected_index: int = 0
    match: MatchResult | None = None

    @property
    def is_idle(self) -> bool:
        return self.current_query is None
