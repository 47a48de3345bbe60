"""Event types published by the trigger controller and query cache."""

from __future__ import annotations

from dataclasses import dataclass

from mentionkit.domain.types import EditRequest, TypeaheadOption


@dataclass(frozen=True)
class Event:
    """Base class for all events."""


@dataclass(frozen=True)
class QueryChanged(Event):
    """The active query changed. ``query`` is None when the menu went idle."""

    query: str | None


@dataclass(frozen=True)
class OptionsChanged(Event):
    """Fresh options were applied for ``query``."""

    query: str
    options: tuple[TypeaheadOption, ...]


@dataclass(frozen=True)
class MentionSelected(Event):
    """An option was chosen and an edit request was emitted."""

    option: TypeaheadOption
    edit: EditRequest


@dataclass(frozen=True)
class MenuClosed(Event):
    """The menu was dismissed (``reason`` is "dismissed", "selected" or "no-match")."""

    reason: str


@dataclass(frozen=True)
class LookupFailed(Event):
    """A lookup for ``query`` timed out or raised."""

    query: str
    reason: str
