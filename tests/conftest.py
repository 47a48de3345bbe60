"""Shared fixtures and stub collaborators for mentionkit tests."""

from typing import Callable

import pytest

from mentionkit.domain.events import EventBus, Event


class ManualLookup:
    """Lookup stub whose callbacks are fired explicitly by the test."""

    def __init__(self, dataset: list[str] | None = None):
        self.dataset = dataset or []
        self.calls: list[str] = []
        self._pending: list[tuple[str, Callable[[list[str]], None]]] = []

    def search(self, query: str, on_result: Callable[[list[str]], None]) -> None:
        self.calls.append(query)
        self._pending.append((query, on_result))

    def filter(self, query: str) -> list[str]:
        return [name for name in self.dataset if query.lower() in name.lower()]

    def resolve(self, query: str, results: list[str] | None = None) -> None:
        """Fire the oldest pending callback for ``query``."""
        for index, (pending_query, callback) in enumerate(self._pending):
            if pending_query == query:
                del self._pending[index]
                callback(self.filter(query) if results is None else results)
                return
        raise AssertionError(f"No pending lookup for {query!r}")

    @property
    def pending(self) -> list[str]:
        return [query for query, _ in self._pending]


class RecordingDocument:
    """Document model stub recording replace_span calls."""

    def __init__(self):
        self.edits: list[tuple[int, int, str]] = []

    def replace_span(self, lead_offset: int, length: int, entity_key: str) -> None:
        self.edits.append((lead_offset, length, entity_key))


class EventRecorder:
    """Subscribes to event types on a bus and records what is published."""

    def __init__(self, bus: EventBus, *event_types: type[Event]):
        self.events: list[Event] = []
        for event_type in event_types:
            bus.subscribe(event_type, self.events.append)

    def of_type(self, event_type: type[Event]) -> list[Event]:
        return [event for event in self.events if isinstance(event, event_type)]


STAR_WARS = ["Han Solo", "Hondo Ohnaka", "Hammerhead", "Luke Skywalker", "Shmi Skywalker", "Yoda"]


@pytest.fixture
def lookup() -> ManualLookup:
    return ManualLookup(STAR_WARS)


@pytest.fixture
def document() -> RecordingDocument:
    return RecordingDocument()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()
