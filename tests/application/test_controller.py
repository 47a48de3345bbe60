"""Tests for the TriggerController state machine."""

import asyncio

import pytest

from mentionkit.application.controller import TriggerController
from mentionkit.application.factory import create_controller
from mentionkit.core.config import MentionSettings
from mentionkit.domain.events import MentionSelected, MenuClosed, OptionsChanged, QueryChanged
from mentionkit.domain.types import EditRequest, TypeaheadOption
from mentionkit.infrastructure.lookup import DirectoryLookup
from tests.conftest import EventRecorder, ManualLookup


def keys(controller: TriggerController) -> list[str]:
    return [option.key for option in controller.options]


class TestMatching:
    def test_starts_idle(self, lookup):
        controller = TriggerController(lookup)

        assert controller.query_string is None
        assert controller.options == []
        assert controller.state.is_idle
        assert not controller.is_open

    def test_match_sets_query_and_requests(self, lookup):
        controller = TriggerController(lookup)

        match = controller.on_text_changed("Hi @Han")

        assert match is not None
        assert match.matching_string == "Han"
        assert controller.query_string == "Han"
        assert lookup.calls == ["Han"]
        assert controller.options == []

    def test_results_become_options(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("Hi @Han")

        lookup.resolve("Han")

        assert keys(controller) == ["Han Solo"]
        assert "Hondo Ohnaka" not in keys(controller)
        assert controller.is_open

    def test_no_match_goes_idle(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("@Sky")
        lookup.resolve("Sky")

        assert controller.on_text_changed("@Sky  ") is None
        assert controller.query_string is None
        assert controller.options == []

    def test_slash_command_suppresses_mentions(self, lookup):
        controller = TriggerController(lookup)

        assert controller.on_text_changed("/Yoda") is None
        assert lookup.calls == []

    def test_competing_triggers_can_be_disabled(self, lookup):
        controller = TriggerController(lookup, competing_triggers=())

        match = controller.on_text_changed("/Yoda")

        assert match is not None
        assert match.matching_string == "Yoda"

    def test_option_list_is_bounded(self):
        lookup = ManualLookup([f"Person {index}" for index in range(20)])
        controller = TriggerController(lookup)
        controller.on_text_changed("@Person")

        lookup.resolve("Person")

        assert len(controller.options) == 5


class TestStaleness:
    def test_superseded_results_are_discarded(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("@Ha")
        controller.on_text_changed("@Han")

        lookup.resolve("Han")
        lookup.resolve("Ha")

        assert controller.query_string == "Han"
        assert keys(controller) == ["Han Solo"]

    def test_out_of_order_resolution_keeps_latest(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("@Ha")
        controller.on_text_changed("@Han")

        lookup.resolve("Ha")
        assert controller.options == []

        lookup.resolve("Han")
        assert keys(controller) == ["Han Solo"]

    def test_results_after_close_are_ignored(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("@Han")
        controller.close()

        lookup.resolve("Han")

        assert controller.options == []
        assert controller.query_string is None

    def test_discarded_results_are_still_cached(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("@Ha")
        controller.on_text_changed("@Han")
        lookup.resolve("Ha")

        controller.on_text_changed("@Ha")

        assert lookup.calls == ["Ha", "Han"]
        assert keys(controller) == ["Han Solo", "Hammerhead"]


class TestIdempotence:
    def test_same_completed_query_does_not_refetch(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("@Sky")
        lookup.resolve("Sky")
        first = controller.options

        controller.close()
        controller.on_text_changed("@Sky")

        assert controller.options == first
        assert lookup.calls == ["Sky"]

    def test_each_controller_owns_its_cache(self, lookup):
        first = TriggerController(lookup)
        second = TriggerController(lookup)

        first.on_text_changed("@Sky")
        lookup.resolve("Sky")
        second.on_text_changed("@Sky")

        assert lookup.calls == ["Sky", "Sky"]


class TestSelection:
    def test_select_emits_edit_and_goes_idle(self, lookup, document):
        controller = TriggerController(lookup, document=document)
        controller.on_text_changed("Hi @Han")
        lookup.resolve("Han")

        edit = controller.select_option(controller.options[0])

        assert edit == EditRequest(lead_offset=3, replace_length=4, inserted_entity="Han Solo")
        assert document.edits == [(3, 4, "Han Solo")]
        assert controller.query_string is None
        assert controller.options == []

    def test_capitalized_name_selection(self, lookup, document):
        controller = TriggerController(lookup, document=document)
        controller.on_text_changed("I met Yoda")
        lookup.resolve("Yoda")

        controller.select_option(controller.options[0])

        assert document.edits == [(6, 4, "Yoda")]

    def test_select_without_match_is_a_noop(self, lookup, document):
        controller = TriggerController(lookup, document=document)

        assert controller.select_option(TypeaheadOption(key="Yoda", label="Yoda")) is None
        assert document.edits == []

    def test_highlight_and_select_highlighted(self, lookup, document):
        controller = TriggerController(lookup, document=document)
        controller.on_text_changed("@Sky")
        lookup.resolve("Sky")

        controller.set_highlighted_index(1)
        assert controller.selected_option == TypeaheadOption(key="Shmi Skywalker", label="Shmi Skywalker")

        controller.select_highlighted()
        assert document.edits == [(0, 4, "Shmi Skywalker")]

    def test_out_of_range_highlight_is_ignored(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("@Sky")
        lookup.resolve("Sky")

        controller.set_highlighted_index(7)

        assert controller.selected_index == 0

    def test_close_clears_without_edit(self, lookup, document):
        controller = TriggerController(lookup, document=document)
        controller.on_text_changed("@Sky")
        lookup.resolve("Sky")

        controller.close()

        assert controller.query_string is None
        assert controller.options == []
        assert document.edits == []

    def test_handles_are_pruned_with_options(self, lookup):
        controller = TriggerController(lookup)
        controller.on_text_changed("@Sky")
        lookup.resolve("Sky")
        controller.handles.bind("Luke Skywalker", "row-0")
        controller.handles.bind("Shmi Skywalker", "row-1")

        controller.on_text_changed("@Shmi")
        lookup.resolve("Shmi")

        assert "Shmi Skywalker" in controller.handles
        assert "Luke Skywalker" not in controller.handles

        controller.close()
        assert len(controller.handles) == 0


class TestEvents:
    def test_lifecycle_events(self, lookup, document, event_bus):
        recorder = EventRecorder(event_bus, QueryChanged, OptionsChanged, MentionSelected, MenuClosed)
        controller = TriggerController(lookup, document=document, event_bus=event_bus)

        controller.on_text_changed("@Yo")
        lookup.resolve("Yo")
        controller.select_highlighted()

        option = TypeaheadOption(key="Yoda", label="Yoda")
        assert recorder.events == [
            QueryChanged(query="Yo"),
            OptionsChanged(query="Yo", options=(option,)),
            MentionSelected(option=option, edit=EditRequest(0, 3, "Yoda")),
            QueryChanged(query=None),
            MenuClosed(reason="selected"),
        ]

    def test_stale_results_publish_nothing(self, lookup, event_bus):
        recorder = EventRecorder(event_bus, OptionsChanged)
        controller = TriggerController(lookup, event_bus=event_bus)
        controller.on_text_changed("@Ha")
        controller.on_text_changed("@Han")

        lookup.resolve("Ha")

        assert recorder.events == []

    def test_repeated_pending_query_publishes_once(self, lookup, event_bus):
        recorder = EventRecorder(event_bus, OptionsChanged)
        controller = TriggerController(lookup, event_bus=event_bus)
        for _ in range(4):
            controller.on_text_changed("@Han")

        lookup.resolve("Han")

        assert len(recorder.events) == 1
        assert lookup.calls == ["Han"]

    def test_returning_to_pending_query_publishes_once(self, lookup, event_bus):
        recorder = EventRecorder(event_bus, OptionsChanged)
        controller = TriggerController(lookup, event_bus=event_bus)
        controller.on_text_changed("@Han")
        controller.on_text_changed("@Hans")
        controller.on_text_changed("@Han")

        lookup.resolve("Han")

        assert recorder.events == [OptionsChanged(query="Han", options=(TypeaheadOption("Han Solo", "Han Solo"),))]
        assert lookup.calls == ["Han", "Hans"]


@pytest.mark.asyncio
async def test_end_to_end_with_directory():
    lookup = DirectoryLookup(["Han Solo", "Hondo Ohnaka", "Luke Skywalker"], delay=0.01)
    controller = create_controller(lookup, MentionSettings(lookup_timeout=1.0))

    match = controller.on_text_changed("Hi @Han")
    await asyncio.sleep(0.05)

    assert match.matching_string == "Han"
    assert keys(controller) == ["Han Solo"]


@pytest.mark.asyncio
async def test_fast_typing_with_real_delays():
    lookup = DirectoryLookup(["Han Solo", "Hammerhead", "Hondo Ohnaka"], delay=0.02)
    controller = create_controller(lookup, MentionSettings(lookup_timeout=None))

    controller.on_text_changed("@Ha")
    await asyncio.sleep(0.005)
    controller.on_text_changed("@Han")
    await asyncio.sleep(0.05)

    assert keys(controller) == ["Han Solo"]


class FlakyLookup(ManualLookup):
    def __init__(self, dataset):
        super().__init__(dataset)
        self.fail_next = True

    def search(self, query, on_result):
        if self.fail_next:
            self.fail_next = False
            self.calls.append(query)
            raise ConnectionError("directory offline")
        super().search(query, on_result)


def test_failed_lookup_is_retried_on_next_change():
    lookup = FlakyLookup(["Han Solo"])
    controller = TriggerController(lookup)

    controller.on_text_changed("@Han")
    controller.on_text_changed("@Han")
    lookup.resolve("Han")

    assert lookup.calls == ["Han", "Han"]
    assert keys(controller) == ["Han Solo"]
