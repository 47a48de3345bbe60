"""
TriggerController - drives the mention menu from text-change events.

The controller is Idle (no query, menu hidden) or Matching (a query is set
and its results are awaited or shown). On every text change it runs the
competing triggers and the mention grammars over the text before the cursor,
then asks the query cache for results. Results that arrive for a query the
user has already typed past are discarded: only the current query may
update the visible options.

The rendering layer reads ``query_string``, ``options`` and
``selected_index`` (or subscribes to the event bus) and calls
``select_option``, ``set_highlighted_index`` and ``close``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from mentionkit.application.handles import OptionHandleRegistry
from mentionkit.application.query_cache import QueryCache
from mentionkit.application.ranker import SuggestionRanker
from mentionkit.core.patterns import PatternMatcher, TriggerMatchFn, basic_trigger_match
from mentionkit.domain.events import (
    Event,
    EventBus,
    MentionSelected,
    MenuClosed,
    OptionsChanged,
    QueryChanged,
)
from mentionkit.domain.protocols import DocumentModel, LookupService
from mentionkit.domain.types import ControllerState, EditRequest, MatchResult, TypeaheadOption
from mentionkit.logger import get_logger

logger = get_logger("controller")


class TriggerController:
    """Owns the mention query state for one editor instance."""

    def __init__(
        self,
        lookup: LookupService,
        *,
        matcher: PatternMatcher | None = None,
        cache: QueryCache | None = None,
        ranker: SuggestionRanker | None = None,
        competing_triggers: Sequence[TriggerMatchFn] | None = None,
        document: DocumentModel | None = None,
        handles: OptionHandleRegistry | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """
        Args:
            lookup: Directory used to resolve queries
            matcher: Mention grammars (default configuration when None)
            cache: Query cache; a fresh one per controller when None
            ranker: Option list builder
            competing_triggers: Grammars that suppress mention matching when they
                match. Defaults to the ``/`` slash-command trigger; pass ``()`` to disable.
            document: Receives ``replace_span`` when an option is selected
            handles: Registry of renderer handles, pruned as options change
            event_bus: Receives state-change events when given
        """
        self._lookup = lookup
        self._matcher = matcher or PatternMatcher()
        self._cache = cache or QueryCache()
        self._ranker = ranker or SuggestionRanker()
        if competing_triggers is None:
            competing_triggers = (basic_trigger_match("/", min_length=0),)
        self._competing_triggers = tuple(competing_triggers)
        self.document = document
        self.handles = handles or OptionHandleRegistry()
        self._event_bus = event_bus
        self._state = ControllerState()
        # Pending queries this controller already observes
        self._awaiting: set[str] = set()

    # Read surface

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def query_string(self) -> str | None:
        return self._state.current_query

    @property
    def options(self) -> list[TypeaheadOption]:
        return list(self._state.options)

    @property
    def selected_index(self) -> int:
        return self._state.selected_index

    @property
    def is_open(self) -> bool:
        """True when a query is active and there is something to show."""
        return not self._state.is_idle and bool(self._state.options)

    @property
    def selected_option(self) -> TypeaheadOption | None:
        if not self._state.options:
            return None
        return self._state.options[self._state.selected_index]

    @property
    def cache(self) -> QueryCache:
        return self._cache

    # Matching

    def trigger_fn(self, text: str) -> MatchResult | None:
        """Match ``text`` (ending at the cursor) unless a competing trigger claims it."""
        for competing in self._competing_triggers:
            if competing(text) is not None:
                logger.debug("Competing trigger matched, mention matching suppressed")
                return None
        return self._matcher.match(text)

    def on_text_changed(self, text: str) -> MatchResult | None:
        """
        Update the query from the text ending at the cursor.

        Returns:
            The mention match, or None when the controller went (or stayed) idle
        """
        match = self.trigger_fn(text)
        if match is None:
            if not self._state.is_idle:
                self._reset("no-match")
            return None

        query = match.matching_string
        query_changed = query != self._state.current_query
        # Previous options stay visible until the new query resolves
        self._state = replace(self._state, current_query=query, match=match)
        if query_changed:
            self._publish(QueryChanged(query=query))

        if query in self._awaiting:
            logger.debug(f"Already waiting on {query!r}")
            return match

        self._awaiting.add(query)
        cached = self._cache.request(
            query,
            self._lookup.search,
            lambda results: self._on_results(query, results),
        )
        if cached is not None:
            self._awaiting.discard(query)
            self._apply_results(query, cached)
        return match

    def _on_results(self, query: str, results: list[str]) -> None:
        self._awaiting.discard(query)
        if query != self._state.current_query:
            logger.debug(
                f"Discarding stale results for {query!r} (current query: {self._state.current_query!r})"
            )
            return
        self._apply_results(query, results)

    def _apply_results(self, query: str, results: list[str]) -> None:
        options = tuple(self._ranker.rank(results))
        selected_index = self._state.selected_index if options == self._state.options else 0
        self._state = replace(self._state, options=options, selected_index=selected_index)
        self.handles.retain(option.key for option in options)
        logger.debug(f"Applied {len(options)} option(s) for {query!r}")
        self._publish(OptionsChanged(query=query, options=options))

    # Commands

    def select_option(self, option: TypeaheadOption) -> EditRequest | None:
        """
        Replace the matched span with ``option`` and close the menu.

        Returns:
            The emitted edit request, or None when no mention is active
        """
        match = self._state.match
        if match is None:
            logger.warning(f"select_option({option.key!r}) called with no active mention")
            return None

        edit = EditRequest(
            lead_offset=match.lead_offset,
            replace_length=len(match.replaceable_string),
            inserted_entity=option.key,
        )
        if self.document is not None:
            self.document.replace_span(edit.lead_offset, edit.replace_length, edit.inserted_entity)
        logger.info(f"Selected mention {option.key!r} at offset {edit.lead_offset}")
        self._publish(MentionSelected(option=option, edit=edit))
        self._reset("selected")
        return edit

    def select_highlighted(self) -> EditRequest | None:
        option = self.selected_option
        if option is None:
            return None
        return self.select_option(option)

    def set_highlighted_index(self, index: int) -> None:
        if not 0 <= index < len(self._state.options):
            logger.warning(f"Highlight index {index} out of range (options={len(self._state.options)})")
            return
        self._state = replace(self._state, selected_index=index)

    def close(self) -> None:
        """Dismiss the menu without editing the document."""
        if not self._state.is_idle:
            self._reset("dismissed")

    def _reset(self, reason: str) -> None:
        self._state = ControllerState()
        self.handles.clear()
        self._publish(QueryChanged(query=None))
        self._publish(MenuClosed(reason=reason))

    def _publish(self, event: Event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)
