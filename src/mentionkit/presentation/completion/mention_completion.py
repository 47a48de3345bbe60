"""
Mention completion strategy for ``@`` triggers and capitalized names.
"""

from __future__ import annotations

from mentionkit.application.controller import TriggerController
from mentionkit.domain.types import TypeaheadOption
from mentionkit.logger import get_logger

from .strategy import CompletionRequest, CompletionStrategy

logger = get_logger("completion.mention")


class MentionCompletionStrategy(CompletionStrategy):
    """Feeds the trigger controller and returns whatever options it holds.

    Lookups are asynchronous, so the first call for a new query usually
    returns the previous options (or none); the widget refreshes when the
    controller publishes ``OptionsChanged``.
    """

    def __init__(self, controller: TriggerController) -> None:
        self._controller = controller

    def can_handle(self, request: CompletionRequest) -> bool:
        handled = self._controller.trigger_fn(request.text_before_cursor) is not None
        if not handled:
            # Keep the controller idle when the mention disappears
            self._controller.on_text_changed(request.text_before_cursor)
        return handled

    def get_candidates(self, request: CompletionRequest) -> list[TypeaheadOption]:
        match = self._controller.on_text_changed(request.text_before_cursor)
        if match is None:
            return []
        logger.debug(
            f"MentionCompletionStrategy query={match.matching_string!r}, "
            f"options={len(self._controller.options)}"
        )
        return self._controller.options
