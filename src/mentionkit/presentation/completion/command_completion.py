"""
Command completion strategy for ``/`` triggers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from mentionkit.core.patterns import basic_trigger_match
from mentionkit.domain.types import TypeaheadOption
from mentionkit.logger import get_logger

from .strategy import CompletionRequest, CompletionStrategy

logger = get_logger("completion.command")


class CommandCompletionStrategy(CompletionStrategy):
    """Provides command suggestions when the user types ``/``."""

    def __init__(self, command_provider: Callable[[], Sequence[str]], trigger: str = "/") -> None:
        self._command_provider = command_provider
        self._match = basic_trigger_match(trigger, min_length=0)

    def can_handle(self, request: CompletionRequest) -> bool:
        return self._match(request.text_before_cursor) is not None

    def get_candidates(self, request: CompletionRequest) -> list[TypeaheadOption]:
        match = self._match(request.text_before_cursor)
        if match is None:
            return []

        prefix = match.matching_string.lower()
        commands = list(self._command_provider())
        filtered = [cmd for cmd in commands if prefix in cmd.lower()] if prefix else commands

        logger.debug(
            f"CommandCompletionStrategy triggered (prefix={prefix!r}, matches={len(filtered)})"
        )
        return [TypeaheadOption(key=cmd, label=f"/{cmd}") for cmd in filtered]
