"""
Orchestrator that coordinates completion strategies.
"""

from __future__ import annotations

from collections.abc import Sequence

from mentionkit.domain.types import TypeaheadOption
from mentionkit.logger import get_logger

from .strategy import CompletionRequest, CompletionStrategy

logger = get_logger("completion.orchestrator")


class CompletionOrchestrator:
    """Selects the first strategy able to serve the current request.

    Order matters: put slash commands before mentions so a ``/`` trigger
    wins over a mention at the same position.
    """

    def __init__(self, strategies: Sequence[CompletionStrategy]) -> None:
        self._strategies = list(strategies)

    def get_completions(self, request: CompletionRequest) -> list[TypeaheadOption]:
        for strategy in self._strategies:
            try:
                if strategy.can_handle(request):
                    logger.debug(f"Strategy {strategy.__class__.__name__} selected for completion")
                    return strategy.get_candidates(request)
            except Exception:
                logger.opt(exception=True).error(
                    f"Completion strategy {strategy.__class__.__name__} failed"
                )
        logger.debug("No completion strategy matched current input")
        return []
