"""Application layer: query cache, ranking and the trigger controller."""

from mentionkit.application.controller import TriggerController
from mentionkit.application.factory import create_controller
from mentionkit.application.handles import OptionHandleRegistry
from mentionkit.application.query_cache import QueryCache
from mentionkit.application.ranker import SuggestionRanker

__all__ = [
    "OptionHandleRegistry",
    "QueryCache",
    "SuggestionRanker",
    "TriggerController",
    "create_controller",
]
