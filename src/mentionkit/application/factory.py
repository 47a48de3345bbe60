"""Wires a TriggerController from MentionSettings."""

from mentionkit.application.controller import TriggerController
from mentionkit.application.query_cache import QueryCache
from mentionkit.application.ranker import SuggestionRanker
from mentionkit.core.config import MentionSettings, TriggerConfig
from mentionkit.core.patterns import PatternMatcher, basic_trigger_match
from mentionkit.domain.events import EventBus
from mentionkit.domain.protocols import Cache, DocumentModel, LookupService
from mentionkit.infrastructure.cache import LRUCache, MemoryCache
from mentionkit.logger import get_logger

logger = get_logger("factory")


def create_storage(settings: MentionSettings) -> Cache[str, tuple[str, ...]]:
    if settings.cache_max_entries == 0:
        return MemoryCache[str, tuple[str, ...]]()
    return LRUCache[str, tuple[str, ...]](max_entries=settings.cache_max_entries, ttl=settings.cache_ttl)


def create_controller(
    lookup: LookupService,
    settings: MentionSettings | None = None,
    *,
    trigger_config: TriggerConfig | None = None,
    document: DocumentModel | None = None,
    event_bus: EventBus | None = None,
) -> TriggerController:
    """
    Build a controller with its own cache, grammars and ranker.

    Args:
        lookup: Directory backend
        settings: Runtime settings (defaults when None)
        trigger_config: Grammar configuration (defaults when None)
        document: Receiver of edit requests
        event_bus: Optional bus for state-change events

    Raises:
        MentionConfigError: If the trigger configuration is invalid
    """
    settings = settings or MentionSettings()
    cache = QueryCache(
        storage=create_storage(settings),
        timeout=settings.effective_timeout,
        event_bus=event_bus,
    )
    competing = (
        (basic_trigger_match(settings.command_trigger, min_length=0),) if settings.command_trigger else ()
    )
    logger.debug(
        f"Creating controller: limit={settings.suggestion_limit}, "
        f"cache_max_entries={settings.cache_max_entries}, timeout={settings.effective_timeout}"
    )
    return TriggerController(
        lookup,
        matcher=PatternMatcher(trigger_config),
        cache=cache,
        ranker=SuggestionRanker(settings.suggestion_limit),
        competing_triggers=competing,
        document=document,
        event_bus=event_bus,
    )
