"""Domain layer: value types, protocols, events and exceptions."""

from mentionkit.domain.exceptions import MentionConfigError, MentionError
from mentionkit.domain.types import (
    CacheEntry,
    ControllerState,
    EditRequest,
    MatchResult,
    Pending,
    Resolved,
    TypeaheadOption,
)

__all__ = [
    "CacheEntry",
    "ControllerState",
    "EditRequest",
    "MatchResult",
    "MentionConfigError",
    "MentionError",
    "Pending",
    "Resolved",
    "TypeaheadOption",
]
