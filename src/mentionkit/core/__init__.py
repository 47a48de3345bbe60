"""Core layer: configuration and trigger grammars."""

from mentionkit.core.config import DEFAULT_PUNCTUATION, MentionSettings, TriggerConfig
from mentionkit.core.patterns import PatternMatcher, TriggerMatchFn, basic_trigger_match

__all__ = [
    "DEFAULT_PUNCTUATION",
    "MentionSettings",
    "PatternMatcher",
    "TriggerConfig",
    "TriggerMatchFn",
    "basic_trigger_match",
]
