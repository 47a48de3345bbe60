"""Configuration for mention matching and the suggestion pipeline."""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from mentionkit.domain.exceptions import MentionConfigError
from mentionkit.utils import parse_optional_float

# Characters that end a mention query or act as a join inside one
DEFAULT_PUNCTUATION = ".,+*?$@|#{}()^-[]\\/!%'\"~=<>_:;"


@dataclass(frozen=True)
class TriggerConfig:
    """Immutable grammar configuration, validated once at construction."""

    trigger_chars: frozenset[str] = field(default_factory=lambda: frozenset("@"))
    punctuation: str = DEFAULT_PUNCTUATION

    # Length limits, in repetitions of a valid character (plus join)
    max_match_length: int = 75
    alias_max_length: int = 50

    # Minimum query length for the trigger grammar and the capitalized-name grammar
    min_match_length: int = 1
    name_min_match_length: int = 3

    def __post_init__(self) -> None:
        # Accept any iterable of characters, store a frozenset
        object.__setattr__(self, "trigger_chars", frozenset(self.trigger_chars))

        if not self.trigger_chars:
            raise MentionConfigError("trigger_chars must contain at least one character")
        for char in self.trigger_chars:
            if len(char) != 1 or char.isspace():
                raise MentionConfigError(
                    f"Invalid trigger character {char!r}: expected one non-whitespace character"
                )
        for name in ("max_match_length", "alias_max_length", "name_min_match_length"):
            if getattr(self, name) <= 0:
                raise MentionConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if self.min_match_length < 0:
            raise MentionConfigError(f"min_match_length must be >= 0, got {self.min_match_length}")
        if self.min_match_length > self.max_match_length:
            raise MentionConfigError(
                f"min_match_length ({self.min_match_length}) exceeds "
                f"max_match_length ({self.max_match_length})"
            )


@dataclass
class MentionSettings:
    """Runtime settings for the lookup, cache and ranking stages."""

    # Ranking
    suggestion_limit: int = 5

    # Cache: 0 entries keeps every resolved query for the whole session
    cache_max_entries: int = 256
    cache_ttl: Optional[float] = None

    # Lookup: a timeout of 0 (or None) leaves unanswered queries pending
    lookup_timeout: Optional[float] = 5.0
    lookup_delay: float = 0.5

    # Competing slash-command grammar; empty disables it
    command_trigger: str = "/"

    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.suggestion_limit <= 0:
            raise MentionConfigError(f"suggestion_limit must be positive, got {self.suggestion_limit}")
        if self.cache_max_entries < 0:
            raise MentionConfigError(f"cache_max_entries must be >= 0, got {self.cache_max_entries}")
        for name in ("cache_ttl", "lookup_timeout", "lookup_delay"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise MentionConfigError(f"{name} must be >= 0, got {value}")
        if len(self.command_trigger) > 1:
            raise MentionConfigError(
                f"command_trigger must be a single character or empty, got {self.command_trigger!r}"
            )

    @property
    def effective_timeout(self) -> Optional[float]:
        return self.lookup_timeout or None

    @classmethod
    def from_env(cls) -> "MentionSettings":
        """Build settings from ``MENTIONKIT_*`` environment variables (and ``.env``)."""
        load_dotenv()
        defaults = cls()
        try:
            return cls(
                suggestion_limit=int(os.getenv("MENTIONKIT_SUGGESTION_LIMIT", defaults.suggestion_limit)),
                cache_max_entries=int(os.getenv("MENTIONKIT_CACHE_MAX_ENTRIES", defaults.cache_max_entries)),
                cache_ttl=parse_optional_float(os.getenv("MENTIONKIT_CACHE_TTL")),
                lookup_timeout=parse_optional_float(
                    os.getenv("MENTIONKIT_LOOKUP_TIMEOUT", str(defaults.lookup_timeout))
                ),
                lookup_delay=float(os.getenv("MENTIONKIT_LOOKUP_DELAY", defaults.lookup_delay)),
                command_trigger=os.getenv("MENTIONKIT_COMMAND_TRIGGER", defaults.command_trigger),
                log_level=os.getenv("MENTIONKIT_LOG_LEVEL", defaults.log_level).upper(),
            )
        except ValueError as e:
            if isinstance(e, MentionConfigError):
                raise
            raise MentionConfigError(f"Invalid mentionkit environment setting: {e}") from e
