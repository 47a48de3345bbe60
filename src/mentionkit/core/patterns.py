"""
Trigger grammars for mention detection.

All matching is done against the text that ends at the cursor. Patterns are
anchored at the end of that text, so a match always describes the span the
user is currently typing. Two grammars exist:

* trigger-char mentions (``@Han``, ``@Obi-Wan K``), with an alias fallback
  that allows longer runs of name characters without joins;
* capitalized names (``Yoda``), accepted only from a minimum length to skip
  short sentence starters.

A third, independent grammar (:func:`basic_trigger_match`) describes
competing triggers such as ``/`` slash commands.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Optional

from mentionkit.core.config import DEFAULT_PUNCTUATION, TriggerConfig
from mentionkit.domain.types import MatchResult
from mentionkit.logger import get_logger

logger = get_logger("patterns")

TriggerMatchFn = Callable[[str], Optional[MatchResult]]


def _char_class(chars: str) -> str:
    return "".join(re.escape(char) for char in chars)


class PatternMatcher:
    """Compiled mention grammars for one :class:`TriggerConfig`.

    Instances are immutable and hold no per-call state; build one per
    configuration and reuse it for every keystroke.
    """

    def __init__(self, config: TriggerConfig | None = None) -> None:
        self.config = config or TriggerConfig()

        triggers = _char_class("".join(sorted(self.config.trigger_chars)))
        punctuation = _char_class(self.config.punctuation)
        valid_chars = f"[^{triggers}{punctuation}\\s]"
        # ". " (or "." at the end), a space, one punctuation char, or nothing
        valid_joins = f"(?:\\.[ |$]| |[{punctuation}]|)"
        lead = r"(^|\s|\()"

        self._trigger_pattern = re.compile(
            f"{lead}([{triggers}]((?:{valid_chars}{valid_joins}){{0,{self.config.max_match_length}}}))\\Z"
        )
        self._alias_pattern = re.compile(
            f"{lead}([{triggers}]((?:{valid_chars}){{0,{self.config.alias_max_length}}}))\\Z"
        )
        # ASCII word boundary before the capital: "éHan" still yields "Han"
        self._name_pattern = re.compile(f"(^|[^#])((?<![A-Za-z0-9_])[A-Z][^\\s{punctuation}]+)\\Z")

    def check_for_trigger_mention(self, text: str) -> MatchResult | None:
        """Match ``@query`` at the end of ``text``, falling back to the alias grammar."""
        match = self._trigger_pattern.search(text) or self._alias_pattern.search(text)
        if match is None:
            return None

        leading, replaceable, matching = match.group(1), match.group(2), match.group(3)
        if len(matching) < self.config.min_match_length:
            return None
        return MatchResult(
            lead_offset=match.start() + len(leading),
            matching_string=matching,
            replaceable_string=replaceable,
        )

    def check_for_capitalized_name(self, text: str) -> MatchResult | None:
        """Match a trailing capitalized word of at least ``name_min_match_length`` characters."""
        match = self._name_pattern.search(text)
        if match is None:
            return None

        leading, name = match.group(1), match.group(2)
        if len(name) < self.config.name_min_match_length:
            return None
        return MatchResult(
            lead_offset=match.start() + len(leading),
            matching_string=name,
            replaceable_string=name,
        )

    def match(self, text: str) -> MatchResult | None:
        """Return the trigger-char match, else the capitalized-name match, else None."""
        result = self.check_for_trigger_mention(text)
        if result is None:
            result = self.check_for_capitalized_name(text)
        if result is not None:
            logger.debug(
                f"Mention match at {result.lead_offset}: query={result.matching_string!r}"
            )
        return result

    __call__ = match


def basic_trigger_match(
    trigger: str,
    min_length: int = 1,
    max_length: int = 75,
    punctuation: str = DEFAULT_PUNCTUATION,
) -> TriggerMatchFn:
    """
    Build a matcher for a simple single-character trigger such as ``/``.

    The query may not contain whitespace or punctuation. The pattern is
    compiled once, here.

    Args:
        trigger: Trigger character
        min_length: Minimum query length (0 matches the bare trigger)
        max_length: Maximum query length

    Returns:
        Callable mapping the text before the cursor to a MatchResult or None
    """
    chars = _char_class(trigger)
    valid_chars = f"[^{chars}{_char_class(punctuation)}\\s]"
    pattern = re.compile(f"(^|\\s|\\()([{chars}]((?:{valid_chars}){{0,{max_length}}}))\\Z")

    def check(text: str) -> MatchResult | None:
        match = pattern.search(text)
        if match is None:
            return None
        leading, replaceable, matching = match.group(1), match.group(2), match.group(3)
        if len(matching) < min_length:
            return None
        return MatchResult(
            lead_offset=match.start() + len(leading),
            matching_string=matching,
            replaceable_string=replaceable,
        )

    return check
