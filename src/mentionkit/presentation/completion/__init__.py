"""
Completion strategy utilities for input widgets.

Strategy-based decomposition of the completion flows (slash commands,
mentions) plus the plain-text applier used to perform mention edits.
"""

from .strategy import CompletionRequest, CompletionStrategy
from .orchestrator import CompletionOrchestrator
from .command_completion import CommandCompletionStrategy
from .mention_completion import MentionCompletionStrategy
from .applier import ApplyResult, CompletionApplier, TextDocument

__all__ = [
    "ApplyResult",
    "CompletionApplier",
    "CompletionOrchestrator",
    "CompletionRequest",
    "CompletionStrategy",
    "CommandCompletionStrategy",
    "MentionCompletionStrategy",
    "TextDocument",
]
