"""Exceptions raised by mentionkit."""


class MentionError(Exception):
    """Base class for mentionkit errors."""


class MentionConfigError(MentionError, ValueError):
    """Invalid trigger or runtime configuration.

    Raised once, at construction time, never per keystroke.
    """
