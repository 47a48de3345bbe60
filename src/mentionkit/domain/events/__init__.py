"""Event system connecting the mention core to its rendering layer.

Example:
    ```python
    from mentionkit.domain.events import EventBus, OptionsChanged

    bus = EventBus()
    bus.subscribe(OptionsChanged, lambda event: print(event.options))
    ```
"""

from .bus import EventBus
from .types import (
    Event,
    LookupFailed,
    MentionSelected,
    MenuClosed,
    OptionsChanged,
    QueryChanged,
)

__all__ = [
    "EventBus",
    "Event",
    "LookupFailed",
    "MentionSelected",
    "MenuClosed",
    "OptionsChanged",
    "QueryChanged",
]
