"""Event bus for decoupling the mention core from the rendering layer.

The controller publishes state changes; a menu widget subscribes and
re-renders. Handlers MUST be synchronous: they run inside the event-loop
callback that produced the change and should only schedule further work.
"""

import inspect
from typing import Callable, Type, TypeVar

from mentionkit.logger import get_logger

from .types import Event

logger = get_logger("events.bus")

T = TypeVar("T", bound=Event)

EventHandler = Callable[[Event], None]


class EventBus:
    """Publish/subscribe registry keyed by event type.

    Example:
        ```python
        bus = EventBus()
        bus.subscribe(OptionsChanged, lambda event: menu.show(event.options))
        controller = TriggerController(lookup, event_bus=bus)
        ```

    Not thread-safe; all calls are expected on the editor's event loop.
    """

    def __init__(self):
        self._handlers: dict[Type[Event], list[EventHandler]] = {}

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Register ``handler`` for events of ``event_type``.

        Raises:
            TypeError: If handler is a coroutine function
        """
        if inspect.iscoroutinefunction(handler):
            raise TypeError(
                f"Event handlers must be synchronous functions. "
                f"Handler {handler.__name__} is a coroutine function; "
                f"schedule async work with asyncio.create_task() instead."
            )

        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed handler for {event_type.__name__}")
        else:
            logger.debug(f"Handler already subscribed for {event_type.__name__}, skipping")

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Remove ``handler``; unknown handlers are ignored."""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Unsubscribed handler for {event_type.__name__}")
            except ValueError:
                logger.debug(f"Handler not found in subscriptions for {event_type.__name__}")

    def publish(self, event: Event) -> None:
        """
        Deliver ``event`` to its subscribers in subscription order.

        A failing handler is logged and does not prevent the others from running.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])

        if not handlers:
            return

        logger.debug(f"Publishing {event_type.__name__} to {len(handlers)} handler(s)")

        for handler in list(handlers):
            try:
                handler(event)
            except Exception as e:
                logger.opt(exception=True).error(
                    f"Error in event handler for {event_type.__name__}: {e}"
                )

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        return bool(self._handlers.get(event_type))
