"""Lookup service protocol."""

from collections.abc import Callable
from typing import Protocol

__all__ = ["LookupService", "ResultCallback"]

ResultCallback = Callable[[list[str]], None]


class LookupService(Protocol):
    """Directory capability resolving a query to candidate entity names.

    ``search`` must not block. It schedules the lookup and calls ``on_result``
    once, later, from the event loop. Results of overlapping calls may arrive
    in any order.
    """

    def search(self, query: str, on_result: ResultCallback) -> None:
        ...
