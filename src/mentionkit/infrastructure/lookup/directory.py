"""
Lookup services backing the mention menu.

``DirectoryLookup`` answers from an in-memory list after a simulated delay,
which is enough to exercise the asynchronous paths of the pipeline.
``AsyncLookupAdapter`` lets a coroutine-based backend (an HTTP directory
client, a database query) satisfy the callback-based ``LookupService``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable

from mentionkit.domain.protocols import LookupService, ResultCallback
from mentionkit.logger import get_logger

from .data import DEMO_NAMES

logger = get_logger("lookup")


class DirectoryLookup(LookupService):
    """Case-insensitive substring search over a fixed list of names."""

    def __init__(self, names: Iterable[str] = DEMO_NAMES, delay: float = 0.5) -> None:
        self._names = list(names)
        self.delay = delay
        self.calls: int = 0

    def filter(self, query: str) -> list[str]:
        needle = query.lower()
        return [name for name in self._names if needle in name.lower()]

    def search(self, query: str, on_result: ResultCallback) -> None:
        self.calls += 1
        results = self.filter(query)
        logger.debug(f"Directory lookup {query!r}: {len(results)} result(s) in {self.delay}s")
        asyncio.get_running_loop().call_later(self.delay, on_result, results)


class AsyncLookupAdapter(LookupService):
    """Expose ``async def search(query) -> list[str]`` through the callback contract.

    A failing coroutine is logged and its callback is never invoked; the query
    cache timeout is responsible for giving up on it.
    """

    def __init__(self, search: Callable[[str], Awaitable[list[str]]]) -> None:
        self._search = search
        self._tasks: set[asyncio.Task] = set()

    def search(self, query: str, on_result: ResultCallback) -> None:
        task = asyncio.get_running_loop().create_task(self._run(query, on_result))
        # Keep a strong reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, query: str, on_result: ResultCallback) -> None:
        try:
            results = await self._search(query)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.opt(exception=True).error(f"Lookup for {query!r} failed")
            return
        on_result(list(results))
