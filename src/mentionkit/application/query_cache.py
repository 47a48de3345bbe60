"""
QueryCache - memoises lookup results per query and de-duplicates requests.

Every key is either absent, ``Pending`` (a fetch is in flight) or
``Resolved``. At most one fetch is ever in flight for a key: later requests
for a pending key simply join its observers. Resolved results are kept in a
pluggable ``Cache`` storage so retention (unbounded, LRU, TTL) is a wiring
decision.

Everything runs on one event loop, so the Pending -> Resolved transition
happens inside a single callback and needs no locking.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from mentionkit.domain.events import EventBus, LookupFailed
from mentionkit.domain.protocols import Cache, ResultCallback
from mentionkit.domain.types import CacheEntry, Pending, Resolved
from mentionkit.infrastructure.cache import LRUCache
from mentionkit.logger import get_logger

logger = get_logger("query_cache")

FetchFn = Callable[[str, ResultCallback], None]


@dataclass(eq=False)
class _InFlight:
    observers: list[ResultCallback] = field(default_factory=list)
    timer: Optional[asyncio.TimerHandle] = None


class QueryCache:
    """Per-controller cache of lookup results."""

    def __init__(
        self,
        storage: Cache[str, tuple[str, ...]] | None = None,
        timeout: float | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """
        Args:
            storage: Where resolved results live. Defaults to an ``LRUCache``.
            timeout: Seconds after which a pending lookup is abandoned. None waits forever.
            event_bus: Receives ``LookupFailed`` events when given.
        """
        self._resolved: Cache[str, tuple[str, ...]] = storage if storage is not None else LRUCache()
        self._pending: dict[str, _InFlight] = {}
        self.timeout = timeout
        self._event_bus = event_bus

    def entry(self, key: str) -> CacheEntry | None:
        """Return the tagged state of ``key``, or None if it was never requested (or evicted)."""
        if key in self._pending:
            return Pending()
        results = self._resolved.get(key)
        if results is None:
            return None
        return Resolved(results)

    def request(self, key: str, fetch: FetchFn, on_resolved: ResultCallback) -> list[str] | None:
        """
        Resolve ``key`` from the cache or through ``fetch``.

        Args:
            key: Exact, case-sensitive query string
            fetch: Lookup starter, called as ``fetch(key, on_done)`` at most once per pending key
            on_resolved: Called exactly once with the results if they are not available now

        Returns:
            The cached results when ``key`` is already resolved (``on_resolved`` is then
            not called), otherwise None.
        """
        cached = self._resolved.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key!r}")
            return list(cached)

        flight = self._pending.get(key)
        if flight is not None:
            logger.debug(f"Lookup for {key!r} already in flight, waiting on it")
            flight.observers.append(on_resolved)
            return None

        flight = _InFlight(observers=[on_resolved])
        self._pending[key] = flight
        if self.timeout is not None:
            flight.timer = asyncio.get_running_loop().call_later(
                self.timeout, self._fail, key, flight, f"timed out after {self.timeout}s"
            )

        logger.debug(f"Cache miss for {key!r}, fetching")
        try:
            fetch(key, lambda results: self._complete(key, flight, results))
        except Exception as e:
            logger.opt(exception=True).error(f"Lookup for {key!r} raised")
            self._fail(key, flight, f"lookup raised {type(e).__name__}")
        return None

    def _complete(self, key: str, flight: _InFlight, results: list[str]) -> None:
        if self._pending.get(key) is not flight:
            logger.debug(f"Ignoring late results for {key!r}")
            return

        del self._pending[key]
        if flight.timer is not None:
            flight.timer.cancel()

        resolved = tuple(results)
        self._resolved.set(key, resolved)
        logger.debug(f"Resolved {key!r} with {len(resolved)} result(s)")
        for observer in flight.observers:
            observer(list(resolved))

    def _fail(self, key: str, flight: _InFlight, reason: str) -> None:
        if self._pending.get(key) is not flight:
            return

        # Dropping the entry lets the next request for this key retry
        del self._pending[key]
        if flight.timer is not None:
            flight.timer.cancel()

        logger.warning(f"Lookup for {key!r} failed: {reason}")
        if self._event_bus is not None:
            self._event_bus.publish(LookupFailed(query=key, reason=reason))
        for observer in flight.observers:
            observer([])

    @property
    def pending_keys(self) -> frozenset[str]:
        return frozenset(self._pending)

    def clear(self) -> None:
        """Forget resolved results. In-flight lookups are left to finish."""
        self._resolved.clear()

    def __len__(self) -> int:
        return len(self._resolved) + len(self._pending)
