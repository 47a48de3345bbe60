"""Bounded LRU cache with optional time-to-live.

Resolved lookup results accumulate with every distinct query typed; this
cache caps that growth by evicting the least recently used entries, and can
additionally expire entries after ``ttl`` seconds.
"""

import time
from collections import OrderedDict
from typing import Callable, Optional, TypeVar

from mentionkit.domain.protocols import Cache
from mentionkit.logger import get_logger

logger = get_logger("cache.lru")

K = TypeVar("K")
V = TypeVar("V")


class LRUCache(Cache[K, V]):
    """LRU-bounded cache.

    Both ``get`` hits and ``set`` calls mark an entry as most recently used.
    Expired entries are treated as absent and dropped lazily.

    Example:
        >>> cache = LRUCache[str, int](max_entries=2)
        >>> cache.set("a", 1)
        >>> cache.set("b", 2)
        >>> cache.get("a")
        1
        >>> cache.set("c", 3)  # evicts "b"
        >>> "b" in cache
        False
    """

    def __init__(
        self,
        max_entries: int = 256,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an LRU cache.

        Args:
            max_entries: Maximum number of entries kept. Must be positive.
            ttl: Optional time-to-live in seconds.
            clock: Time source, injectable for tests.
        """
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self.ttl = ttl
        self._clock = clock
        self._data: OrderedDict[K, tuple[V, Optional[float]]] = OrderedDict()

    def _is_expired(self, expiration_time: Optional[float]) -> bool:
        return expiration_time is not None and self._clock() > expiration_time

    def get(self, key: K) -> V | None:
        entry = self._data.get(key)
        if entry is None:
            return None

        value, expiration_time = entry
        if self._is_expired(expiration_time):
            del self._data[key]
            return None

        self._data.move_to_end(key)
        return value

    def set(self, key: K, value: V) -> None:
        expiration_time = self._clock() + self.ttl if self.ttl is not None else None
        self._data[key] = (value, expiration_time)
        self._data.move_to_end(key)

        while len(self._data) > self.max_entries:
            evicted, _ = self._data.popitem(last=False)
            logger.debug(f"Evicted {evicted!r} (max_entries={self.max_entries})")

    def clear(self, key: K | None = None) -> None:
        if key is None:
            self._data.clear()
        else:
            self._data.pop(key, None)

    def _cleanup_expired(self) -> None:
        expired_keys = [key for key, (_, exp_time) in self._data.items() if self._is_expired(exp_time)]
        for key in expired_keys:
            del self._data[key]

    def __len__(self) -> int:
        """Return the number of live (non-expired) entries."""
        self._cleanup_expired()
        return len(self._data)

    def __contains__(self, key: K) -> bool:
        entry = self._data.get(key)
        return entry is not None and not self._is_expired(entry[1])
