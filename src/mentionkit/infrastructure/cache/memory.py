"""In-memory cache implementation.

Unbounded dictionary storage. Used when resolved queries should be kept for
the whole editing session.
"""

from typing import TypeVar

from mentionkit.domain.protocols import Cache

K = TypeVar("K")
V = TypeVar("V")


class MemoryCache(Cache[K, V]):
    """Simple in-memory cache with no eviction.

    Example:
        >>> cache = MemoryCache[str, list[str]]()
        >>> cache.set("Han", ["Han Solo"])
        >>> cache.get("Han")
        ['Han Solo']
    """

    def __init__(self) -> None:
        self._data: dict[K, V] = {}

    def get(self, key: K) -> V | None:
        return self._data.get(key)

    def set(self, key: K, value: V) -> None:
        self._data[key] = value

    def clear(self, key: K | None = None) -> None:
        """Clear one key, or all entries when ``key`` is None."""
        if key is None:
            self._data.clear()
        else:
            self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: K) -> bool:
        return key in self._data
