"""Cache protocol."""

from typing import Protocol, TypeVar

__all__ = ["Cache", "K", "V"]

# Invariant type variables: caches are both read and written
K = TypeVar("K")
V = TypeVar("V")


class Cache(Protocol[K, V]):
    """Protocol for the storage behind resolved lookup results.

    Implementations decide retention (unbounded, LRU, TTL...).

    Type Parameters:
        K: The key type
        V: The value type
    """

    def get(self, key: K) -> V | None:
        """Return the cached value, or None when absent or expired."""
        ...

    def set(self, key: K, value: V) -> None:
        """Store a value, possibly evicting older entries."""
        ...

    def clear(self, key: K | None = None) -> None:
        """Clear one key, or every entry when ``key`` is None."""
        ...

    def __len__(self) -> int:
        ...

    def __contains__(self, key: K) -> bool:
        ...
