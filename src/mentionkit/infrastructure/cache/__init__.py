"""Storage backends for resolved lookup results.

Swappable implementations of the ``Cache`` protocol: unbounded in-memory
storage, and an LRU cache with optional TTL.
"""

from mentionkit.infrastructure.cache.lru import LRUCache
from mentionkit.infrastructure.cache.memory import MemoryCache

__all__ = ["LRUCache", "MemoryCache"]
