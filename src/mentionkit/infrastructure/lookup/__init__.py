"""Lookup service implementations."""

from mentionkit.infrastructure.lookup.data import DEMO_NAMES
from mentionkit.infrastructure.lookup.directory import AsyncLookupAdapter, DirectoryLookup

__all__ = ["AsyncLookupAdapter", "DEMO_NAMES", "DirectoryLookup"]
