"""
Registry of UI handles for rendered options.

A menu renderer usually needs a reference to the element it drew for each
option (to scroll it into view, focus it...). Handles are stored here by
option key rather than on the option objects, so options stay immutable
values and the core never touches the render tree.
"""

from collections.abc import Iterable
from typing import Any


class OptionHandleRegistry:
    """Maps option keys to opaque renderer handles."""

    def __init__(self) -> None:
        self._handles: dict[str, Any] = {}

    def bind(self, key: str, handle: Any) -> None:
        """Attach ``handle`` to ``key``. Binding None releases the key."""
        if handle is None:
            self.release(key)
        else:
            self._handles[key] = handle

    def get(self, key: str) -> Any | None:
        return self._handles.get(key)

    def release(self, key: str) -> None:
        self._handles.pop(key, None)

    def retain(self, keys: Iterable[str]) -> None:
        """Drop every handle whose key is not in ``keys``."""
        keep = set(keys)
        for key in [key for key in self._handles if key not in keep]:
            del self._handles[key]

    def clear(self) -> None:
        self._handles.clear()

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, key: object) -> bool:
        return key in self._handles
