"""Document model protocol."""

from typing import Protocol

__all__ = ["DocumentModel"]


class DocumentModel(Protocol):
    """Receiver of edit requests emitted when a suggestion is selected.

    Fire-and-forget: the document owns success or failure of the mutation.
    """

    def replace_span(self, lead_offset: int, length: int, entity_key: str) -> None:
        ...
