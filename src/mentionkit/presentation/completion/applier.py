"""
Utilities for applying selected mentions to plain-text input.
"""

from __future__ import annotations

from dataclasses import dataclass

from mentionkit.domain.protocols import DocumentModel
from mentionkit.domain.types import EditRequest
from mentionkit.logger import get_logger

from .strategy import CompletionRequest

logger = get_logger("completion.applier")


@dataclass(slots=True)
class ApplyResult:
    """Result of applying a completion value."""

    text: str
    cursor: int


class CompletionApplier:
    """Performs an edit request on a text/cursor pair.

    The span starts at ``lead_offset`` (measured in the text before the
    cursor) and is replaced by the entity name followed by a single space.
    """

    def apply(self, edit: EditRequest, request: CompletionRequest) -> ApplyResult:
        text = request.text
        start = edit.lead_offset
        end = start + edit.replace_length
        if start < 0 or end > len(text):
            raise ValueError(
                f"Edit span [{start}, {end}) is outside of the text (length {len(text)})"
            )

        text_after = text[end:]
        separator = "" if text_after.startswith(" ") else " "
        inserted = f"{edit.inserted_entity}{separator}"
        new_text = f"{text[:start]}{inserted}{text_after}"
        new_cursor = start + len(edit.inserted_entity) + 1
        logger.debug(f"Applied mention {edit.inserted_entity!r} at index {start}")
        return ApplyResult(text=new_text, cursor=new_cursor)


class TextDocument(DocumentModel):
    """A plain-text document with a cursor, usable as the controller's document model."""

    def __init__(self, text: str = "", cursor: int | None = None) -> None:
        self.text = text
        self.cursor = len(text) if cursor is None else cursor
        self._applier = CompletionApplier()

    @property
    def text_before_cursor(self) -> str:
        return self.text[: self.cursor]

    def insert_text(self, chunk: str) -> str:
        """Insert ``chunk`` at the cursor and return the text before the cursor."""
        self.text = f"{self.text[: self.cursor]}{chunk}{self.text[self.cursor :]}"
        self.cursor += len(chunk)
        return self.text_before_cursor

    def replace_span(self, lead_offset: int, length: int, entity_key: str) -> None:
        result = self._applier.apply(
            EditRequest(lead_offset=lead_offset, replace_length=length, inserted_entity=entity_key),
            CompletionRequest(text=self.text, cursor_position=self.cursor),
        )
        self.text, self.cursor = result.text, result.cursor
