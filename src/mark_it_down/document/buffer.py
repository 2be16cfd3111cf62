"""Editor buffer: the open document plus the active selection."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import ContextManager, Optional

from mark_it_down.runtime import telemetry

from .model import Document
from .selection import Selection, ensure_selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what the raw view should show."""

    text: str
    selection: Selection
    version: int
    dirty: bool
    file_name: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selection: Selection
    label: str


class EditorBuffer:
    """Owns the current :class:`Document` plus the transient selection.

    Every mutation funnels through :class:`Transaction` so it is profiled and
    leaves a selection that is valid for the new text.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        selection: Optional[Selection] = None,
    ) -> None:
        self.name = name
        self.document = document or Document.welcome()
        self.selection = (selection or Selection()).clamp(len(self.document.text))

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "EditorBuffer":
        return cls(name=name, document=Document(text=text, saved_text=text))

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def is_dirty(self) -> bool:
        return self.document.is_dirty

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            selection=self.selection,
            version=self.document.version,
            dirty=self.document.is_dirty,
            file_name=self.document.file_name,
            attributes=dict(attributes or {}),
        )

    def set_selection(self, selection: Selection, *, strict: bool = False) -> Selection:
        if strict:
            selection = ensure_selection(self.document.text, selection)
        self.selection = selection.clamp(len(self.document.text))
        return self.selection

    def apply(self, text: str, selection: Selection, *, label: str) -> BufferDelta:
        """Replace the whole text in one transaction (structural edits, host edits)."""

        with Transaction(self, label):
            self.document = self.document.with_text(text)
            self.selection = selection.clamp(len(text))
        return self._delta(label)

    def replace_range(self, start: int, end: int, text: str, *, label: str) -> BufferDelta:
        current = self.document.text
        span = Selection(start, end).clamp(len(current))
        with Transaction(self, label):
            new_text = current[: span.start] + text + current[span.end :]
            self.document = self.document.with_text(new_text)
            self.selection = Selection.caret(span.start + len(text))
        return self._delta(label)

    def insert_text(self, text: str) -> BufferDelta:
        return self.replace_range(
            self.selection.start, self.selection.end, text, label="insert_text"
        )

    def load(self, document: Document, *, label: str = "load") -> BufferDelta:
        with Transaction(self, label):
            self.document = document
            self.selection = Selection()
        return self._delta(label)

    def mark_saved(self, path: Optional[str] = None) -> None:
        self.document = self.document.mark_saved(path)

    def discard(self) -> BufferDelta:
        with Transaction(self, "discard"):
            self.document = self.document.discard()
            self.selection = self.selection.clamp(len(self.document.text))
        return self._delta("discard")

    def _delta(self, label: str) -> BufferDelta:
        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            selection=self.selection,
            label=label,
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: EditorBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["BufferDelta", "BufferMirror", "EditorBuffer", "Transaction"]
