"""Document state: live text, last-persisted snapshot, and file identity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_MARKDOWN = """# Mark It Down

**Mark It Down** is a Markdown reader and editor designed to keep you focused on your text and thoughts.

[Markdown Writing Guide](/MarkdownGuide.md) - Learn the basic syntax here."""

UNTITLED_NAME = "Opening.md"


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable snapshot of the open document.

    ``saved_text`` only changes through :meth:`mark_saved`; every other
    transition returns a copy with new ``text``. Opening a file or
    discarding changes replaces the snapshot wholesale.
    """

    text: str = ""
    saved_text: str = ""
    path: Optional[str] = None
    version: int = 0

    @classmethod
    def new(cls) -> "Document":
        return cls()

    @classmethod
    def welcome(cls) -> "Document":
        return cls(text=DEFAULT_MARKDOWN, saved_text=DEFAULT_MARKDOWN)

    @classmethod
    def opened(cls, text: str, path: str) -> "Document":
        return cls(text=text, saved_text=text, path=path)

    @property
    def is_dirty(self) -> bool:
        return self.text != self.saved_text

    @property
    def file_name(self) -> str:
        if not self.path:
            return UNTITLED_NAME
        name = self.path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
        return name or UNTITLED_NAME

    def with_text(self, text: str) -> "Document":
        if text == self.text:
            return self
        return replace(self, text=text, version=self.version + 1)

    def mark_saved(self, path: Optional[str] = None) -> "Document":
        return replace(
            self,
            saved_text=self.text,
            path=path if path is not None else self.path,
        )

    def discard(self) -> "Document":
        return replace(self, text=self.saved_text, version=self.version + 1)


__all__ = ["DEFAULT_MARKDOWN", "Document", "UNTITLED_NAME"]
