"""Markdown editor core with a Textual host."""

from mark_it_down.document import Document, EditorBuffer, FileSystemHost, Selection
from mark_it_down.settings import EditorSettings
from mark_it_down.workspace import Workspace

__version__ = "0.1.0"

__all__ = [
    "Document",
    "EditorBuffer",
    "EditorSettings",
    "FileSystemHost",
    "Selection",
    "Workspace",
    "__version__",
]
