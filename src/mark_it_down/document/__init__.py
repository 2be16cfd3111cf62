"""Document model, selection state, and the file host boundary."""

from .buffer import BufferDelta, BufferMirror, EditorBuffer, Transaction
from .model import DEFAULT_MARKDOWN, UNTITLED_NAME, Document
from .selection import (
    Location,
    Selection,
    SelectionValidationError,
    ensure_selection,
    location_for_offset,
    offset_for_location,
)
from .store import (
    OPEN_EXTENSIONS,
    DocumentHost,
    DocumentIOError,
    FileSystemHost,
    PathPurpose,
    is_openable,
)

__all__ = [
    "BufferDelta",
    "BufferMirror",
    "DEFAULT_MARKDOWN",
    "Document",
    "DocumentHost",
    "DocumentIOError",
    "EditorBuffer",
    "FileSystemHost",
    "Location",
    "OPEN_EXTENSIONS",
    "PathPurpose",
    "Selection",
    "SelectionValidationError",
    "Transaction",
    "UNTITLED_NAME",
    "ensure_selection",
    "is_openable",
    "location_for_offset",
    "offset_for_location",
]
