"""Command handlers bound in the default keymap."""

from .core import (
    discard_changes,
    new_document,
    open_document,
    save_document,
    save_document_as,
    toggle_layout,
    toggle_scroll_sync,
    toggle_view_mode,
)
from .editing import (
    continue_list_item,
    indent_line,
    outdent_line,
    toggle_bold,
    toggle_code,
    toggle_italic,
    toggle_strikethrough,
)
from .find import (
    close_find,
    find_next,
    find_previous,
    open_find,
    replace_all,
    replace_current,
    toggle_case_sensitive,
)

__all__ = [
    "close_find",
    "continue_list_item",
    "discard_changes",
    "find_next",
    "find_previous",
    "indent_line",
    "new_document",
    "open_document",
    "open_find",
    "outdent_line",
    "replace_all",
    "replace_current",
    "save_document",
    "save_document_as",
    "toggle_bold",
    "toggle_case_sensitive",
    "toggle_code",
    "toggle_italic",
    "toggle_layout",
    "toggle_scroll_sync",
    "toggle_strikethrough",
    "toggle_view_mode",
]
