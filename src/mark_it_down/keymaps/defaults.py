"""Built-in keymaps seeding the global, editing, and find scopes."""

from __future__ import annotations

from typing import Iterable, Sequence

from mark_it_down.actions import core as core_actions
from mark_it_down.actions import editing as editing_actions
from mark_it_down.actions import find as find_actions

from .models import Binding, Command
from .registry import KeymapRegistry

DEFAULT_COMMANDS: tuple[Command, ...] = (
    Command(
        id="core.toggle_view_mode",
        handler=core_actions.toggle_view_mode,
        description="Switch between reading and editing",
    ),
    Command(
        id="core.toggle_layout",
        handler=core_actions.toggle_layout,
        description="Switch between single and split layout",
    ),
    Command(
        id="core.toggle_scroll_sync",
        handler=core_actions.toggle_scroll_sync,
        description="Turn scroll synchronization on or off",
    ),
    Command(
        id="core.new_document",
        handler=core_actions.new_document,
        description="Start an empty document",
    ),
    Command(
        id="core.open_document",
        handler=core_actions.open_document,
        description="Open a Markdown file",
    ),
    Command(
        id="core.save_document",
        handler=core_actions.save_document,
        description="Save the document",
    ),
    Command(
        id="core.save_document_as",
        handler=core_actions.save_document_as,
        description="Save the document under a new path",
    ),
    Command(
        id="core.discard_changes",
        handler=core_actions.discard_changes,
        description="Revert to the last saved text",
    ),
    Command(
        id="editing.indent",
        handler=editing_actions.indent_line,
        description="Indent the current line",
    ),
    Command(
        id="editing.outdent",
        handler=editing_actions.outdent_line,
        description="Outdent the current line",
    ),
    Command(
        id="editing.continue_list",
        handler=editing_actions.continue_list_item,
        description="Continue the current list item",
    ),
    Command(
        id="editing.bold",
        handler=editing_actions.toggle_bold,
        description="Wrap the selection in bold markers",
    ),
    Command(
        id="editing.italic",
        handler=editing_actions.toggle_italic,
        description="Wrap the selection in italic markers",
    ),
    Command(
        id="editing.strikethrough",
        handler=editing_actions.toggle_strikethrough,
        description="Wrap the selection in strikethrough markers",
    ),
    Command(
        id="editing.code",
        handler=editing_actions.toggle_code,
        description="Wrap the selection in inline code markers",
    ),
    Command(
        id="find.open",
        handler=find_actions.open_find,
        description="Show the find bar",
    ),
    Command(
        id="find.close",
        handler=find_actions.close_find,
        description="Hide the find bar",
    ),
    Command(
        id="find.next",
        handler=find_actions.find_next,
        description="Go to the next match",
    ),
    Command(
        id="find.previous",
        handler=find_actions.find_previous,
        description="Go to the previous match",
    ),
    Command(
        id="find.replace",
        handler=find_actions.replace_current,
        description="Replace the current match",
    ),
    Command(
        id="find.replace_all",
        handler=find_actions.replace_all,
        description="Replace every match",
    ),
    Command(
        id="find.toggle_case",
        handler=find_actions.toggle_case_sensitive,
        description="Toggle case-sensitive matching",
    ),
)


def _bind(
    binding_id: str,
    scope: str,
    combo: str,
    command_id: str,
    description: str,
    *,
    when: Sequence[str] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        scope=scope,
        key=combo,
        command_id=command_id,
        description=description,
        when=tuple(when),  # type: ignore[arg-type]
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("global.toggle_view_mode", "global", "ctrl+e", "core.toggle_view_mode", "Toggle read/edit"),
    _bind("global.toggle_layout", "global", "ctrl+backslash", "core.toggle_layout", "Toggle split layout"),
    _bind("global.toggle_scroll_sync", "global", "ctrl+y", "core.toggle_scroll_sync", "Toggle scroll sync"),
    _bind("global.new_document", "global", "ctrl+n", "core.new_document", "New document"),
    _bind("global.open_document", "global", "ctrl+o", "core.open_document", "Open"),
    _bind("global.save_document", "global", "ctrl+s", "core.save_document", "Save"),
    _bind("global.save_document_as", "global", "ctrl+shift+s", "core.save_document_as", "Save as"),
    _bind("global.save_document_as_f12", "global", "f12", "core.save_document_as", "Save as"),
    _bind("global.discard_changes", "global", "ctrl+shift+z", "core.discard_changes", "Discard changes", when=("dirty",)),
    _bind("global.open_find", "global", "ctrl+f", "find.open", "Find"),
    _bind("global.find_next", "global", "f3", "find.next", "Next match", when=("find_open",)),
    _bind("global.find_previous", "global", "shift+f3", "find.previous", "Previous match", when=("find_open",)),
    _bind("global.close_find", "global", "escape", "find.close", "Close find", when=("find_open",)),
    _bind("editing.indent", "editing", "tab", "editing.indent", "Indent", when=("edit_mode",)),
    _bind("editing.outdent", "editing", "shift+tab", "editing.outdent", "Outdent", when=("edit_mode",)),
    _bind("editing.continue_list", "editing", "enter", "editing.continue_list", "Continue list", when=("edit_mode",)),
    _bind("editing.bold", "editing", "ctrl+b", "editing.bold", "Bold", when=("edit_mode",)),
    # Terminals deliver ctrl+i as tab, alt+i is the reachable alias.
    _bind("editing.italic", "editing", "ctrl+i", "editing.italic", "Italic", when=("edit_mode",)),
    _bind("editing.italic_alt", "editing", "alt+i", "editing.italic", "Italic", when=("edit_mode",)),
    _bind("editing.strikethrough", "editing", "alt+x", "editing.strikethrough", "Strikethrough", when=("edit_mode",)),
    _bind("editing.code", "editing", "alt+c", "editing.code", "Inline code", when=("edit_mode",)),
    _bind("find.close", "find", "escape", "find.close", "Close find"),
    _bind("find.next_enter", "find", "enter", "find.next", "Next match"),
    _bind("find.next_f3", "find", "f3", "find.next", "Next match"),
    _bind("find.previous_enter", "find", "shift+enter", "find.previous", "Previous match"),
    _bind("find.previous_f3", "find", "shift+f3", "find.previous", "Previous match"),
    _bind("find.replace", "find", "ctrl+r", "find.replace", "Replace"),
    _bind("find.replace_all", "find", "alt+r", "find.replace_all", "Replace all"),
    _bind("find.toggle_case", "find", "alt+c", "find.toggle_case", "Match case"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    extra_bindings: Iterable[Binding] = (),
    exclude_bindings: Sequence[str] = (),
) -> None:
    """Register the built-in commands and bindings, then ``extra_bindings``."""

    for command in DEFAULT_COMMANDS:
        registry.add_command(command)
    skipped = set(exclude_bindings)
    for binding in DEFAULT_BINDINGS:
        if binding.id not in skipped:
            registry.bind(binding)
    for binding in extra_bindings:
        registry.bind(binding)


__all__ = ["DEFAULT_BINDINGS", "DEFAULT_COMMANDS", "load_default_keymaps"]
