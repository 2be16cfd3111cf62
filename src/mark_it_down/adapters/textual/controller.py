"""Adapter that wires Workspace events into Textual UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from markdown_it import MarkdownIt

from mark_it_down.context import CommandResult, KeyInput, Origin
from mark_it_down.document import BufferDelta, BufferMirror, Selection
from mark_it_down.preview import HighlightQuery, build_parser, reveal_block
from mark_it_down.runtime import telemetry
from mark_it_down.scroll import ScrollMetrics, Side
from mark_it_down.workspace import Workspace


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    update_view: Callable[[str, str], None] = _noop
    update_find: Callable[[bool, str, str], None] = _noop
    select_range: Callable[[Selection], None] = _noop
    # Index of the top-level rendered block to scroll into view
    reveal_block: Callable[[int], None] = _noop
    refresh_preview: Callable[[], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional debug line sink, e.g. ``App.log``
    log: Callable[[str], None] = _noop


class TextualWorkspaceAdapter:
    """Bridges Workspace + bus events to a Textual-friendly surface."""

    def __init__(self, workspace: Workspace, hooks: TextualUIHooks) -> None:
        self.workspace = workspace
        self.hooks = hooks
        self.logger = telemetry.get_logger("mark_it_down.adapters.textual")
        self._subscribe_events()
        self._refresh_buffer()
        self.hooks.update_view(workspace.view_mode, workspace.layout)
        self._refresh_status()

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        origin: Origin = "app",
    ) -> CommandResult:
        """Translate a Textual key name (``ctrl+shift+s``) and dispatch it."""

        key_input = KeyInput.parse(key, origin=origin)
        key_input.text = character
        self._log_state("key ->", key=key_input.token, origin=origin)
        result = self.workspace.handle_key(key_input)
        if result.consumed:
            self._refresh_status()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def handle_text_changed(self, text: str, selection: Selection) -> bool:
        """Record an edit typed into the raw view; ``False`` when nothing changed."""

        if text == self.workspace.buffer.text:
            return False
        self.workspace.apply_host_edit(text, selection)
        self.hooks.refresh_preview()
        self._refresh_status()
        return True

    def handle_selection(self, selection: Selection) -> None:
        self.workspace.set_selection(selection)

    def refresh_matches(self) -> None:
        self.workspace.refresh_matches()

    def set_find_pattern(self, pattern: str) -> None:
        self.workspace.set_find_pattern(pattern)

    def set_replace_text(self, text: str) -> None:
        self.workspace.set_replace_text(text)

    def handle_pointer_enter(self, side: Side) -> None:
        self.workspace.pointer_entered(side)

    def handle_scroll(
        self,
        side: Side,
        source: ScrollMetrics,
        target: ScrollMetrics,
        write: Callable[[float], None],
    ) -> Optional[float]:
        return self.workspace.sync_scroll(side, source, target, write)

    def handle_link(self, href: str) -> CommandResult:
        result = self.workspace.follow_link(href)
        self._refresh_status()
        return result

    def parser_factory(self) -> MarkdownIt:
        """Parser for the rendered view, reflecting the current document and query."""

        return build_parser(
            resolver=self.workspace.links,
            highlight=self.workspace.highlight_query(),
        )

    def _subscribe_events(self) -> None:
        bus = self.workspace.bus
        for event in (
            "buffer.changed",
            "view.changed",
            "find.changed",
            "find.navigate",
            "find.reveal",
            "status",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        if name == "buffer.changed" and isinstance(payload, BufferDelta):
            self._refresh_buffer(label=payload.label)
            self.hooks.refresh_preview()
        elif name == "view.changed" and isinstance(payload, dict):
            self.hooks.update_view(str(payload["view_mode"]), str(payload["layout"]))
        elif name == "find.changed" and isinstance(payload, dict):
            self.hooks.update_find(
                bool(payload["open"]), str(payload["pattern"]), str(payload["status"])
            )
            self.hooks.refresh_preview()
        elif name == "find.navigate" and isinstance(payload, Selection):
            self.hooks.select_range(payload)
        elif name == "find.reveal" and isinstance(payload, dict):
            self._reveal(payload)
        self.hooks.handle_event(name, payload)
        self._refresh_status()

    def _reveal(self, payload: Dict[str, object]) -> None:
        index = payload.get("index")
        if not isinstance(index, int):
            return
        query = HighlightQuery(str(payload["pattern"]), bool(payload["case_sensitive"]))
        block = reveal_block(self.workspace.buffer.text, query, index)
        if block is not None:
            self.hooks.reveal_block(block)

    def _refresh_buffer(self, *, label: str = "sync") -> None:
        mirror = self.workspace.buffer.mirror(attributes={"label": label})
        self.hooks.update_buffer(mirror)

    def _refresh_status(self) -> None:
        self.hooks.update_status(self.workspace.status_line())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        workspace = self.workspace
        return {
            "view_mode": workspace.view_mode,
            "layout": workspace.layout,
            "selection": workspace.buffer.selection.as_tuple(),
            "version": workspace.buffer.document.version,
            "find": workspace.find.status_label() if workspace.find_open else None,
        }


__all__ = ["TextualUIHooks", "TextualWorkspaceAdapter"]
