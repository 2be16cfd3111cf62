"""Executable Textual app hosting the Markdown editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from markdown_it import MarkdownIt
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import Footer, Header, Input, Label, Markdown, Static, TextArea
from textual.widgets.text_area import Selection as TextAreaSelection

from mark_it_down.context import Origin
from mark_it_down.document import (
    BufferMirror,
    FileSystemHost,
    Selection,
    is_openable,
    location_for_offset,
    offset_for_location,
)
from mark_it_down.document.store import PathCallback, PathPurpose
from mark_it_down.preview import build_parser
from mark_it_down.runtime import telemetry
from mark_it_down.scroll import ScrollMetrics, Side
from mark_it_down.settings import EditorSettings
from mark_it_down.workspace import Workspace

from .controller import TextualUIHooks, TextualWorkspaceAdapter

_FRESH_LABELS = frozenset({"load", "open", "new"})


class PaneEntered(Message):
    """Posted when the pointer or focus enters one of the two views."""

    def __init__(self, side: Side) -> None:
        super().__init__()
        self.side = side


def _metrics(widget) -> ScrollMetrics:
    return ScrollMetrics(
        offset=float(widget.scroll_y),
        scroll_height=float(widget.virtual_size.height),
        client_height=float(widget.scrollable_content_region.height),
    )


class RawView(TextArea):
    """Raw Markdown editor; keys go through the workspace keymap first."""

    def _on_key(self, event: events.Key) -> None:
        app = self.app
        if not isinstance(app, MarkItDownApp) or app.adapter is None:
            return
        result = app.adapter.handle_textual_key(
            event.key, character=event.character, origin="raw"
        )
        if result.consumed:
            # Keeps TextArea from also inserting the key.
            event.prevent_default()
            event.stop()

    def on_enter(self, event: events.Enter) -> None:
        del event
        self.post_message(PaneEntered("raw"))

    def on_focus(self, event: events.Focus) -> None:
        del event
        self.post_message(PaneEntered("raw"))


class RenderedView(VerticalScroll, can_focus=True):
    """Scrollable container around the rendered Markdown."""

    def __init__(self, markdown: Markdown, **kwargs) -> None:
        super().__init__(**kwargs)
        self.markdown = markdown

    def compose(self) -> ComposeResult:
        yield self.markdown

    def reveal(self, index: int) -> None:
        blocks = list(self.markdown.children)
        if blocks:
            target = blocks[min(index, len(blocks) - 1)]
            self.scroll_to_widget(target, animate=False, top=True)

    def on_enter(self, event: events.Enter) -> None:
        del event
        self.post_message(PaneEntered("rendered"))

    def on_focus(self, event: events.Focus) -> None:
        del event
        self.post_message(PaneEntered("rendered"))


class FindInput(Input):
    """Find bar input; escape, enter and F3 resolve in the find scope."""

    origin: Origin = "find"

    def _on_key(self, event: events.Key) -> None:
        app = self.app
        if not isinstance(app, MarkItDownApp) or app.adapter is None:
            return
        result = app.adapter.handle_textual_key(
            event.key, character=event.character, origin=self.origin
        )
        if result.consumed:
            event.prevent_default()
            event.stop()


class ReplaceInput(FindInput):
    pass


class PathPrompt(ModalScreen[Optional[str]]):
    """Asks for a file path; dismisses with ``None`` on escape."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    DEFAULT_CSS = """
    PathPrompt {
        align: center middle;
    }

    PathPrompt > Vertical {
        width: 70%;
        height: auto;
        border: round $accent;
        background: $surface;
        padding: 1 2;
    }
    """

    def __init__(self, purpose: PathPurpose, suggested: Optional[str]) -> None:
        super().__init__()
        self.purpose = purpose
        self.suggested = suggested or ""

    def compose(self) -> ComposeResult:
        title = "Open file" if self.purpose == "open" else "Save as"
        with Vertical():
            yield Label(title)
            yield Input(value=self.suggested, placeholder="path/to/file.md", id="path-input")
            yield Label("", id="path-error")

    def on_mount(self) -> None:
        self.query_one("#path-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        if value and self.purpose == "open" and not is_openable(value):
            self.query_one("#path-error", Label).update(
                "Expected a .md, .markdown or .txt file"
            )
            return
        self.dismiss(value or None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class MarkItDownApp(App[None]):
    """Textual host with a raw editor, a rendered preview and a find bar."""

    TITLE = "Mark It Down"

    CSS = """
    Screen {
        layout: vertical;
    }

    #panes {
        height: 1fr;
    }

    #raw-view {
        width: 1fr;
        border: round $accent;
    }

    #rendered-view {
        width: 1fr;
        border: round $primary;
        padding: 0 1;
    }

    #preview {
        height: auto;
    }

    #find-bar {
        height: 3;
        display: none;
    }

    #find-bar.open {
        display: block;
    }

    #find-input, #replace-input {
        width: 1fr;
    }

    #find-status {
        width: 12;
        content-align: center middle;
        height: 3;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        *,
        settings: EditorSettings | None = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or EditorSettings()
        self.initial_path = path
        self.host = FileSystemHost(prompt=self._prompt_path)
        self.workspace: Workspace | None = None
        self.adapter: TextualWorkspaceAdapter | None = None
        self._find_timer: Timer | None = None
        self._preview_pending = False
        self._pending_reveal: int | None = None
        self._markdown = Markdown(
            "", id="preview", parser_factory=self._parser_factory, open_links=False
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="find-bar"):
            yield FindInput(placeholder="Find", id="find-input")
            yield ReplaceInput(placeholder="Replace", id="replace-input")
            yield Static("0/0", id="find-status")
        with Horizontal(id="panes"):
            yield RawView(
                "",
                id="raw-view",
                soft_wrap=True,
                tab_behavior="indent",
            )
            yield RenderedView(self._markdown, id="rendered-view")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        self.workspace = Workspace(self.host, settings=self.settings)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            update_view=self._update_view,
            update_find=self._update_find,
            select_range=self._select_range,
            reveal_block=self._reveal_block,
            refresh_preview=self._schedule_preview,
            log=self.log,
        )
        self.adapter = TextualWorkspaceAdapter(self.workspace, hooks)
        raw = self.query_one(RawView)
        rendered = self.query_one(RenderedView)
        self.watch(raw, "scroll_y", lambda _value: self._on_scrolled("raw"), init=False)
        self.watch(
            rendered, "scroll_y", lambda _value: self._on_scrolled("rendered"), init=False
        )
        if self.initial_path:
            self.workspace.open_path(self.initial_path)

    # ------------------------------------------------------------------
    # keyboard and widget events
    # ------------------------------------------------------------------
    def on_key(self, event: events.Key) -> None:
        if self.adapter is None:
            return
        if isinstance(self.screen, ModalScreen):
            return
        if isinstance(self.focused, (RawView, FindInput)):
            return
        origin: Origin = "rendered" if isinstance(self.focused, RenderedView) else "app"
        result = self.adapter.handle_textual_key(
            event.key, character=event.character, origin=origin
        )
        if result.consumed:
            event.stop()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.adapter is None:
            return
        text = event.text_area.text
        changed = self.adapter.handle_text_changed(
            text, self._selection_from(event.text_area)
        )
        if changed:
            self._debounce_find()

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if self.adapter is None:
            return
        self.adapter.handle_selection(self._selection_from(event.text_area))

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.adapter is None:
            return
        if isinstance(event.input, ReplaceInput):
            self.adapter.set_replace_text(event.value)
        elif isinstance(event.input, FindInput):
            self.adapter.set_find_pattern(event.value)

    def on_pane_entered(self, message: PaneEntered) -> None:
        if self.adapter is not None:
            self.adapter.handle_pointer_enter(message.side)

    def on_markdown_link_clicked(self, event: Markdown.LinkClicked) -> None:
        if self.adapter is None:
            return
        result = self.adapter.handle_link(event.href)
        if result.status == "anchor":
            self._markdown.goto_anchor(event.href.lstrip("#"))

    # ------------------------------------------------------------------
    # hooks
    # ------------------------------------------------------------------
    def _update_buffer(self, mirror: BufferMirror) -> None:
        raw = self.query_one(RawView)
        if mirror.attributes.get("label") in _FRESH_LABELS:
            raw.load_text(mirror.text)
        elif raw.text != mirror.text:
            raw.replace(
                mirror.text,
                (0, 0),
                raw.document.end,
                maintain_selection_offset=False,
            )
        self._select_range(mirror.selection)

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)
        if self.workspace is not None:
            self.sub_title = self.workspace.title()

    def _update_view(self, view_mode: str, layout: str) -> None:
        raw = self.query_one(RawView)
        rendered = self.query_one(RenderedView)
        editing = view_mode == "edit"
        raw.display = editing
        rendered.display = not editing or layout == "split"
        if editing:
            raw.focus()
        else:
            rendered.focus()

    def _update_find(self, is_open: bool, pattern: str, status: str) -> None:
        del pattern
        bar = self.query_one("#find-bar", Horizontal)
        was_open = bar.has_class("open")
        bar.set_class(is_open, "open")
        self.query_one("#find-status", Static).update(status)
        if is_open and not was_open:
            self.query_one("#find-input", FindInput).focus()
        elif was_open and not is_open and self.workspace is not None:
            self._update_view(self.workspace.view_mode, self.workspace.layout)

    def _select_range(self, selection: Selection) -> None:
        raw = self.query_one(RawView)
        text = raw.text
        raw.selection = TextAreaSelection(
            location_for_offset(text, selection.start),
            location_for_offset(text, selection.end),
        )

    def _reveal_block(self, index: int) -> None:
        # applied once the preview has re-rendered with the new highlight
        self._pending_reveal = index
        self._schedule_preview()

    def _apply_reveal(self) -> None:
        index, self._pending_reveal = self._pending_reveal, None
        if index is not None:
            self.query_one(RenderedView).reveal(index)

    def _schedule_preview(self) -> None:
        if self._preview_pending:
            return
        self._preview_pending = True
        self.call_later(self._render_preview)

    async def _render_preview(self) -> None:
        self._preview_pending = False
        if self.workspace is None:
            return
        await self._markdown.update(self.workspace.buffer.text)
        if self._pending_reveal is not None:
            self.call_after_refresh(self._apply_reveal)

    def _parser_factory(self) -> MarkdownIt:
        if self.adapter is None:
            return build_parser()
        return self.adapter.parser_factory()

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _prompt_path(
        self, purpose: PathPurpose, suggested: Optional[str], callback: PathCallback
    ) -> None:
        self.push_screen(PathPrompt(purpose, suggested), callback)

    def _debounce_find(self) -> None:
        if self._find_timer is not None:
            self._find_timer.stop()
        delay = self.settings.find_debounce_ms / 1000.0
        self._find_timer = self.set_timer(delay, self._refresh_matches)

    def _refresh_matches(self) -> None:
        self._find_timer = None
        if self.adapter is not None:
            self.adapter.refresh_matches()

    def _on_scrolled(self, side: Side) -> None:
        if self.adapter is None:
            return
        raw = self.query_one(RawView)
        rendered = self.query_one(RenderedView)
        source, target = (raw, rendered) if side == "raw" else (rendered, raw)
        self.adapter.handle_scroll(
            side,
            _metrics(source),
            _metrics(target),
            lambda offset: target.scroll_to(y=offset, animate=False),
        )

    @staticmethod
    def _selection_from(text_area: TextArea) -> Selection:
        text = text_area.text
        start, end = text_area.selection
        return Selection(
            offset_for_location(text, start), offset_for_location(text, end)
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit Markdown with a live preview.")
    parser.add_argument("path", nargs="?", help="Markdown file to open")
    layout = parser.add_mutually_exclusive_group()
    layout.add_argument(
        "--split",
        dest="layout",
        action="store_const",
        const="split",
        default=None,
        help="Show the raw and rendered views side by side while editing",
    )
    layout.add_argument(
        "--single",
        dest="layout",
        action="store_const",
        const="single",
        help="Show one view at a time",
    )
    parser.add_argument(
        "--no-scroll-sync",
        dest="scroll_sync",
        action="store_const",
        const=False,
        default=None,
        help="Disable proportional scroll synchronization",
    )
    parser.add_argument(
        "--case-sensitive",
        dest="case_sensitive",
        action="store_const",
        const=True,
        default=None,
        help="Match case in the find bar",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default="quiet",
        help="quiet: warnings to MARK_IT_DOWN_LOG_FILE if set; debug: everything to a log file",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    settings = EditorSettings.from_env().with_overrides(
        layout=args.layout,
        scroll_sync=args.scroll_sync,
        case_sensitive=args.case_sensitive,
    )
    app = MarkItDownApp(settings=settings, path=args.path)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
