"""Workspace coordinating the document, find bar, views, and key dispatch."""

from __future__ import annotations

from typing import Dict, Literal, Optional

from mark_it_down.context import CommandContext, CommandResult, EventBus, KeyInput
from mark_it_down.document import (
    BufferDelta,
    Document,
    DocumentHost,
    DocumentIOError,
    EditorBuffer,
    Selection,
)
from mark_it_down.find import FindEngine
from mark_it_down.keymaps import (
    KeymapMatch,
    KeymapRegistry,
    KeymapResolver,
    load_default_keymaps,
)
from mark_it_down.links import LinkKind, LinkResolver
from mark_it_down.preview import HighlightQuery
from mark_it_down.runtime import telemetry
from mark_it_down.scroll import ScrollMetrics, ScrollSyncController, Side
from mark_it_down.settings import EditorSettings, Layout

ViewMode = Literal["read", "edit"]

GLOBAL_SCOPE = "global"
EDITING_SCOPE = "editing"
FIND_SCOPE = "find"

_SCOPES_BY_ORIGIN: Dict[str, tuple[str, ...]] = {
    "find": (FIND_SCOPE, GLOBAL_SCOPE),
    "raw": (EDITING_SCOPE, GLOBAL_SCOPE),
    "rendered": (GLOBAL_SCOPE,),
    "app": (GLOBAL_SCOPE,),
}


class Workspace:
    """Owns the single open document and everything the host renders around it.

    Keys are resolved against the scopes active for the view that produced
    them, most specific first. Whatever mutates the buffer recomputes the
    find matches afterwards and notifies the host through :attr:`bus`:

    ``buffer.changed``
        the text was replaced by the core; payload is a ``BufferDelta``.
    ``view.changed``
        view mode or layout changed; payload is ``{"view_mode", "layout"}``.
    ``find.changed``
        find bar state changed; payload is ``{"open", "pattern", "status"}``.
    ``find.navigate``
        the current match moved; payload is the match ``Selection``.
    ``find.reveal``
        the current match moved while only the rendered view is shown; payload
        is ``{"pattern", "case_sensitive", "index"}`` and the host scrolls to its
        own rendering of the ``index``-th occurrence.
    ``status``
        a short human readable message.
    """

    def __init__(
        self,
        host: DocumentHost,
        *,
        settings: EditorSettings | None = None,
        buffer: EditorBuffer | None = None,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        bus: EventBus | None = None,
    ) -> None:
        self.host = host
        self.settings = settings or EditorSettings()
        self.logger = telemetry.get_logger("mark_it_down.workspace")
        self.buffer = buffer or EditorBuffer()
        self.bus = bus or EventBus()
        self.find = FindEngine(
            case_sensitive=self.settings.case_sensitive,
            logger_name="mark_it_down.find",
        )
        self.scroll = ScrollSyncController(
            enabled=self.settings.scroll_sync, logger_name="mark_it_down.scroll"
        )
        self.links = LinkResolver(
            document_path=self.buffer.document.path,
            asset_bridge=host.resolve_asset_path,
        )
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="mark_it_down.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="mark_it_down.keymaps"
        )
        self.view_mode: ViewMode = "read"
        self.layout: Layout = self.settings.layout
        self.find_open = False
        self.replace_text = ""
        self.status_message = ""
        self.context = CommandContext(
            buffer=self.buffer, find=self.find, bus=self.bus, workspace=self
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self._sync_layout()

    # ------------------------------------------------------------------
    # key dispatch
    # ------------------------------------------------------------------
    def active_scopes(self, origin: str) -> tuple[str, ...]:
        return _SCOPES_BY_ORIGIN.get(origin, (GLOBAL_SCOPE,))

    def flags(self) -> Dict[str, bool]:
        return {
            "edit_mode": self.view_mode == "edit",
            "split": self.layout == "split",
            "find_open": self.find_open,
            "dirty": self.buffer.is_dirty,
            "scroll_sync": self.scroll.enabled,
        }

    def handle_key(self, key: KeyInput) -> CommandResult:
        """Resolve ``key`` and run the bound action.

        ``consumed=False`` means no binding applied and the host should run
        its default behaviour for the key.
        """

        match = self.keymap_resolver.resolve(
            self.active_scopes(key.origin), key.token, self.flags()
        )
        if match is None:
            return CommandResult(consumed=False, status="miss")
        return self._execute_match(match)

    def run_action(self, action_id: str) -> CommandResult:
        """Run a command directly, bypassing key resolution (menus, buttons)."""

        command = self.keymap_registry.command(action_id)
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"command": command.id},
        ):
            outcome = command(self.context, None)
        return self._as_result(outcome)

    def _execute_match(self, match: KeymapMatch) -> CommandResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "command": match.command.id},
        ):
            outcome = match.command(self.context, match)
        return self._as_result(outcome)

    @staticmethod
    def _as_result(outcome: object) -> CommandResult:
        if isinstance(outcome, CommandResult):
            return outcome
        return CommandResult(consumed=True)

    # ------------------------------------------------------------------
    # document lifecycle
    # ------------------------------------------------------------------
    def new_document(self) -> None:
        self._load(Document.new(), label="new")
        self.set_view_mode("edit")
        self._notify("New document")

    def request_open(self) -> CommandResult:
        self.host.choose_path("open", self.buffer.document.path, self._open_chosen)
        return CommandResult(consumed=True, status="prompt", message="open")

    def _open_chosen(self, path: Optional[str]) -> None:
        if path:
            self.open_path(path)

    def open_path(self, path: str) -> CommandResult:
        try:
            text = self.host.read_document(path)
        except DocumentIOError as exc:
            return self._io_error("document.open_failed", exc, path)
        self._load(Document.opened(text, path), label="open")
        self._notify(f"Opened {self.buffer.document.file_name}")
        return CommandResult(consumed=True, status="document_opened", message=path)

    def save(self) -> CommandResult:
        path = self.buffer.document.path
        if path is None:
            return self.request_save_as()
        return self.save_as(path)

    def request_save_as(self) -> CommandResult:
        document = self.buffer.document
        suggested = document.path or document.file_name
        self.host.choose_path("save_as", suggested, self._save_chosen)
        return CommandResult(consumed=True, status="prompt", message="save_as")

    def _save_chosen(self, path: Optional[str]) -> None:
        if path:
            self.save_as(path)

    def save_as(self, path: str) -> CommandResult:
        text = self.buffer.text
        if not self.host.write_document(path, text):
            return self._io_error(
                "document.save_failed", DocumentIOError(f"Cannot write {path}", path=path), path
            )
        self.buffer.mark_saved(path)
        self.links.document_path = path
        self._notify(f"Saved {self.buffer.document.file_name}")
        return CommandResult(consumed=True, status="document_saved", message=path)

    def discard(self) -> None:
        delta = self.buffer.discard()
        self._after_replace(delta)
        self._notify("Changes discarded")

    def apply_host_edit(self, text: str, selection: Selection) -> None:
        """Record text typed directly into the raw view.

        Matches are not recomputed here; the host calls
        :meth:`refresh_matches` once typing settles, and navigation rescans
        first if it runs before that.
        """

        self.buffer.apply(text, selection, label="host_edit")

    def set_selection(self, selection: Selection) -> Selection:
        return self.buffer.set_selection(selection)

    def commit(self, delta: BufferDelta) -> None:
        """Publish a core-made buffer change to the host."""

        self._after_replace(delta)

    def _load(self, document: Document, *, label: str) -> None:
        delta = self.buffer.load(document, label=label)
        self.links.document_path = document.path
        self._after_replace(delta)

    def _after_replace(self, delta: BufferDelta) -> None:
        self.refresh_matches()
        self.bus.emit("buffer.changed", delta)

    def _io_error(self, event: str, exc: DocumentIOError, path: str) -> CommandResult:
        telemetry.record_event(
            event,
            level="error",
            data={"path": path, "error": str(exc)},
            logger_name="mark_it_down.workspace",
        )
        self._notify(str(exc))
        return CommandResult(consumed=True, status="io_error", message=str(exc))

    # ------------------------------------------------------------------
    # view mode and layout
    # ------------------------------------------------------------------
    def set_view_mode(self, mode: ViewMode) -> None:
        if mode == self.view_mode:
            return
        self.view_mode = mode
        telemetry.record_event(
            "workspace.view_mode", data={"mode": mode}, logger_name="mark_it_down.workspace"
        )
        self._sync_layout()

    def toggle_view_mode(self) -> ViewMode:
        self.set_view_mode("read" if self.view_mode == "edit" else "edit")
        return self.view_mode

    def toggle_layout(self) -> Layout:
        self.layout = "single" if self.layout == "split" else "split"
        telemetry.record_event(
            "workspace.layout", data={"layout": self.layout}, logger_name="mark_it_down.workspace"
        )
        self._sync_layout()
        return self.layout

    def toggle_scroll_sync(self) -> bool:
        self.scroll.enabled = not self.scroll.enabled
        self._notify(f"Scroll sync {'on' if self.scroll.enabled else 'off'}")
        return self.scroll.enabled

    @property
    def both_views_visible(self) -> bool:
        return self.layout == "split" and self.view_mode == "edit"

    def _sync_layout(self) -> None:
        self.scroll.layout_split = self.both_views_visible
        self.bus.emit("view.changed", {"view_mode": self.view_mode, "layout": self.layout})

    # ------------------------------------------------------------------
    # find and replace
    # ------------------------------------------------------------------
    def open_find(self) -> None:
        self.find_open = True
        self.refresh_matches()

    def close_find(self) -> None:
        self.find_open = False
        self._emit_find()

    def set_find_pattern(self, pattern: str) -> None:
        self.find.set_pattern(pattern)
        self.refresh_matches()

    def set_case_sensitive(self, case_sensitive: bool) -> None:
        self.find.set_case_sensitive(case_sensitive)
        self.refresh_matches()

    def set_replace_text(self, text: str) -> None:
        self.replace_text = text

    def refresh_matches(self) -> None:
        self.find.recompute(self.buffer.text, version=self.buffer.document.version)
        self._emit_find()

    def _ensure_fresh_matches(self) -> None:
        # typing in the raw view defers the rescan; never act on stale offsets
        if self.find.version != self.buffer.document.version:
            self.refresh_matches()

    def find_next(self) -> Optional[int]:
        self._ensure_fresh_matches()
        offset = self.find.next()
        self._navigate()
        return offset

    def find_previous(self) -> Optional[int]:
        self._ensure_fresh_matches()
        offset = self.find.previous()
        self._navigate()
        return offset

    def replace_current(self) -> bool:
        self._ensure_fresh_matches()
        outcome = self.find.replace_current(self.buffer.text, self.replace_text)
        if outcome is None:
            return False
        text, selection = outcome
        delta = self.buffer.apply(text, selection, label="replace")
        self._after_replace(delta)
        return True

    def replace_all(self) -> int:
        text, count = self.find.replace_all(self.buffer.text, self.replace_text)
        if count:
            selection = self.buffer.selection.clamp(len(text))
            delta = self.buffer.apply(text, selection, label="replace_all")
            self._after_replace(delta)
        self._notify(f"Replaced {count} occurrence{'s' if count != 1 else ''}")
        return count

    def highlight_query(self) -> HighlightQuery:
        if not self.find_open:
            return HighlightQuery("")
        return HighlightQuery(self.find.pattern, self.find.case_sensitive)

    def _navigate(self) -> None:
        span = self.find.current_span
        if span is not None:
            if self.view_mode == "edit":
                self.buffer.set_selection(span)
                self.bus.emit("find.navigate", span)
            else:
                self.bus.emit(
                    "find.reveal",
                    {
                        "pattern": self.find.pattern,
                        "case_sensitive": self.find.case_sensitive,
                        "index": self.find.matches.current_index,
                    },
                )
        self._emit_find()

    def _emit_find(self) -> None:
        self.bus.emit(
            "find.changed",
            {
                "open": self.find_open,
                "pattern": self.find.pattern,
                "status": self.find.status_label(),
            },
        )

    # ------------------------------------------------------------------
    # links and scrolling
    # ------------------------------------------------------------------
    def follow_link(self, href: str) -> CommandResult:
        """Act on a link clicked in the rendered view."""

        link = self.links.resolve(href)
        telemetry.record_event(
            "workspace.follow_link",
            data={"href": href, "kind": link.kind.value},
            logger_name="mark_it_down.workspace",
        )
        if link.kind is LinkKind.ANCHOR:
            return CommandResult(consumed=False, status="anchor", message=href)
        if link.kind is LinkKind.EXTERNAL:
            opened = self.host.open_external(link.target)
            return CommandResult(consumed=True, status="external" if opened else "noop")
        if link.kind is LinkKind.MARKDOWN:
            result = self.open_path(link.target)
            if result.status == "io_error":
                return self.request_open()
            return result
        if self.host.open_external(link.target):
            return CommandResult(consumed=True, status="external", message=link.target)
        return self.request_open()

    def pointer_entered(self, side: Side) -> None:
        self.scroll.mark_active(side)

    def sync_scroll(
        self,
        side: Side,
        source: ScrollMetrics,
        target: ScrollMetrics,
        write,
    ) -> Optional[float]:
        return self.scroll.sync(side, source, target, write)

    # ------------------------------------------------------------------
    # status
    # ------------------------------------------------------------------
    def title(self) -> str:
        marker = "*" if self.buffer.is_dirty else ""
        return f"{marker}{self.buffer.document.file_name}"

    def status_line(self) -> str:
        parts = [self.title(), self.view_mode, self.layout]
        if self.both_views_visible:
            parts.append(f"sync {'on' if self.scroll.enabled else 'off'}")
        if self.find_open:
            parts.append(f"find {self.find.status_label()}")
        if self.status_message:
            parts.append(self.status_message)
        return " | ".join(parts)

    def _notify(self, message: str) -> None:
        self.status_message = message
        self.bus.emit("status", message)


__all__ = ["EDITING_SCOPE", "FIND_SCOPE", "GLOBAL_SCOPE", "ViewMode", "Workspace"]
