"""Host boundary for file access, asset lookup, and external URLs."""

from __future__ import annotations

import webbrowser
from pathlib import Path
from typing import Callable, Literal, Optional, Protocol

from mark_it_down.runtime import telemetry

PathPurpose = Literal["open", "save_as"]
PathCallback = Callable[[Optional[str]], None]
PathPrompt = Callable[[PathPurpose, Optional[str], PathCallback], None]

OPEN_EXTENSIONS: tuple[str, ...] = (".md", ".markdown", ".txt")


class DocumentIOError(RuntimeError):
    """Raised when a document cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class DocumentHost(Protocol):
    """Collaborators the workspace needs from its embedding host."""

    def choose_path(
        self, purpose: PathPurpose, suggested: Optional[str], callback: PathCallback
    ) -> None:
        """Ask the user for a path; ``callback(None)`` means cancelled."""
        ...

    def read_document(self, path: str) -> str:
        """Return the whole file as text or raise :class:`DocumentIOError`."""
        ...

    def write_document(self, path: str, text: str) -> bool:
        """Persist the whole text; ``False`` reports a failed write."""
        ...

    def resolve_asset_path(self, absolute_path: str) -> Optional[str]:
        """Map a local file to something the renderer can load, ``None`` if broken."""
        ...

    def open_external(self, url: str) -> bool:
        """Hand a URL to the platform."""
        ...


def _cancel_prompt(
    purpose: PathPurpose, suggested: Optional[str], callback: PathCallback
) -> None:
    del purpose, suggested
    callback(None)


class FileSystemHost:
    """UTF-8 file access on the local filesystem."""

    def __init__(
        self,
        *,
        prompt: PathPrompt | None = None,
        encoding: str = "utf-8",
        logger_name: str = "mark_it_down.store",
    ) -> None:
        self._prompt = prompt or _cancel_prompt
        self.encoding = encoding
        self._logger_name = logger_name

    def choose_path(
        self, purpose: PathPurpose, suggested: Optional[str], callback: PathCallback
    ) -> None:
        self._prompt(purpose, suggested, callback)

    def read_document(self, path: str) -> str:
        target = Path(path).expanduser()
        with telemetry.span(
            "store::read",
            logger_name=self._logger_name,
            metadata={"path": str(target)},
        ):
            try:
                return target.read_text(encoding=self.encoding)
            except (OSError, UnicodeDecodeError) as exc:
                raise DocumentIOError(f"Cannot read {target}: {exc}", path=path) from exc

    def write_document(self, path: str, text: str) -> bool:
        target = Path(path).expanduser()
        with telemetry.span(
            "store::write",
            logger_name=self._logger_name,
            metadata={"path": str(target), "chars": len(text)},
        ) as handle:
            try:
                target.write_text(text, encoding=self.encoding)
            except OSError as exc:
                handle.fail(str(exc))
                return False
            return True

    def resolve_asset_path(self, absolute_path: str) -> Optional[str]:
        candidate = Path(absolute_path).expanduser()
        if not candidate.is_file():
            return None
        return candidate.resolve().as_uri()

    def open_external(self, url: str) -> bool:
        telemetry.record_event(
            "store.open_external", data={"url": url}, logger_name=self._logger_name
        )
        return webbrowser.open(url)


def is_openable(path: str) -> bool:
    return Path(path).suffix.lower() in OPEN_EXTENSIONS


__all__ = [
    "DocumentHost",
    "DocumentIOError",
    "FileSystemHost",
    "OPEN_EXTENSIONS",
    "PathCallback",
    "PathPrompt",
    "PathPurpose",
    "is_openable",
]
