from __future__ import annotations

from typing import Dict, List, Optional

from mark_it_down.document import DocumentIOError
from mark_it_down.document.store import PathCallback, PathPurpose


class FakeHost:
    """In-memory host; prompts answer from ``answers`` immediately."""

    def __init__(self, files: Optional[Dict[str, str]] = None) -> None:
        self.files: Dict[str, str] = dict(files or {})
        self.answers: List[Optional[str]] = []
        self.prompts: List[tuple[PathPurpose, Optional[str]]] = []
        self.opened_urls: List[str] = []
        self.fail_writes = False
        self.assets: Dict[str, str] = {}

    def choose_path(
        self, purpose: PathPurpose, suggested: Optional[str], callback: PathCallback
    ) -> None:
        self.prompts.append((purpose, suggested))
        callback(self.answers.pop(0) if self.answers else None)

    def read_document(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError as exc:
            raise DocumentIOError(f"Cannot read {path}", path=path) from exc

    def write_document(self, path: str, text: str) -> bool:
        if self.fail_writes:
            return False
        self.files[path] = text
        return True

    def resolve_asset_path(self, absolute_path: str) -> Optional[str]:
        return self.assets.get(absolute_path)

    def open_external(self, url: str) -> bool:
        self.opened_urls.append(url)
        return True
