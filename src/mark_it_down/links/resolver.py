"""Classify and resolve link/image targets relative to the open document."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

AssetBridge = Callable[[str], Optional[str]]

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".bmp", ".ico", ".avif"}
)

_NETWORK_SCHEME = re.compile(r"^(?:https?|ftps?|mailto|wss?):", re.IGNORECASE)
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:[\\/]")


class LinkKind(str, Enum):
    EXTERNAL = "external"
    ANCHOR = "anchor"
    MARKDOWN = "markdown"
    IMAGE = "image"
    LOCAL = "local"


def _strip_suffix_noise(target: str) -> str:
    return target.split("#", 1)[0].split("?", 1)[0]


def classify_link(target: str) -> LinkKind:
    cleaned = target.strip()
    if _NETWORK_SCHEME.match(cleaned):
        return LinkKind.EXTERNAL
    if cleaned.startswith("#"):
        return LinkKind.ANCHOR
    bare = _strip_suffix_noise(cleaned)
    # only a lowercase .md suffix opens in the editor
    if bare.endswith(".md"):
        return LinkKind.MARKDOWN
    dot = bare.rfind(".")
    if dot != -1 and bare[dot:].lower() in IMAGE_EXTENSIONS:
        return LinkKind.IMAGE
    return LinkKind.LOCAL


def detect_separator(path: str) -> str:
    if "\\" in path and "/" not in path:
        return "\\"
    return "/"


def is_absolute(target: str) -> bool:
    return target.startswith(("/", "\\")) or bool(_DRIVE_PREFIX.match(target))


def resolve_target(target: str, document_path: Optional[str]) -> str:
    """Join ``target`` onto the document's directory using the path's own separator."""

    kind = classify_link(target)
    if kind in (LinkKind.EXTERNAL, LinkKind.ANCHOR):
        return target
    if not document_path or is_absolute(target):
        return target

    separator = detect_separator(document_path)
    if separator not in document_path:
        return target
    directory = document_path.rsplit(separator, 1)[0]

    relative = target[2:] if target.startswith(("./", ".\\")) else target
    if separator == "\\":
        relative = relative.replace("/", "\\")
    if not directory:
        return f"{separator}{relative}"
    return f"{directory}{separator}{relative}"


@dataclass(frozen=True, slots=True)
class ResolvedLink:
    original: str
    kind: LinkKind
    target: str
    reference: Optional[str]

    @property
    def broken(self) -> bool:
        return self.reference is None


class LinkResolver:
    """Resolves targets for the document currently shown in the preview.

    Local images go through ``asset_bridge`` so the renderer receives a
    loadable reference; a ``None`` reference marks the image as broken.
    """

    def __init__(
        self,
        *,
        document_path: Optional[str] = None,
        asset_bridge: AssetBridge | None = None,
    ) -> None:
        self.document_path = document_path
        self._asset_bridge = asset_bridge

    def resolve(self, target: str) -> ResolvedLink:
        kind = classify_link(target)
        resolved = resolve_target(target, self.document_path)
        reference: Optional[str] = resolved
        if kind is LinkKind.IMAGE and self._asset_bridge is not None:
            reference = self._asset_bridge(resolved)
        return ResolvedLink(original=target, kind=kind, target=resolved, reference=reference)

    def resolve_image(self, source: str) -> ResolvedLink:
        """Like :meth:`resolve` but always treats ``source`` as an image."""

        if classify_link(source) is LinkKind.EXTERNAL:
            return ResolvedLink(source, LinkKind.EXTERNAL, source, source)
        resolved = resolve_target(source, self.document_path)
        reference = self._asset_bridge(resolved) if self._asset_bridge else resolved
        return ResolvedLink(source, LinkKind.IMAGE, resolved, reference)


__all__ = [
    "AssetBridge",
    "IMAGE_EXTENSIONS",
    "LinkKind",
    "LinkResolver",
    "ResolvedLink",
    "classify_link",
    "detect_separator",
    "is_absolute",
    "resolve_target",
]
