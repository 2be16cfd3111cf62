"""Environment-driven editor settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Literal, Optional

ENV_PREFIX = "MARK_IT_DOWN_"

Layout = Literal["single", "split"]

_LAYOUTS = ("single", "split")


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, fallback: int) -> int:
    value = env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Knobs shared by the workspace and the Textual host."""

    scroll_sync: bool = True
    case_sensitive: bool = False
    layout: Layout = "single"
    find_debounce_ms: int = 120

    def __post_init__(self) -> None:
        if self.layout not in _LAYOUTS:
            raise ValueError(f"Unknown layout '{self.layout}'")
        if self.find_debounce_ms < 0:
            raise ValueError("find_debounce_ms cannot be negative")

    @classmethod
    def from_env(cls) -> "EditorSettings":
        layout = (env("LAYOUT") or "single").strip().lower()
        if layout not in _LAYOUTS:
            layout = "single"
        return cls(
            scroll_sync=env_flag("SCROLL_SYNC", True),
            case_sensitive=env_flag("CASE_SENSITIVE", False),
            layout=layout,  # type: ignore[arg-type]
            find_debounce_ms=max(0, _env_int("FIND_DEBOUNCE_MS", 120)),
        )

    def with_overrides(self, **changes: object) -> "EditorSettings":
        cleaned = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **cleaned)


__all__ = ["ENV_PREFIX", "EditorSettings", "Layout", "env", "env_flag"]
