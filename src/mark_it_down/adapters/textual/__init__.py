"""Textual host: controller plus the runnable app."""

from .controller import TextualUIHooks, TextualWorkspaceAdapter

__all__ = ["TextualUIHooks", "TextualWorkspaceAdapter"]
