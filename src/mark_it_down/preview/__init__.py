"""Rendered-view hooks for the external Markdown parser."""

from .renderer import HighlightQuery, build_parser, match_blocks, render_html, reveal_block

__all__ = ["HighlightQuery", "build_parser", "match_blocks", "render_html", "reveal_block"]
