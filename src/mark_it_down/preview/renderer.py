"""markdown-it-py hooks: link interception and search highlighting.

The parser itself is external; this module only contributes two core rules
that run after inline parsing:

``intercept_links``  rewrites ``link_open``/``image`` targets through the
                     :class:`~mark_it_down.links.LinkResolver`.
``highlight_matches`` splits plain ``text`` tokens into ``mark_open`` /
                     ``text`` / ``mark_close`` runs around search matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Any, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from mark_it_down.find.engine import search
from mark_it_down.find.highlight import split_highlights
from mark_it_down.links.resolver import LinkKind, LinkResolver
from mark_it_down.runtime.telemetry import span

PARSER_PRESET = "gfm-like"


@dataclass(frozen=True, slots=True)
class HighlightQuery:
    pattern: str
    case_sensitive: bool = False

    def __bool__(self) -> bool:
        return bool(self.pattern)


def _intercept_links(resolver: LinkResolver):
    def rule(state: StateCore) -> None:
        for block in state.tokens:
            if block.type != "inline" or not block.children:
                continue
            for token in block.children:
                if token.type == "link_open":
                    href = str(token.attrGet("href") or "")
                    resolved = resolver.resolve(href)
                    token.meta["link_kind"] = resolved.kind.value
                    token.meta["original_href"] = href
                    if resolved.kind not in (LinkKind.EXTERNAL, LinkKind.ANCHOR):
                        token.attrSet("href", resolved.target)
                elif token.type == "image":
                    src = str(token.attrGet("src") or "")
                    resolved = resolver.resolve_image(src)
                    token.meta["broken"] = resolved.broken
                    token.meta["original_src"] = src
                    if resolved.reference is not None:
                        token.attrSet("src", resolved.reference)

    return rule


def _highlight_matches(query: HighlightQuery):
    def rule(state: StateCore) -> None:
        for block in state.tokens:
            if block.type != "inline" or not block.children:
                continue
            block.children = _split_children(block.children, query)

    return rule


def _split_children(children: Sequence[Token], query: HighlightQuery) -> list[Token]:
    result: list[Token] = []
    for token in children:
        if token.type != "text":
            result.append(token)
            continue
        segments = split_highlights(token.content, query.pattern, query.case_sensitive)
        if not any(segment.highlighted for segment in segments):
            result.append(token)
            continue
        for segment in segments:
            if not segment.highlighted:
                result.append(Token("text", "", 0, content=segment.text, level=token.level))
                continue
            result.append(Token("mark_open", "mark", 1, level=token.level))
            result.append(Token("text", "", 0, content=segment.text, level=token.level + 1))
            result.append(Token("mark_close", "mark", -1, level=token.level))
    return result


def _render_image(self: Any, tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
    token = tokens[idx]
    if token.meta.get("broken"):
        alt = self.renderInlineAsText(token.children or [], options, env)
        source = escape(str(token.meta.get("original_src", "")))
        return f'<span class="image-missing" title="{source}">{escape(alt)}</span>'
    return self.image(tokens, idx, options, env)


def build_parser(
    *,
    resolver: Optional[LinkResolver] = None,
    highlight: Optional[HighlightQuery] = None,
) -> MarkdownIt:
    """Return a parser with the editor's interception rules installed."""

    parser = MarkdownIt(PARSER_PRESET).enable(["table", "strikethrough"])
    if resolver is not None:
        parser.core.ruler.push("intercept_links", _intercept_links(resolver))
        parser.add_render_rule("image", _render_image)
    if highlight:
        parser.core.ruler.push("highlight_matches", _highlight_matches(highlight))
    return parser


def match_blocks(text: str, query: HighlightQuery) -> tuple[int, ...]:
    """Top-level block index of every rendered occurrence, in document order.

    Only rendered text counts, so matches inside link targets or emphasis
    markers are skipped.
    """

    if not query:
        return ()
    blocks: list[int] = []
    block = -1
    for token in build_parser().parse(text):
        if token.level == 0 and token.nesting >= 0:
            block += 1
        if token.type == "inline":
            contents = [
                child.content
                for child in token.children or ()
                if child.type in ("text", "code_inline")
            ]
        elif token.type in ("fence", "code_block"):
            contents = [token.content]
        else:
            continue
        for content in contents:
            hits = search(content, query.pattern, query.case_sensitive)
            blocks.extend([max(block, 0)] * len(hits))
    return tuple(blocks)


def reveal_block(text: str, query: HighlightQuery, index: int) -> Optional[int]:
    """Block holding the ``index``-th rendered occurrence, wrapping around."""

    blocks = match_blocks(text, query)
    if not blocks:
        return None
    return blocks[index % len(blocks)]


def render_html(
    text: str,
    *,
    resolver: Optional[LinkResolver] = None,
    highlight: Optional[HighlightQuery] = None,
) -> str:
    with span(
        "preview::render_html",
        metadata={"chars": len(text), "highlight": bool(highlight)},
    ):
        return build_parser(resolver=resolver, highlight=highlight).render(text)


__all__ = [
    "HighlightQuery",
    "PARSER_PRESET",
    "build_parser",
    "match_blocks",
    "render_html",
    "reveal_block",
]
