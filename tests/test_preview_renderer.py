from __future__ import annotations

from mark_it_down.links import LinkResolver
from mark_it_down.preview import (
    HighlightQuery,
    build_parser,
    match_blocks,
    render_html,
    reveal_block,
)


def make_resolver(*, missing: bool = False) -> LinkResolver:
    return LinkResolver(
        document_path="/docs/readme.md",
        asset_bridge=lambda path: None if missing else f"file://{path}",
    )


def test_plain_render_without_hooks() -> None:
    assert render_html("**hi**") == "<p><strong>hi</strong></p>\n"


def test_relative_links_are_resolved() -> None:
    html = render_html("[notes](notes.md)", resolver=make_resolver())

    assert 'href="/docs/notes.md"' in html


def test_external_links_are_untouched() -> None:
    html = render_html("[site](https://example.com/a)", resolver=make_resolver())

    assert 'href="https://example.com/a"' in html


def test_images_use_asset_reference() -> None:
    html = render_html("![cat](cat.png)", resolver=make_resolver())

    assert 'src="file:///docs/cat.png"' in html


def test_broken_images_render_placeholder() -> None:
    html = render_html("![a cat](cat.png)", resolver=make_resolver(missing=True))

    assert '<span class="image-missing" title="cat.png">a cat</span>' in html
    assert "<img" not in html


def test_search_matches_are_highlighted() -> None:
    html = render_html("hello world", highlight=HighlightQuery("WORLD"))

    assert html == "<p>hello <mark>world</mark></p>\n"


def test_case_sensitive_highlight() -> None:
    html = render_html("World world", highlight=HighlightQuery("world", case_sensitive=True))

    assert html == "<p>World <mark>world</mark></p>\n"


def test_highlight_does_not_touch_link_targets() -> None:
    html = render_html("[find me](find.md)", highlight=HighlightQuery("find"))

    assert 'href="find.md"' in html
    assert "<mark>find</mark> me" in html


def test_link_tokens_carry_kind_metadata() -> None:
    parser = build_parser(resolver=make_resolver())
    tokens = parser.parse("[x](#top)")
    link = next(token for token in tokens[1].children or [] if token.type == "link_open")

    assert link.meta["link_kind"] == "anchor"
    assert link.attrGet("href") == "#top"


def test_empty_query_is_falsy() -> None:
    assert not HighlightQuery("")


BLOCKS = "# Title\n\nnothing here\n\n- cat\n- [cat](cat.md)\n\n```\ncat\n```\n"


def test_match_blocks_counts_rendered_text_per_top_level_block() -> None:
    assert match_blocks(BLOCKS, HighlightQuery("CAT")) == (2, 2, 3)


def test_reveal_block_wraps_and_handles_no_matches() -> None:
    assert reveal_block(BLOCKS, HighlightQuery("cat"), 2) == 3
    assert reveal_block(BLOCKS, HighlightQuery("cat"), 4) == 2
    assert reveal_block(BLOCKS, HighlightQuery("dog"), 0) is None
