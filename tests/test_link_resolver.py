from __future__ import annotations

import pytest

from mark_it_down.links import LinkKind, LinkResolver, classify_link, resolve_target


@pytest.mark.parametrize(
    "target, kind",
    [
        ("https://example.com", LinkKind.EXTERNAL),
        ("mailto:me@example.com", LinkKind.EXTERNAL),
        ("#heading", LinkKind.ANCHOR),
        ("notes.md", LinkKind.MARKDOWN),
        ("docs/guide.md#intro", LinkKind.MARKDOWN),
        ("README.MD", LinkKind.LOCAL),
        ("img/cat.PNG", LinkKind.IMAGE),
        ("report.pdf", LinkKind.LOCAL),
    ],
)
def test_classify_link(target: str, kind: LinkKind) -> None:
    assert classify_link(target) is kind


def test_resolve_target_forward_slash_path() -> None:
    assert resolve_target("notes.md", "/home/me/docs/readme.md") == "/home/me/docs/notes.md"


def test_resolve_target_backslash_path() -> None:
    assert (
        resolve_target("img/cat.png", "C:\\Users\\me\\readme.md")
        == "C:\\Users\\me\\img\\cat.png"
    )


def test_resolve_target_strips_leading_dot_segment() -> None:
    assert resolve_target("./notes.md", "/docs/readme.md") == "/docs/notes.md"


def test_resolve_target_leaves_external_and_anchor_unchanged() -> None:
    assert resolve_target("https://x.org/a.md", "/docs/readme.md") == "https://x.org/a.md"
    assert resolve_target("#top", "/docs/readme.md") == "#top"


def test_resolve_target_without_document_path() -> None:
    assert resolve_target("notes.md", None) == "notes.md"


def test_resolve_target_keeps_absolute_targets() -> None:
    assert resolve_target("/etc/motd.md", "/docs/readme.md") == "/etc/motd.md"


def test_resolver_marks_missing_images_broken() -> None:
    seen: list[str] = []

    def bridge(path: str) -> str | None:
        seen.append(path)
        return None

    resolver = LinkResolver(document_path="/docs/readme.md", asset_bridge=bridge)

    link = resolver.resolve_image("pics/missing.png")

    assert link.broken
    assert seen == ["/docs/pics/missing.png"]


def test_resolver_passes_external_images_through() -> None:
    resolver = LinkResolver(document_path="/docs/readme.md", asset_bridge=lambda path: None)

    link = resolver.resolve_image("https://example.com/cat.png")

    assert not link.broken
    assert link.reference == "https://example.com/cat.png"
