"""Tests for internal link extraction and validation."""

from __future__ import annotations

from pathlib import Path

from conftest import write_doc

from docsmith.generator.link_validator import extract_internal_links, validate_internal_links
from docsmith.generator.models import BrokenLink


def test_extract_skips_external_and_images() -> None:
    """Only relative document links are collected."""
    links = extract_internal_links(
        "[a](a.md) [web](https://example.com) [plain](http://example.com) "
        "[anchor](#top) [mail](mailto:x@example.com) ![img](pic.png) [b](../b.md)"
    )

    assert [(link.text, link.url) for link in links] == [("a", "a.md"), ("b", "../b.md")]
    assert links[0].position == 0


def test_validate_reports_missing_targets(tmp_path: Path) -> None:
    """Links to files outside the build set are broken."""
    docs = tmp_path / "docs"
    source = write_doc(
        docs,
        "guide/start.md",
        """
        ---
        title: Start
        ---
        [ok](../intro.md) [gone](missing.md) [anchored](./other.md#setup)
        [query](other.md?x=1)
        """,
    )
    intro = write_doc(docs, "intro.md", "# Intro\n")
    other = write_doc(docs, "guide/other.md", "# Other\n")

    broken = validate_internal_links(source, docs, [source, intro, other])

    assert broken == [BrokenLink(file="guide/start.md", link="missing.md", text="gone")]


def test_front_matter_links_are_ignored(tmp_path: Path) -> None:
    """Link-like text in front matter is not validated."""
    docs = tmp_path / "docs"
    source = write_doc(
        docs,
        "page.md",
        """
        ---
        description: "[nope](nowhere.md)"
        ---
        Body
        """,
    )

    assert validate_internal_links(source, docs, [source]) == []
