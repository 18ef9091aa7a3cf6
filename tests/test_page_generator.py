"""Tests for the table of contents and full page rendering."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from conftest import write_config

from docsmith._constants import FUSE_SCRIPT_URL
from docsmith.config import load_site_config
from docsmith.config.models import SiteConfig
from docsmith.generator import PageGenerator, generate_table_of_contents
from docsmith.generator.models import DocMetadata, Document
from docsmith.generator.navigation import build_sidebar


def _document(slug: str, html: str, **kwargs: object) -> Document:
    values: dict[str, object] = {
        "slug": slug,
        "title": slug.rsplit("/", 1)[-1].title(),
        "description": "",
        "html": html,
        "attributes": {},
        "source_path": Path(f"{slug}.md"),
        "body": "",
    }
    values.update(kwargs)
    return Document(**values)  # type: ignore[arg-type]


@pytest.fixture
def config(tmp_path: Path) -> SiteConfig:
    return load_site_config(
        write_config(
            tmp_path,
            baseUrl="/site/",
            versions={"current": "1.0.0", "latest": "1.1.0", "available": ["1.1.0", "1.0.0"]},
        )
    )


def test_toc_assigns_sequential_ids() -> None:
    """h2 and h3 headings get ``heading-N`` ids; other levels are ignored."""
    toc = generate_table_of_contents(
        "<h1>Title</h1><h2>First</h2><p>x</p><h3>Sub <code>x</code></h3><h4>Deep</h4><h2>Second</h2>"
    )

    assert [(entry.level, entry.text, entry.anchor) for entry in toc.entries] == [
        (2, "First", "heading-0"),
        (3, "Sub x", "heading-1"),
        (2, "Second", "heading-2"),
    ]
    assert '<h2 id="heading-0">First</h2>' in toc.html
    assert "<h4>Deep</h4>" in toc.html


def test_toc_without_headings_leaves_html_unchanged() -> None:
    html = "<p>No headings here.</p>"
    toc = generate_table_of_contents(html)

    assert toc.entries == ()
    assert toc.html == html


def test_render_full_page(config: SiteConfig) -> None:
    """A rendered page carries navigation, metadata, and scripts."""
    documents = [
        _document(
            "intro",
            "<h2>Overview</h2><p>Hello</p>",
            title="Introduction",
            description="Start here",
            metadata=DocMetadata(
                author="Docs Team",
                created="January 15, 2024",
                created_by="Ada",
                last_updated="March 2, 2024",
                last_updated_by="Grace",
            ),
        ),
        _document("guides/setup", "<p>Setup</p>"),
    ]
    sidebar = build_sidebar(documents)
    html = PageGenerator(config).render(documents[0], documents, sidebar)
    soup = BeautifulSoup(html, "html.parser")

    assert soup.title.get_text() == "Introduction | Example Docs"
    assert soup.find("meta", attrs={"name": "description"})["content"] == "Start here"
    assert soup.select_one(".navbar-brand").get_text() == "Example"

    external = soup.find("a", string="GitHub")
    assert external["target"] == "_blank"
    internal = soup.find("a", string="Guide")
    assert internal["href"] == "/site/docs/guides/setup.html"
    assert internal.get("target") is None

    options = soup.select("select.version-switcher option")
    assert [option.get_text() for option in options] == ["Next", "1.1.0 (latest)", "1.0.0"]
    assert options[0].has_attr("selected")

    active = soup.select_one(".sidebar a.active")
    assert active["href"] == "/site/docs/intro.html"
    assert [crumb.get_text(strip=True) for crumb in soup.select(".breadcrumb-item")] == [
        "Home",
        "Getting Started",
        "Introduction",
    ]

    metadata = {
        row.select_one(".metadata-label").get_text(): row.select_one(".metadata-value").get_text()
        for row in soup.select(".metadata-table tr")
    }
    assert metadata == {
        "Author": "Docs Team",
        "Created": "January 15, 2024 by Ada",
        "Last Updated": "March 2, 2024 by Grace",
    }

    assert soup.select_one("article h2")["id"] == "heading-0"
    assert soup.select_one(".toc-list a")["href"] == "#heading-0"
    assert soup.select_one(".pagination-prev") is None
    assert soup.select_one(".pagination-next")["href"] == "/site/docs/guides/setup.html"
    assert soup.select_one("footer").get_text(strip=True) == "Copyright 2024 Example"

    scripts = [tag.get("src") for tag in soup.find_all("script") if tag.get("src")]
    assert scripts[0] == "/site/dark-mode.js"
    assert FUSE_SCRIPT_URL in scripts
    assert "/site/search.js" in scripts
    assert "/site/tabs.js" in scripts
    assert scripts.count("/site/dark-mode.js") == 1


def test_page_without_metadata_or_headings(config: SiteConfig) -> None:
    """Optional blocks are omitted when there is nothing to show."""
    document = _document("solo", "<p>Only text</p>")
    html = PageGenerator(config).render(document, [document], build_sidebar([document]))
    soup = BeautifulSoup(html, "html.parser")

    assert soup.select_one(".metadata-table") is None
    assert soup.select_one(".toc-sidebar") is None
    assert soup.select_one(".pagination a") is None


def test_archived_version_links(config: SiteConfig) -> None:
    """Archived pages link within their version but share root assets."""
    documents = [_document("intro", "<p>a</p>"), _document("next", "<p>b</p>")]
    generator = PageGenerator(config, docs_base_url="/site/1.0.0/", version_label="1.0.0")
    soup = BeautifulSoup(
        generator.render(documents[0], documents, build_sidebar(documents)), "html.parser"
    )

    assert soup.select_one(".pagination-next")["href"] == "/site/1.0.0/docs/next.html"
    assert soup.find("link", rel="stylesheet")["href"] == "/site/styles.css"
    selected = soup.select_one("select.version-switcher option[selected]")
    assert selected.get_text() == "1.0.0"


def test_front_matter_values_are_inserted_verbatim(config: SiteConfig) -> None:
    """Titles are trusted and not escaped."""
    document = _document("intro", "<p>x</p>", title="A <em>bold</em> title")
    html = PageGenerator(config).render(document, [document], build_sidebar([document]))

    assert "<title>A <em>bold</em> title | Example Docs</title>" in html


def test_redirect_page(config: SiteConfig) -> None:
    html = PageGenerator(config).render_redirect("intro")
    soup = BeautifulSoup(html, "html.parser")

    refresh = soup.find("meta", attrs={"http-equiv": "refresh"})
    assert refresh is not None
    assert "/site/docs/intro.html" in refresh["content"]
