"""Assemble complete HTML pages for rendered documents.

:class:`PageGenerator` combines a :class:`~docsmith.generator.models.Document`
with the site-wide sidebar and configuration and renders ``doc_page.jinja``.
Values coming from front matter and ``config.json`` are trusted and inserted
as-is; document bodies are already HTML.

Example
-------
>>> from pathlib import Path
>>> from docsmith.config import load_site_config
>>> from docsmith.generator import PageGenerator
>>> config = load_site_config(Path("config.json"))  # doctest: +SKIP
>>> generator = PageGenerator(config)  # doctest: +SKIP
>>> html = generator.render(document, documents, sidebar)  # doctest: +SKIP
"""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from docsmith._constants import FUSE_SCRIPT_URL, THEME_SCRIPTS
from docsmith.generator.models import TableOfContents, TocEntry
from docsmith.generator.navigation import (
    build_breadcrumbs,
    build_pagination,
    doc_href,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docsmith.config import SiteConfig
    from docsmith.generator.models import Document, SidebarCategory

HEADING_PATTERN = re.compile(r"<h([2-3])([^>]*)>(.+?)</h\1>")
TAG_PATTERN = re.compile(r"<[^>]+>")


def generate_table_of_contents(html: str) -> TableOfContents:
    """Collect ``<h2>``/``<h3>`` headings and give them sequential ids.

    Parameters
    ----------
    html : str
        Rendered document body.

    Returns
    -------
    TableOfContents
        Entries in document order (``heading-0``, ``heading-1``, ...) and the
        body rewritten so each heading carries its id. Bodies without
        headings are returned unchanged.
    """
    entries: list[TocEntry] = []

    def _attach_id(match: re.Match[str]) -> str:
        level, attrs, text = match.groups()
        anchor = f"heading-{len(entries)}"
        entries.append(
            TocEntry(level=int(level), text=TAG_PATTERN.sub("", text).strip(), anchor=anchor)
        )
        return f'<h{level}{attrs} id="{anchor}">{text}</h{level}>'

    processed = HEADING_PATTERN.sub(_attach_id, html)
    if not entries:
        return TableOfContents(entries=(), html=html)
    return TableOfContents(entries=tuple(entries), html=processed)


class PageGenerator:
    """Render documentation pages with the shared Jinja layout."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        templates_dir: Path | None = None,
        docs_base_url: str | None = None,
        version_label: str | None = None,
    ) -> None:
        """Initialize the generator with site configuration and templates.

        Parameters
        ----------
        config : SiteConfig
            Site configuration providing titles, navbar, footer, and base URL.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        docs_base_url : str, optional
            URL prefix for page links; defaults to ``config.base_url``. Archived
            versions pass ``<baseUrl><version>/``.
        version_label : str, optional
            Version shown as selected in the version switcher.
        """
        self.config = config
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.docs_base_url = docs_base_url or config.base_url
        self.version_label = version_label
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("doc_page.jinja")

    def render(
        self,
        document: Document,
        documents: cabc.Sequence[Document],
        sidebar: cabc.Sequence[SidebarCategory],
    ) -> str:
        """Return the complete HTML page for ``document``."""
        titles = {doc.slug: doc.title for doc in documents}
        toc = generate_table_of_contents(document.html)
        context = {
            "config": self.config,
            "document": document,
            "html_title": f"{document.title} | {self.config.title}",
            "page_description": document.description or self.config.description,
            "asset_base": self.config.base_url,
            "navbar_links": self._navbar_links(),
            "versions": self._version_links(),
            "sidebar": self._sidebar_groups(sidebar, document.slug, titles),
            "breadcrumbs": build_breadcrumbs(
                sidebar, document.slug, document.title, self.docs_base_url
            ),
            "metadata": document.metadata,
            "body": toc.html,
            "toc": toc.entries,
            "pagination": build_pagination(
                sidebar, document.slug, titles, self.docs_base_url
            ),
            "fuse_script": FUSE_SCRIPT_URL,
            "scripts": [name for name in THEME_SCRIPTS if name != "dark-mode.js"],
        }
        return self.template.render(**context)

    def render_redirect(self, first_slug: str) -> str:
        """Return the index page that forwards to ``first_slug``."""
        template = self.env.get_template("redirect.jinja")
        return template.render(target=doc_href(self.docs_base_url, first_slug))

    def _navbar_links(self) -> list[dict[str, typ.Any]]:
        """Resolve navbar links into hrefs, flagging external ones."""
        links: list[dict[str, typ.Any]] = []
        for link in self.config.navbar.links:
            if link.href:
                links.append({"label": link.label, "href": link.href, "external": True})
            else:
                target = (link.to or "").lstrip("/")
                links.append(
                    {
                        "label": link.label,
                        "href": f"{self.config.base_url}{target}.html",
                        "external": False,
                    }
                )
        return links

    def _version_links(self) -> list[dict[str, typ.Any]]:
        """Return version switcher entries, or nothing when unversioned."""
        versions = self.config.versions
        if versions is None:
            return []
        base = self.config.base_url
        entries = [
            {
                "label": "Next",
                "href": f"{base}index.html",
                "selected": self.version_label is None,
            }
        ]
        for version in versions.available:
            label = f"{version} (latest)" if version == versions.latest else version
            entries.append(
                {
                    "label": label,
                    "href": f"{base}{version}/index.html",
                    "selected": self.version_label == version,
                }
            )
        return entries

    def _sidebar_groups(
        self,
        sidebar: cabc.Sequence[SidebarCategory],
        current_slug: str,
        titles: typ.Mapping[str, str],
    ) -> list[dict[str, typ.Any]]:
        """Build sidebar groups with resolved titles and active flags."""
        groups: list[dict[str, typ.Any]] = []
        for category in sidebar:
            entries = [
                {
                    "title": titles.get(slug, slug.rsplit("/", 1)[-1]),
                    "href": doc_href(self.docs_base_url, slug),
                    "is_active": slug == current_slug,
                }
                for slug in category.items
            ]
            groups.append(
                {
                    "label": category.label,
                    "entries": entries,
                    "is_active": current_slug in category.items,
                }
            )
        return groups


__all__ = ["HEADING_PATTERN", "PageGenerator", "generate_table_of_contents"]
