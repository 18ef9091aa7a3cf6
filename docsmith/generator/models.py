"""Shared dataclasses used by the site build pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class DocMetadata:
    """Authorship details shown in the page metadata table.

    Attributes
    ----------
    author : str | None
        Author named in the front matter.
    created, created_by : str | None
        Date and author of the commit that added the file.
    last_updated, last_updated_by : str | None
        Date and author of the most recent commit touching the file.
    """

    author: str | None = None
    created: str | None = None
    created_by: str | None = None
    last_updated: str | None = None
    last_updated_by: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return True when none of the displayed fields are present."""
        return not (self.author or self.created or self.last_updated)


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A Markdown source file read and rendered once per build.

    Attributes
    ----------
    slug : str
        Path relative to the docs root without ``.md``, ``/``-separated.
    title : str
        Front matter title, defaulting to the slug.
    description : str
        Front matter description, defaulting to an empty string.
    html : str
        Rendered HTML body.
    attributes : dict[str, Any]
        Every front matter key, including ones docsmith does not interpret.
    source_path : Path
        Absolute path of the Markdown file.
    body : str
        Markdown text following the front matter.
    metadata : DocMetadata
        Author and git history details.
    """

    slug: str
    title: str
    description: str
    html: str
    attributes: dict[str, typ.Any]
    source_path: Path
    body: str
    metadata: DocMetadata = dc.field(default_factory=DocMetadata)


@dc.dataclass(frozen=True, slots=True)
class SidebarCategory:
    """Named, ordered group of document slugs shown in the sidebar."""

    label: str
    items: tuple[str, ...]
    type: str = "category"

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the JSON-friendly form stored in versioned sidebar files."""
        return {"type": self.type, "label": self.label, "items": list(self.items)}


@dc.dataclass(frozen=True, slots=True)
class Breadcrumb:
    """One step of the breadcrumb trail; ``href`` is None for plain labels."""

    label: str
    href: str | None = None


@dc.dataclass(frozen=True, slots=True)
class PageLink:
    """Link to a neighbouring page used by pagination."""

    slug: str
    title: str
    href: str


@dc.dataclass(frozen=True, slots=True)
class Pagination:
    """Previous and next links around the current page."""

    previous: PageLink | None = None
    next: PageLink | None = None


@dc.dataclass(frozen=True, slots=True)
class TocEntry:
    """Heading captured for the on-page table of contents."""

    level: int
    text: str
    anchor: str


@dc.dataclass(frozen=True, slots=True)
class TableOfContents:
    """Headings found in a page and the body rewritten with their ids."""

    entries: tuple[TocEntry, ...]
    html: str


@dc.dataclass(frozen=True, slots=True)
class InternalLink:
    """Relative Markdown link found in a document body."""

    text: str
    url: str
    position: int


@dc.dataclass(frozen=True, slots=True)
class BrokenLink:
    """Internal link whose target is not a known Markdown file."""

    file: str
    link: str
    text: str


@dc.dataclass(frozen=True, slots=True)
class ImageReference:
    """Local image referenced from Markdown or an ``<img>`` tag."""

    alt: str
    path: str


@dc.dataclass(frozen=True, slots=True)
class BrokenImage:
    """Image reference that does not exist on disk."""

    file: str
    image: str
    alt: str


@dc.dataclass(slots=True)
class ImageReport:
    """Outcome of the image pass: copied site-relative paths and broken refs."""

    copied: list[str] = dc.field(default_factory=list)
    broken: list[BrokenImage] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class SearchIndexEntry:
    """Plain-text projection of a document for client-side search."""

    title: str
    slug: str
    description: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "content": self.content,
        }


@dc.dataclass(slots=True)
class BuildResult:
    """Summary of a build run returned to the CLI."""

    output_dir: Path
    documents: list[Document] = dc.field(default_factory=list)
    pages: list[Path] = dc.field(default_factory=list)
    broken_links: list[BrokenLink] = dc.field(default_factory=list)
    images: ImageReport = dc.field(default_factory=ImageReport)


__all__ = [
    "BrokenImage",
    "BrokenLink",
    "Breadcrumb",
    "BuildResult",
    "DocMetadata",
    "Document",
    "ImageReference",
    "ImageReport",
    "InternalLink",
    "PageLink",
    "Pagination",
    "SearchIndexEntry",
    "SidebarCategory",
    "TableOfContents",
    "TocEntry",
]
