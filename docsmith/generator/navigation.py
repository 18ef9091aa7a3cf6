"""Derive sidebar categories, breadcrumbs, and pagination from documents.

The sidebar is the single source of ordering: root-level documents form a
leading "Getting Started" category, folders follow alphabetically, and each
category lists its slugs in sorted order. Pagination walks that same order.
"""

from __future__ import annotations

import typing as typ

from docsmith._constants import ROOT_CATEGORY_LABEL
from docsmith.generator.models import Breadcrumb, PageLink, Pagination, SidebarCategory

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docsmith.generator.models import Document


def category_label(folder: str) -> str:
    """Turn a kebab-case folder name into a Title Case label.

    >>> category_label("getting-started")
    'Getting Started'
    """
    return " ".join(word[:1].upper() + word[1:] for word in folder.split("-"))


def build_sidebar(documents: cabc.Iterable[Document]) -> list[SidebarCategory]:
    """Group documents into sidebar categories by their first path segment."""
    return sidebar_from_slugs(document.slug for document in documents)


def sidebar_from_slugs(slugs: cabc.Iterable[str]) -> list[SidebarCategory]:
    """Group slugs by folder; root-level slugs lead as "Getting Started"."""
    root_items: list[str] = []
    folders: dict[str, list[str]] = {}
    for slug in slugs:
        folder, sep, _rest = slug.partition("/")
        if sep:
            folders.setdefault(folder, []).append(slug)
        else:
            root_items.append(slug)

    sidebar: list[SidebarCategory] = []
    if root_items:
        sidebar.append(
            SidebarCategory(label=ROOT_CATEGORY_LABEL, items=tuple(sorted(root_items)))
        )
    for folder in sorted(folders):
        sidebar.append(
            SidebarCategory(label=category_label(folder), items=tuple(sorted(folders[folder])))
        )
    return sidebar


def sidebar_from_dicts(payload: cabc.Iterable[typ.Mapping[str, typ.Any]]) -> list[SidebarCategory]:
    """Rebuild sidebar categories from their stored JSON form."""
    return [
        SidebarCategory(
            label=str(entry.get("label", "")),
            items=tuple(str(item) for item in entry.get("items", []) or []),
            type=str(entry.get("type", "category")),
        )
        for entry in payload
        if entry.get("type", "category") == "category"
    ]


def flatten_sidebar(sidebar: cabc.Iterable[SidebarCategory]) -> list[str]:
    """Return every slug in category order, then item order."""
    return [slug for category in sidebar for slug in category.items]


def doc_href(base_url: str, slug: str) -> str:
    """Return the URL of the rendered page for ``slug``."""
    return f"{base_url}docs/{slug}.html"


def build_breadcrumbs(
    sidebar: cabc.Iterable[SidebarCategory], slug: str, title: str, base_url: str
) -> list[Breadcrumb]:
    """Return Home → category → page crumbs, or nothing if ``slug`` is unlisted."""
    for category in sidebar:
        if slug in category.items:
            return [
                Breadcrumb(label="Home", href=base_url),
                Breadcrumb(label=category.label),
                Breadcrumb(label=title),
            ]
    return []


def build_pagination(
    sidebar: cabc.Iterable[SidebarCategory],
    slug: str,
    titles: typ.Mapping[str, str],
    base_url: str,
) -> Pagination:
    """Return the neighbours of ``slug`` in the flattened sidebar order."""
    ordered = flatten_sidebar(sidebar)
    if slug not in ordered:
        return Pagination()
    index = ordered.index(slug)

    def _link(target: str) -> PageLink:
        return PageLink(
            slug=target,
            title=titles.get(target, target.rsplit("/", 1)[-1]),
            href=doc_href(base_url, target),
        )

    previous = _link(ordered[index - 1]) if index > 0 else None
    following = _link(ordered[index + 1]) if index < len(ordered) - 1 else None
    return Pagination(previous=previous, next=following)


__all__ = [
    "build_breadcrumbs",
    "build_pagination",
    "build_sidebar",
    "category_label",
    "doc_href",
    "flatten_sidebar",
    "sidebar_from_dicts",
    "sidebar_from_slugs",
]
