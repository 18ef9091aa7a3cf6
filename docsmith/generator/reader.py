"""Read Markdown source files into immutable :class:`Document` objects."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from docsmith.frontmatter import split_front_matter
from docsmith.generator.models import DocMetadata, Document

if typ.TYPE_CHECKING:
    from docsmith.generator.renderer import HtmlContentRenderer
    from docsmith.git_metadata import GitHistory


def discover_markdown_files(docs_dir: Path) -> list[Path]:
    """Return every ``.md`` file below ``docs_dir`` in a stable order.

    A missing docs directory yields an empty list.
    """
    if not docs_dir.is_dir():
        return []
    return sorted(path for path in docs_dir.rglob("*.md") if path.is_file())


def compute_slug(path: Path, docs_dir: Path) -> str:
    """Return the slug for ``path``: its docs-relative path without ``.md``.

    >>> compute_slug(Path("/site/docs/guides/setup.md"), Path("/site/docs"))
    'guides/setup'
    """
    relative = os.path.relpath(path, docs_dir)
    if relative.endswith(".md"):
        relative = relative[: -len(".md")]
    return relative.replace(os.sep, "/").replace("\\", "/")


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def read_document(
    path: Path,
    docs_dir: Path,
    *,
    renderer: HtmlContentRenderer,
    history: GitHistory,
) -> Document:
    """Read, split, and render one Markdown file.

    Parameters
    ----------
    path : Path
        Markdown file to read.
    docs_dir : Path
        Root of the docs tree; slugs are relative to it.
    renderer : HtmlContentRenderer
        Renderer used for the body.
    history : GitHistory
        Source of created/last-updated details.

    Returns
    -------
    Document
        The rendered document.

    Raises
    ------
    OSError
        If the file cannot be read.
    YAMLError
        If the front matter is malformed.
    """
    content = path.read_text(encoding="utf-8")
    attributes, body = split_front_matter(content)
    slug = compute_slug(path, docs_dir)
    git = history.lookup_history(path)
    metadata = DocMetadata(
        author=_optional_text(attributes.get("author")),
        created=git.created if git else None,
        created_by=git.created_by if git else None,
        last_updated=git.last_updated if git else None,
        last_updated_by=git.last_updated_by if git else None,
    )
    return Document(
        slug=slug,
        title=_optional_text(attributes.get("title")) or slug,
        description=_optional_text(attributes.get("description")) or "",
        html=renderer.markdown(body),
        attributes=attributes,
        source_path=path,
        body=body,
        metadata=metadata,
    )


__all__ = ["compute_slug", "discover_markdown_files", "read_document"]
