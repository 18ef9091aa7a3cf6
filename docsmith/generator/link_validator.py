"""Detect relative Markdown links that do not point at a known document."""

from __future__ import annotations

import os
import re
import typing as typ
from pathlib import Path

from docsmith.frontmatter import split_front_matter
from docsmith.generator.models import BrokenLink, InternalLink

if typ.TYPE_CHECKING:
    import collections.abc as cabc

LINK_PATTERN = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)")
EXTERNAL_PREFIXES = ("http://", "https://", "#", "mailto:")


def extract_internal_links(content: str) -> list[InternalLink]:
    """Return the relative ``[text](target)`` links in ``content``.

    Targets starting with ``http://``, ``https://``, ``#``, or ``mailto:`` are
    external; image syntax (``![alt](path)``) is left to the image pass.
    """
    links: list[InternalLink] = []
    for match in LINK_PATTERN.finditer(content):
        url = match.group(2)
        if url.startswith(EXTERNAL_PREFIXES):
            continue
        links.append(InternalLink(text=match.group(1), url=url, position=match.start()))
    return links


def _strip_suffixes(url: str) -> str:
    """Drop ``#fragment`` and ``?query`` parts from a link target."""
    return url.split("#", 1)[0].split("?", 1)[0]


def _normalize(path: Path | str) -> str:
    return os.path.abspath(path).replace("\\", "/")


def validate_internal_links(
    file_path: Path, docs_dir: Path, all_files: cabc.Iterable[Path]
) -> list[BrokenLink]:
    """Return links in ``file_path`` that resolve to no file in ``all_files``.

    Parameters
    ----------
    file_path : Path
        Markdown document to scan; only the body after front matter is read.
    docs_dir : Path
        Docs root used to report ``file`` relative paths.
    all_files : Iterable[Path]
        Absolute paths of every Markdown file in the build.

    Returns
    -------
    list[BrokenLink]
        One entry per unresolved link, in document order.
    """
    _attributes, body = split_front_matter(file_path.read_text(encoding="utf-8"))
    known = {_normalize(path) for path in all_files}
    relative_file = os.path.relpath(file_path, docs_dir).replace("\\", "/")
    broken: list[BrokenLink] = []
    for link in extract_internal_links(body):
        target = _strip_suffixes(link.url)
        resolved = _normalize(file_path.parent / target) if target else _normalize(file_path)
        if resolved not in known:
            broken.append(BrokenLink(file=relative_file, link=link.url, text=link.text))
    return broken


__all__ = ["LINK_PATTERN", "extract_internal_links", "validate_internal_links"]
