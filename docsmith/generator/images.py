r"""Find, validate, and copy images referenced from documentation pages.

Both Markdown (``![alt](path)``) and HTML (``<img src="path">``) references
are collected from each document body. Paths starting with ``/`` are relative
to the site root (the parent of the docs directory); all others are relative
to the referencing document. Existing images are copied once each into the
output tree at their site-relative location; missing ones are returned as
:class:`BrokenImage` records without interrupting the build.

Example
-------
>>> from docsmith.generator.images import extract_image_references
>>> extract_image_references("![Logo](img/logo.png?v=2)")
[ImageReference(alt='Logo', path='img/logo.png')]
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import typing as typ
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from docsmith._constants import IMAGES_OUTPUT_SUBDIR
from docsmith.generator.models import BrokenImage, ImageReference, ImageReport

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docsmith.generator.models import Document

logger = logging.getLogger(__name__)

MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
HTML_IMAGE_PATTERN = re.compile(r"""<img[^>]+src=["']([^"']+)["']""")
REMOTE_PREFIXES = ("http://", "https://", "//", "data:")


def _clean_path(path: str) -> str:
    """Strip query strings and fragment identifiers from an image path."""
    return path.split("?", 1)[0].split("#", 1)[0]


def extract_image_references(content: str) -> list[ImageReference]:
    """Return local image references from Markdown and ``<img>`` syntax.

    Markdown references come first in document order, followed by HTML tags.
    """
    images: list[ImageReference] = []
    for match in MARKDOWN_IMAGE_PATTERN.finditer(content):
        path = match.group(2).strip()
        if not path.startswith(REMOTE_PREFIXES):
            images.append(ImageReference(alt=match.group(1), path=_clean_path(path)))
    for match in HTML_IMAGE_PATTERN.finditer(content):
        path = match.group(1).strip()
        if not path.startswith(REMOTE_PREFIXES):
            images.append(ImageReference(alt="", path=_clean_path(path)))
    return images


def resolve_image_path(image_path: str, document_path: Path, docs_dir: Path) -> Path:
    """Resolve an image reference to an absolute filesystem path."""
    if image_path.startswith("/"):
        return Path(os.path.abspath(docs_dir.parent / image_path.lstrip("/")))
    return Path(os.path.abspath(document_path.parent / image_path))


def _copy_image(source: Path, target: Path) -> bool:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as exc:
        logger.warning("Failed to copy image %s: %s", target, exc)
        return False
    return True


def process_images(
    documents: cabc.Iterable[Document], docs_dir: Path, output_dir: Path
) -> ImageReport:
    """Copy referenced images into ``output_dir`` and report missing ones.

    Parameters
    ----------
    documents : Iterable[Document]
        Documents whose bodies are scanned for image references.
    docs_dir : Path
        Docs root; its parent is the site root for ``/``-prefixed paths.
    output_dir : Path
        Build output directory receiving the copied images.

    Returns
    -------
    ImageReport
        Site-relative paths of copied images (sorted) and broken references
        in document order.
    """
    site_root = Path(os.path.abspath(docs_dir.parent))
    (output_dir / IMAGES_OUTPUT_SUBDIR).mkdir(parents=True, exist_ok=True)

    report = ImageReport()
    to_copy: dict[str, Path] = {}
    for document in documents:
        doc_file = os.path.relpath(document.source_path, docs_dir).replace("\\", "/")
        for image in extract_image_references(document.body):
            resolved = resolve_image_path(image.path, document.source_path, docs_dir)
            relative = os.path.relpath(resolved, site_root).replace("\\", "/")
            if not resolved.is_file() or relative.startswith("../"):
                report.broken.append(BrokenImage(file=doc_file, image=image.path, alt=image.alt))
                continue
            to_copy.setdefault(relative, resolved)

    ordered = sorted(to_copy.items())
    with ThreadPoolExecutor() as pool:
        outcomes = pool.map(
            lambda item: _copy_image(item[1], output_dir / item[0]), ordered
        )
        report.copied = [
            relative for (relative, _source), ok in zip(ordered, outcomes) if ok
        ]
    return report


__all__ = [
    "HTML_IMAGE_PATTERN",
    "MARKDOWN_IMAGE_PATTERN",
    "extract_image_references",
    "process_images",
    "resolve_image_path",
]
