r"""Build the client-side search index and its settings file.

The index holds a lossy plain-text projection of each Markdown body: code,
heading markers, link syntax, and emphasis are stripped so the browser-side
fuzzy matcher only sees prose.

Example
-------
>>> from docsmith.generator.search import strip_markdown
>>> strip_markdown("## Setup\nSee [the guide](guide.md) and `run()`.")
'Setup See the guide and .'
"""

from __future__ import annotations

import json
import re
import typing as typ

from docsmith.generator.models import SearchIndexEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from docsmith.generator.models import Document

_STRIP_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"`[^`]+`"), ""),
    (re.compile(r"#{1,6}\s+"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"[*_~]"), ""),
    (re.compile(r"\n+"), " "),
)


def strip_markdown(body: str) -> str:
    """Return ``body`` with code, headings, links, and emphasis removed."""
    text = body
    for pattern, replacement in _STRIP_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def build_search_index(documents: cabc.Iterable[Document]) -> list[SearchIndexEntry]:
    """Return one search entry per document, in document order."""
    return [
        SearchIndexEntry(
            title=document.title,
            slug=document.slug,
            description=document.description,
            content=strip_markdown(document.body),
        )
        for document in documents
    ]


def write_json(path: Path, payload: object) -> None:
    """Write ``payload`` as indented UTF-8 JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def write_search_index(path: Path, entries: cabc.Iterable[SearchIndexEntry]) -> None:
    """Persist the search index consumed by ``search.js``."""
    write_json(path, [entry.to_dict() for entry in entries])


__all__ = ["build_search_index", "strip_markdown", "write_json", "write_search_index"]
