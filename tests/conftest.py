"""Shared fixtures for docsmith tests.

``site_project`` lays out a minimal documentation project on disk (config,
docs tree, and an image) so builder, versioning, and CLI tests exercise the
same files. Git metadata is served from :class:`FakeHistory` so no ``git``
process is spawned.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

from docsmith.generator.renderer import HtmlContentRenderer
from docsmith.git_metadata import GitMetadata

# 1x1 transparent PNG.
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


class FakeHistory:
    """In-memory stand-in for the git history lookup."""

    def __init__(self, entries: dict[str, GitMetadata] | None = None) -> None:
        self.entries = entries or {}
        self.calls: list[Path] = []

    def lookup_history(self, path: Path) -> GitMetadata | None:
        self.calls.append(path)
        return self.entries.get(path.name)


def write_config(root: Path, **overrides: typ.Any) -> Path:
    """Write ``config.json`` under ``root`` and return its path."""
    payload: dict[str, typ.Any] = {
        "title": "Example Docs",
        "description": "Docs for the example project",
        "baseUrl": "/",
        "outputDir": "build",
        "docsDir": "docs",
        "navbar": {
            "title": "Example",
            "links": [
                {"label": "GitHub", "href": "https://github.com/example/example"},
                {"label": "Guide", "to": "/docs/guides/setup"},
            ],
        },
        "footer": {"copyright": "Copyright 2024 Example"},
        "search": {"maxResults": 5, "fuzzyThreshold": 0.4},
    }
    payload.update(overrides)
    path = root / "config.json"
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def write_doc(docs_dir: Path, relative: str, text: str) -> Path:
    """Write a dedented Markdown document and return its path."""
    path = docs_dir / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
    return path


@pytest.fixture
def renderer() -> HtmlContentRenderer:
    """Return a renderer with the default Pygments style."""
    return HtmlContentRenderer()


@pytest.fixture
def fake_history() -> FakeHistory:
    """Return a history source with metadata for ``intro.md`` only."""
    return FakeHistory(
        {
            "intro.md": GitMetadata(
                last_updated="March 2, 2024",
                last_updated_by="Grace Hopper",
                created="January 15, 2024",
                created_by="Ada Lovelace",
            )
        }
    )


@pytest.fixture
def site_project(tmp_path: Path) -> Path:
    """Create a small docs project and return the path to its config file."""
    docs = tmp_path / "docs"
    write_doc(
        docs,
        "intro.md",
        """
        ---
        title: Introduction
        description: Start here
        author: Docs Team
        ---
        # Introduction

        Welcome to the docs. Continue with [setup](guides/setup.md#install).

        ## Overview

        ![Diagram](images/diagram.png)
        """,
    )
    write_doc(
        docs,
        "guides/setup.md",
        """
        ---
        title: Setup
        ---
        ## Install

        ```python title="install.py" {2}
        import os
        print(os.getcwd())
        ```

        See the [missing page](missing.md) and the [intro](../intro.md).
        """,
    )
    write_doc(
        docs,
        "guides/usage.md",
        """
        ---
        title: Usage
        ---
        Usage notes with ![Remote](https://example.com/logo.png) and
        ![Missing](missing.png).
        """,
    )
    (docs / "images").mkdir(parents=True, exist_ok=True)
    (docs / "images" / "diagram.png").write_bytes(PNG_BYTES)
    return write_config(tmp_path)
