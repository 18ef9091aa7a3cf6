"""Utilities for rendering Markdown and syntax-highlighted code snippets."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from .extensions import CodeBlockExtension, ContainerExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)


class HtmlContentRenderer:
    """Render Markdown with the docsmith code, admonition, and tabs extensions.

    One renderer is built per build and handed to every render call; nested
    admonition and tab bodies call back into :meth:`markdown` on the same
    instance, so there is no module-level Markdown state.
    """

    def __init__(self, pygments_style: str = "github-dark") -> None:
        """Initialize a renderer with the Pygments style used for code blocks.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults
            to ``"github-dark"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._line_formatter = HtmlFormatter(style=pygments_style, nowrap=True)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            ContainerExtension(self),
            CodeBlockExtension(self._line_formatter),
            "tables",
            "sane_lists",
        ]
        md = Markdown(extensions=extensions)
        return md.convert(normalized)


__all__ = ["HtmlContentRenderer"]
