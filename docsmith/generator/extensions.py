r"""Python-Markdown extensions for code blocks, admonitions, and tab groups.

All three extensions work as preprocessors that replace a block of source
text with a placeholder from ``md.htmlStash``, mirroring how Python-Markdown's
own ``fenced_code`` extension operates. Nested Markdown (admonition bodies and
tab panels) is rendered through the owning renderer so the same configuration
applies at every depth.

Example
-------
>>> from docsmith.generator.renderer import HtmlContentRenderer
>>> renderer = HtmlContentRenderer()
>>> html = renderer.markdown(":::tip\nRun it twice.\n:::")
>>> "admonition-tip" in html
True
"""

from __future__ import annotations

import dataclasses as dc
import hashlib
import re
import typing as typ

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

if typ.TYPE_CHECKING:
    from markdown import Markdown

    from docsmith.generator.renderer import HtmlContentRenderer
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    HtmlContentRenderer = typ.Any

FENCED_BLOCK_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ ]*(?P<info>[^\n]*)\n"
    r"(?P<code>.*?)(?<=\n)(?P=fence)[ ]*$",
    re.MULTILINE | re.DOTALL,
)
TITLE_PATTERN = re.compile(r'title="([^"]+)"')
HIGHLIGHT_PATTERN = re.compile(r"\{([^}]+)\}")
CONTAINER_START = re.compile(r"^:::", re.MULTILINE)
ADMONITION_PATTERN = re.compile(
    r":::(?P<kind>note|tip|info|warning|danger|caution)"
    r"(?:[ ]+(?P<title>[^\n]+?))?[ ]*\n"
    r"(?:(?P<body>.*?)\n)?:::[ ]*$",
    re.MULTILINE | re.DOTALL,
)
TABS_PATTERN = re.compile(
    r":::tabs[ ]*\n(?:(?P<content>.*?)\n)?:::[ ]*$", re.MULTILINE | re.DOTALL
)
TAB_HEADER_PATTERN = re.compile(r"^== (.+)$", re.MULTILINE)

ADMONITION_TYPES: dict[str, tuple[str, str]] = {
    "note": ("ℹ️", "Note"),
    "tip": ("\U0001f4a1", "Tip"),
    "info": ("ℹ️", "Info"),
    "warning": ("⚠️", "Warning"),
    "danger": ("\U0001f6ab", "Danger"),
    "caution": ("⚠️", "Caution"),
}

LINE_NUMBERS_ICON = (
    '<svg width="16" height="16" viewBox="0 0 16 16" fill="none" '
    'stroke="currentColor" stroke-width="2">'
    '<line x1="4" y1="3" x2="14" y2="3"></line>'
    '<line x1="4" y1="8" x2="14" y2="8"></line>'
    '<line x1="4" y1="13" x2="14" y2="13"></line>'
    '<text x="1" y="5" font-size="6" fill="currentColor">1</text>'
    '<text x="1" y="10" font-size="6" fill="currentColor">2</text>'
    '<text x="1" y="15" font-size="6" fill="currentColor">3</text>'
    "</svg>"
)


@dc.dataclass(frozen=True, slots=True)
class CodeFenceInfo:
    """Parsed fence info string such as ``python title="app.py" {1,3-5}``."""

    language: str
    title: str | None
    highlight_lines: frozenset[int]

    @property
    def display_language(self) -> str:
        """Return the language label with its first letter capitalized."""
        return self.language[:1].upper() + self.language[1:]


@dc.dataclass(frozen=True, slots=True)
class Tab:
    """Single tab parsed from a ``:::tabs`` block."""

    name: str
    content: str


def parse_line_ranges(ranges: str) -> frozenset[int]:
    """Return the 1-based line numbers named by ``1,3-5`` style ranges.

    Tokens that are not integers or ``start-end`` pairs are ignored.
    """
    lines: set[int] = set()
    for token in ranges.split(","):
        part = token.strip()
        if "-" in part:
            start_text, _, end_text = part.partition("-")
            try:
                start, end = int(start_text), int(end_text)
            except ValueError:
                continue
            lines.update(range(start, end + 1))
        else:
            try:
                lines.add(int(part))
            except ValueError:
                continue
    return frozenset(lines)


def parse_fence_info(info: str) -> CodeFenceInfo:
    """Split a fence info string into language, title, and highlighted lines."""
    raw = info.strip() or "plaintext"
    language = raw
    title = None
    highlight_lines: frozenset[int] = frozenset()

    if title_match := TITLE_PATTERN.search(language):
        title = title_match.group(1)
        language = TITLE_PATTERN.sub("", language, count=1).strip()
    if range_match := HIGHLIGHT_PATTERN.search(language):
        highlight_lines = parse_line_ranges(range_match.group(1))
        language = HIGHLIGHT_PATTERN.sub("", language, count=1).strip()
    return CodeFenceInfo(language=language, title=title, highlight_lines=highlight_lines)


def parse_tabs(content: str) -> list[Tab]:
    """Split tab-group content on ``== Name`` lines.

    Text before the first header is discarded; each tab runs until the next
    header or the end of the group.
    """
    headers = list(TAB_HEADER_PATTERN.finditer(content))
    tabs: list[Tab] = []
    for idx, header in enumerate(headers):
        end = headers[idx + 1].start() if idx + 1 < len(headers) else len(content)
        tabs.append(
            Tab(name=header.group(1).strip(), content=content[header.end() : end].strip())
        )
    return tabs


def _unique_id(base: str, used: set[str]) -> str:
    """Return a unique id, appending numeric suffixes and mutating ``used``."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def _stash(md: Markdown, html: str) -> str:
    """Store ``html`` and return the placeholder as its own block."""
    if not html:
        return "\n\n"
    return f"\n\n{md.htmlStash.store(html)}\n\n"


class CodeBlockPreprocessor(Preprocessor):
    """Render fenced code blocks with headers, line spans, and highlighting."""

    def __init__(self, md: Markdown, formatter: HtmlFormatter) -> None:
        super().__init__(md)
        self.formatter = formatter

    def run(self, lines: list[str]) -> list[str]:
        text = "\n".join(lines)
        pieces: list[str] = []
        cursor = 0
        for match in FENCED_BLOCK_PATTERN.finditer(text):
            info = parse_fence_info(match.group("info"))
            html = self.render(match.group("code"), info)
            pieces.append(text[cursor : match.start()])
            pieces.append(_stash(self.md, html))
            cursor = match.end()
        pieces.append(text[cursor:])
        return "".join(pieces).split("\n")

    def render(self, code: str, info: CodeFenceInfo) -> str:
        """Return the HTML for a single code block."""
        try:
            lexer = get_lexer_by_name(info.language, stripnl=False)
        except ClassNotFound:
            lexer = get_lexer_by_name("text", stripnl=False)
        highlighted = highlight(code, lexer, self.formatter)
        spans = []
        for number, line in enumerate(highlighted.removesuffix("\n").split("\n"), start=1):
            marker = " highlighted-line" if number in info.highlight_lines else ""
            spans.append(
                f'<span class="code-line{marker}" data-line="{number}">{line}</span>'
            )
        if info.title:
            header = f'<span class="code-block-title">{info.title}</span>'
        else:
            header = f'<span class="code-block-language">{info.display_language}</span>'
        return (
            f'<div class="code-block-container codehilite" data-language="{info.language}">\n'
            f'  <div class="code-block-header">\n'
            f"    {header}\n"
            '    <button class="toggle-line-numbers" aria-label="Toggle line numbers" '
            f'title="Toggle line numbers">{LINE_NUMBERS_ICON}</button>\n'
            "  </div>\n"
            f'  <pre class="show-line-numbers"><code class="language-{info.language}">'
            f'{"".join(spans)}</code></pre>\n'
            "</div>"
        )


class ContainerPreprocessor(Preprocessor):
    """Render ``:::kind`` admonitions and ``:::tabs`` groups."""

    def __init__(self, md: Markdown, renderer: HtmlContentRenderer) -> None:
        super().__init__(md)
        self.renderer = renderer
        self._tab_ids: set[str] = set()

    def run(self, lines: list[str]) -> list[str]:
        text = "\n".join(lines)
        fences = [(m.start(), m.end()) for m in FENCED_BLOCK_PATTERN.finditer(text)]
        pieces: list[str] = []
        cursor = 0
        for start in CONTAINER_START.finditer(text):
            pos = start.start()
            if pos < cursor or any(lo <= pos < hi for lo, hi in fences):
                continue
            if tabs_match := TABS_PATTERN.match(text, pos):
                html = self.render_tabs(tabs_match)
                end = tabs_match.end()
            elif admonition_match := ADMONITION_PATTERN.match(text, pos):
                html = self.render_admonition(admonition_match)
                end = admonition_match.end()
            else:
                continue
            pieces.append(text[cursor:pos])
            pieces.append(_stash(self.md, html))
            cursor = end
        pieces.append(text[cursor:])
        return "".join(pieces).split("\n")

    def render_admonition(self, match: re.Match[str]) -> str:
        kind = match.group("kind")
        icon, label = ADMONITION_TYPES.get(kind, ADMONITION_TYPES["note"])
        title = (match.group("title") or "").strip() or label
        content = self.renderer.markdown((match.group("body") or "").strip())
        return (
            f'<div class="admonition admonition-{kind}">\n'
            '  <div class="admonition-heading">\n'
            f'    <span class="admonition-icon">{icon}</span>\n'
            f'    <span class="admonition-title">{title}</span>\n'
            "  </div>\n"
            f'  <div class="admonition-content">\n{content}\n  </div>\n'
            "</div>"
        )

    def render_tabs(self, match: re.Match[str]) -> str:
        tabs = parse_tabs(match.group("content") or "")
        if not tabs:
            return ""
        digest = hashlib.sha1(match.group(0).encode("utf-8")).hexdigest()[:9]  # noqa: S324
        tab_id = _unique_id(f"tabs-{digest}", self._tab_ids)
        buttons = []
        panels = []
        for index, tab in enumerate(tabs):
            active = " active" if index == 0 else ""
            buttons.append(
                f'<button class="tab-button{active}" data-tab="{tab_id}-{index}">'
                f"{tab.name}</button>"
            )
            panels.append(
                f'<div class="tab-panel{active}" data-tab="{tab_id}-{index}">'
                f"{self.renderer.markdown(tab.content)}</div>"
            )
        return (
            f'<div class="tabs-container" data-tabs-id="{tab_id}">\n'
            f'  <div class="tabs-header">\n{chr(10).join(buttons)}\n  </div>\n'
            f'  <div class="tabs-content">\n{chr(10).join(panels)}\n  </div>\n'
            "</div>"
        )


class CodeBlockExtension(Extension):
    """Register the enhanced fenced-code preprocessor."""

    def __init__(self, formatter: HtmlFormatter) -> None:
        super().__init__()
        self.formatter = formatter

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Run after whitespace normalisation and before raw HTML detection."""
        md.preprocessors.register(
            CodeBlockPreprocessor(md, self.formatter), "docsmith_code_blocks", 25
        )


class ContainerExtension(Extension):
    """Register the admonition and tabs preprocessor ahead of code blocks."""

    def __init__(self, renderer: HtmlContentRenderer) -> None:
        super().__init__()
        self.renderer = renderer

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the container preprocessor on the Markdown instance."""
        md.preprocessors.register(
            ContainerPreprocessor(md, self.renderer), "docsmith_containers", 27
        )


__all__ = [
    "ADMONITION_TYPES",
    "FENCED_BLOCK_PATTERN",
    "CodeBlockExtension",
    "CodeBlockPreprocessor",
    "CodeFenceInfo",
    "ContainerExtension",
    "ContainerPreprocessor",
    "Tab",
    "parse_fence_info",
    "parse_line_ranges",
    "parse_tabs",
]
