r"""Split YAML front matter from Markdown documents.

Front matter is a block delimited by ``---`` lines at the very top of a file.
Its YAML is parsed with ruamel's safe loader; malformed YAML raises the
loader's own error so a broken page aborts the build rather than rendering
with missing metadata.

Example
-------
>>> from docsmith.frontmatter import split_front_matter
>>> attrs, body = split_front_matter("---\ntitle: Intro\n---\n# Hello\n")
>>> attrs["title"], body
('Intro', '# Hello\n')
"""

from __future__ import annotations

import io
import logging
import re
import typing as typ

from ruamel.yaml import YAML

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(?P<yaml>.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.MULTILINE | re.DOTALL,
)

logger = logging.getLogger(__name__)


def _load_yaml(text: str) -> object:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader.load(io.StringIO(text))


def split_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return ``(attributes, body)`` for a Markdown document.

    A block that parses to a scalar or a list, such as a horizontal rule
    wrapped around a line of prose, is logged and yields no attributes.

    Parameters
    ----------
    text : str
        Full file contents.

    Returns
    -------
    tuple[dict[str, Any], str]
        Parsed attributes (empty when the file has no front matter) and the
        Markdown body following the closing delimiter.

    Raises
    ------
    YAMLError
        If the YAML block cannot be parsed.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return {}, text.removeprefix("\ufeff")
    loaded = _load_yaml(match.group("yaml")) if match.group("yaml").strip() else None
    if loaded is None:
        attributes: dict[str, typ.Any] = {}
    elif isinstance(loaded, dict):
        attributes = dict(loaded)
    else:
        logger.warning(
            "Ignoring front matter that is not a mapping (got %s)", type(loaded).__name__
        )
        attributes = {}
    return attributes, text[match.end() :]


__all__ = ["FRONT_MATTER_PATTERN", "split_front_matter"]
