"""Static documentation site generator.

This package renders a tree of Markdown documents into a themed, searchable,
optionally versioned HTML site.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docsmith import main
>>> main()  # doctest: +SKIP
>>> from docsmith import app
>>> app.name[0]
'docsmith'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
