"""Utilities for reading, rendering, and writing docsmith documentation pages."""

from .builder import SiteBuilder
from .models import BuildResult, Document, SidebarCategory
from .page_generator import PageGenerator, generate_table_of_contents
from .renderer import HtmlContentRenderer

__all__ = [
    "BuildResult",
    "Document",
    "HtmlContentRenderer",
    "PageGenerator",
    "SidebarCategory",
    "SiteBuilder",
    "generate_table_of_contents",
]
