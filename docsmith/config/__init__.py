"""Load and validate site configuration for docsmith builds.

This subpackage parses the project's ``config.json``, applies defaults for the
optional search, footer, and version sections, resolves directories against
the config file location, and produces typed dataclasses (:class:`SiteConfig`,
:class:`NavbarConfig`, etc.) that the builder consumes. The primary entry point
is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docsmith.config import load_site_config
>>> site = load_site_config(Path("config.json"))  # doctest: +SKIP
>>> site.docs_dir.name  # doctest: +SKIP
'docs'
"""

from .loader import load_site_config, read_config_mapping
from .models import (
    FooterConfig,
    NavbarConfig,
    NavLinkConfig,
    SearchConfig,
    SiteConfig,
    SiteConfigError,
    VersionsConfig,
)

__all__ = [
    "FooterConfig",
    "NavLinkConfig",
    "NavbarConfig",
    "SearchConfig",
    "SiteConfig",
    "SiteConfigError",
    "VersionsConfig",
    "load_site_config",
    "read_config_mapping",
]
