"""Typed dataclasses describing docsmith site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class NavLinkConfig:
    """Navbar link; ``href`` links are external, ``to`` links are site pages."""

    label: str
    href: str | None = None
    to: str | None = None


@dc.dataclass(slots=True)
class NavbarConfig:
    """Brand title and links rendered in the top navigation bar."""

    title: str
    links: list[NavLinkConfig] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class FooterConfig:
    """Footer copy shown on every page."""

    copyright: str = ""


@dc.dataclass(slots=True)
class SearchConfig:
    """Client-side fuzzy search tuning written to ``search-config.json``."""

    max_results: int = 10
    fuzzy_threshold: float = 0.3
    min_match_length: int = 2


@dc.dataclass(slots=True)
class VersionsConfig:
    """Declared documentation versions.

    Attributes
    ----------
    current : str
        Label of the version first snapshotted from the docs directory.
    latest : str
        Most recently snapshotted version.
    available : list[str]
        Archived versions, newest first.
    """

    current: str
    latest: str
    available: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition sourced from ``config.json``."""

    root_dir: Path
    output_dir: Path
    docs_dir: Path
    base_url: str
    title: str
    navbar: NavbarConfig
    description: str = ""
    footer: FooterConfig = dc.field(default_factory=FooterConfig)
    search: SearchConfig = dc.field(default_factory=SearchConfig)
    versions: VersionsConfig | None = None
    versions_dir: Path | None = None
    theme_dir: Path | None = None
    pygments_style: str = "github-dark"
    raw: dict[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def resolved_versions_dir(self) -> Path:
        """Return the directory holding archived version snapshots."""
        return self.versions_dir or self.root_dir / "versioned_docs"

    def search_payload(self) -> dict[str, typ.Any]:
        """Return the mapping serialized into ``search-config.json``."""
        return {
            "maxResults": self.search.max_results,
            "fuzzyThreshold": self.search.fuzzy_threshold,
            "minMatchLength": self.search.min_match_length,
            "baseUrl": self.base_url,
        }


__all__ = [
    "FooterConfig",
    "NavLinkConfig",
    "NavbarConfig",
    "SearchConfig",
    "SiteConfig",
    "SiteConfigError",
    "VersionsConfig",
]
