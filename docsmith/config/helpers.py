"""Utility helpers shared by the docsmith configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import (
    FooterConfig,
    NavbarConfig,
    NavLinkConfig,
    SearchConfig,
    SiteConfigError,
    VersionsConfig,
)

DEFAULT_VERSIONS_DIR = "versioned_docs"
REQUIRED_KEYS = ("outputDir", "docsDir", "baseUrl", "title")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_mapping(value: object, name: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` when it is a mapping, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, typ.Mapping):
        msg = f"'{name}' must be a mapping."
        raise SiteConfigError(msg)
    return value


def _resolve_path(root_dir: Path, value: str) -> Path:
    """Resolve ``value`` against the directory holding the config file."""
    path = Path(value)
    if path.is_absolute():
        return path
    return root_dir / path


def _build_navbar(payload: object) -> NavbarConfig:
    """Build the navbar config, requiring a brand title."""
    mapping = _require_mapping(payload, "navbar")
    title = _optional_str(mapping.get("title"))
    if not title:
        msg = "Missing required config key 'navbar.title'."
        raise SiteConfigError(msg)
    links: list[NavLinkConfig] = []
    for entry in mapping.get("links") or []:
        link = _require_mapping(entry, "navbar.links[]")
        label = _optional_str(link.get("label"))
        if not label:
            msg = "Every navbar link needs a 'label'."
            raise SiteConfigError(msg)
        href = _optional_str(link.get("href"))
        to = _optional_str(link.get("to"))
        if not href and not to:
            msg = f"Navbar link '{label}' needs either 'href' or 'to'."
            raise SiteConfigError(msg)
        links.append(NavLinkConfig(label=label, href=href, to=to))
    return NavbarConfig(title=title, links=links)


def _build_footer(payload: object) -> FooterConfig:
    mapping = _require_mapping(payload, "footer")
    return FooterConfig(copyright=str(mapping.get("copyright") or ""))


def _build_search(payload: object) -> SearchConfig:
    """Build search settings; falsy values fall back to the defaults."""
    mapping = _require_mapping(payload, "search")
    base = SearchConfig()
    return SearchConfig(
        max_results=int(mapping.get("maxResults") or base.max_results),
        fuzzy_threshold=float(mapping.get("fuzzyThreshold") or base.fuzzy_threshold),
        min_match_length=int(mapping.get("minMatchLength") or base.min_match_length),
    )


def _build_versions(payload: object) -> VersionsConfig | None:
    if payload is None:
        return None
    mapping = _require_mapping(payload, "versions")
    available = [str(item) for item in mapping.get("available") or []]
    current = _optional_str(mapping.get("current"))
    latest = _optional_str(mapping.get("latest"))
    if not current:
        msg = "'versions.current' is required when versions are configured."
        raise SiteConfigError(msg)
    return VersionsConfig(current=current, latest=latest or current, available=available)


__all__ = [
    "DEFAULT_VERSIONS_DIR",
    "REQUIRED_KEYS",
    "_build_footer",
    "_build_navbar",
    "_build_search",
    "_build_versions",
    "_optional_str",
    "_require_mapping",
    "_resolve_path",
]
