"""Load site configuration JSON (or YAML) into typed dataclasses."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    DEFAULT_VERSIONS_DIR,
    REQUIRED_KEYS,
    _build_footer,
    _build_navbar,
    _build_search,
    _build_versions,
    _optional_str,
    _resolve_path,
)
from .models import SiteConfig, SiteConfigError


def read_config_mapping(path: Path) -> dict[str, typ.Any]:
    """Return the raw configuration mapping stored at ``path``.

    ``.json`` files are decoded with :mod:`json`; anything else is read as
    YAML 1.2 through the ruamel safe loader.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level structure is not a mapping.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    if path.suffix.lower() == ".json":
        loaded = json.loads(path.read_text(encoding="utf-8")) or {}
    else:
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level configuration structure must be a mapping."
        raise SiteConfigError(msg)
    return dict(loaded)


def load_site_config(path: Path) -> SiteConfig:
    """Load the configuration describing the documentation site.

    Parameters
    ----------
    path : Path
        Filesystem path to ``config.json`` (or an equivalent YAML file).
        Relative directories inside the file resolve against its parent.

    Returns
    -------
    SiteConfig
        Parsed site configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If required keys are missing or sections have the wrong shape.
    YAMLError
        If the document cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docsmith.config import load_site_config
    >>> config = load_site_config(Path("config.json"))  # doctest: +SKIP
    >>> config.base_url  # doctest: +SKIP
    '/'
    """
    raw = read_config_mapping(path)
    missing = [key for key in REQUIRED_KEYS if _optional_str(raw.get(key)) is None]
    if missing:
        msg = f"Missing required config keys: {', '.join(missing)}."
        raise SiteConfigError(msg)

    root_dir = path.resolve().parent
    theme_dir = _optional_str(raw.get("themeDir"))
    versions_dir = _optional_str(raw.get("versionsDir")) or DEFAULT_VERSIONS_DIR
    return SiteConfig(
        root_dir=root_dir,
        output_dir=_resolve_path(root_dir, str(raw["outputDir"])),
        docs_dir=_resolve_path(root_dir, str(raw["docsDir"])),
        base_url=str(raw["baseUrl"]),
        title=str(raw["title"]),
        description=str(raw.get("description") or ""),
        navbar=_build_navbar(raw.get("navbar")),
        footer=_build_footer(raw.get("footer")),
        search=_build_search(raw.get("search")),
        versions=_build_versions(raw.get("versions")),
        versions_dir=_resolve_path(root_dir, versions_dir),
        theme_dir=_resolve_path(root_dir, theme_dir) if theme_dir else None,
        pygments_style=_optional_str(raw.get("pygmentsStyle")) or "github-dark",
        raw=raw,
    )


__all__ = ["load_site_config", "read_config_mapping"]
