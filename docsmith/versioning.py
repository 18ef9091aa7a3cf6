"""Snapshot the current docs as an archived, versioned copy.

``docsmith version 1.2.0`` copies the docs directory into
``<versionsDir>/version-1.2.0/``, records the sidebar derived from those docs in
``versioned_sidebars/version-1.2.0-sidebars.json``, and registers the version
in the site configuration so the next build renders it under ``/1.2.0/``.

Example
-------
.. code-block:: python

    from pathlib import Path
    from docsmith.versioning import create_version_snapshot

    snapshot = create_version_snapshot(config_path=Path("config.json"), version="1.2.0")
    print(snapshot.docs_dir)

"""

from __future__ import annotations

import copy
import dataclasses as dc
import json
import re
import shutil
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from ._constants import (
    VERSION_DIR_TEMPLATE,
    VERSION_SIDEBAR_TEMPLATE,
    VERSIONED_SIDEBARS_DIR,
)
from .config import load_site_config
from .config.helpers import DEFAULT_VERSIONS_DIR
from .generator.navigation import sidebar_from_slugs
from .generator.reader import compute_slug, discover_markdown_files
from .generator.search import write_json

if typ.TYPE_CHECKING:
    from pathlib import Path

SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


class VersionError(ValueError):
    """Raised when a version snapshot cannot be created."""


@dc.dataclass(slots=True)
class VersionSnapshot:
    """Locations written by :func:`create_version_snapshot`."""

    version: str
    docs_dir: Path
    sidebar_path: Path
    config_path: Path


def validate_version(version: str | None) -> str:
    """Return ``version`` when it is ``MAJOR.MINOR.PATCH``.

    Raises
    ------
    VersionError
        If the version is missing or not in semver form.
    """
    if not version:
        msg = "Please provide a version number"
        raise VersionError(msg)
    if not SEMVER_PATTERN.match(version):
        msg = "Version must be in semver format (e.g., 1.0.0)"
        raise VersionError(msg)
    return version


def create_version_snapshot(*, config_path: Path, version: str | None) -> VersionSnapshot:
    """Archive the current docs as ``version`` and update the configuration.

    Parameters
    ----------
    config_path : Path
        Site configuration file; it is rewritten in place.
    version : str | None
        Version label in ``MAJOR.MINOR.PATCH`` form.

    Returns
    -------
    VersionSnapshot
        Paths of the copied docs, the sidebar file, and the updated config.

    Raises
    ------
    VersionError
        If the version is missing, malformed, or already recorded.
    FileNotFoundError
        If the configuration file does not exist.
    """
    label = validate_version(version)
    config = load_site_config(config_path)
    if config.versions and label in config.versions.available:
        msg = f"Version {label} already exists"
        raise VersionError(msg)

    target_dir = config.resolved_versions_dir / VERSION_DIR_TEMPLATE.format(version=label)
    target_dir.parent.mkdir(parents=True, exist_ok=True)
    if config.docs_dir.is_dir():
        shutil.copytree(config.docs_dir, target_dir, dirs_exist_ok=True)
    else:
        target_dir.mkdir(parents=True, exist_ok=True)

    slugs = [compute_slug(path, target_dir) for path in discover_markdown_files(target_dir)]
    sidebar_path = (
        config.root_dir
        / VERSIONED_SIDEBARS_DIR
        / VERSION_SIDEBAR_TEMPLATE.format(version=label)
    )
    write_json(sidebar_path, [category.to_dict() for category in sidebar_from_slugs(slugs)])

    _record_version(config_path, config.raw, label)
    return VersionSnapshot(
        version=label,
        docs_dir=target_dir,
        sidebar_path=sidebar_path,
        config_path=config_path,
    )


def _record_version(
    config_path: Path, raw: typ.Mapping[str, typ.Any], version: str
) -> None:
    """Prepend ``version`` to the configured versions and persist the file.

    JSON configs are rewritten from the already loaded ``raw`` mapping. YAML
    configs are reloaded round-trip so their comments survive.
    """
    if config_path.suffix.lower() == ".json":
        document = copy.deepcopy(dict(raw))
        _apply_version(document, version)
        config_path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        return

    yaml = _build_roundtrip_yaml()
    with config_path.open("r", encoding="utf-8") as handle:
        document = yaml.load(handle) or CommentedMap()
    _apply_version(document, version)
    with config_path.open("w", encoding="utf-8") as handle:
        yaml.dump(document, handle)


def _apply_version(document: typ.MutableMapping[str, typ.Any], version: str) -> None:
    versions = document.get("versions")
    if not versions:
        document["versions"] = {
            "current": version,
            "latest": version,
            "available": [version],
        }
    else:
        available = versions.get("available") or []
        versions["available"] = [version, *available]
        versions["latest"] = version
    if not document.get("versionsDir"):
        document["versionsDir"] = DEFAULT_VERSIONS_DIR


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


__all__ = [
    "SEMVER_PATTERN",
    "VersionError",
    "VersionSnapshot",
    "create_version_snapshot",
    "validate_version",
]
