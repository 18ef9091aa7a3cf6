"""Tests for archiving the docs as a numbered version."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest
from ruamel.yaml import YAML

from docsmith.config import load_site_config
from docsmith.versioning import VersionError, create_version_snapshot, validate_version

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.mark.parametrize("version", ["1.0.0", "10.20.30"])
def test_validate_version_accepts_semver(version: str) -> None:
    assert validate_version(version) == version


@pytest.mark.parametrize(
    ("version", "message"),
    [
        (None, "Please provide a version number"),
        ("", "Please provide a version number"),
        ("1.0", "semver"),
        ("v1.0.0", "semver"),
        ("1.0.0-beta", "semver"),
    ],
)
def test_validate_version_rejects(version: str | None, message: str) -> None:
    with pytest.raises(VersionError, match=message):
        validate_version(version)


def test_first_snapshot(site_project: Path) -> None:
    """The first snapshot copies docs, writes a sidebar, and seeds versions."""
    root = site_project.parent

    snapshot = create_version_snapshot(config_path=site_project, version="1.0.0")

    assert snapshot.docs_dir == root.resolve() / "versioned_docs" / "version-1.0.0"
    assert (snapshot.docs_dir / "intro.md").read_text(encoding="utf-8") == (
        root / "docs" / "intro.md"
    ).read_text(encoding="utf-8")
    assert (snapshot.docs_dir / "images" / "diagram.png").is_file()

    sidebar = json.loads(snapshot.sidebar_path.read_text(encoding="utf-8"))
    assert sidebar == [
        {"type": "category", "label": "Getting Started", "items": ["intro"]},
        {"type": "category", "label": "Guides", "items": ["guides/setup", "guides/usage"]},
    ]

    config = json.loads(site_project.read_text(encoding="utf-8"))
    assert config["versions"] == {"current": "1.0.0", "latest": "1.0.0", "available": ["1.0.0"]}
    assert config["versionsDir"] == "versioned_docs"
    assert config["title"] == "Example Docs"


def test_second_snapshot_prepends(site_project: Path) -> None:
    create_version_snapshot(config_path=site_project, version="1.0.0")
    create_version_snapshot(config_path=site_project, version="1.1.0")

    config = json.loads(site_project.read_text(encoding="utf-8"))
    assert config["versions"] == {
        "current": "1.0.0",
        "latest": "1.1.0",
        "available": ["1.1.0", "1.0.0"],
    }


def test_duplicate_version_rejected(site_project: Path) -> None:
    create_version_snapshot(config_path=site_project, version="1.0.0")

    with pytest.raises(VersionError, match="Version 1.0.0 already exists"):
        create_version_snapshot(config_path=site_project, version="1.0.0")


def test_invalid_version_leaves_project_untouched(site_project: Path) -> None:
    before = site_project.read_text(encoding="utf-8")

    with pytest.raises(VersionError):
        create_version_snapshot(config_path=site_project, version="one")

    assert site_project.read_text(encoding="utf-8") == before
    assert not (site_project.parent / "versioned_docs").exists()


def test_yaml_config_round_trip(tmp_path: Path) -> None:
    """YAML configs keep their comments when the version is recorded."""
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "index.md").write_text("# Home\n", encoding="utf-8")
    path = tmp_path / "site.yaml"
    path.write_text(
        "# Site settings\ntitle: Docs\nbaseUrl: /\noutputDir: build\ndocsDir: docs\n"
        "navbar:\n  title: Brand\n",
        encoding="utf-8",
    )

    create_version_snapshot(config_path=path, version="2.0.0")

    text = path.read_text(encoding="utf-8")
    assert text.startswith("# Site settings\n")
    data = YAML(typ="safe").load(text)
    assert data["versions"]["available"] == ["2.0.0"]
    assert data["versionsDir"] == "versioned_docs"


def test_json_config_written_from_loaded_mapping(
    site_project: Path, mocker: MockerFixture
) -> None:
    """The JSON rewrite starts from the mapping the loader returned."""
    config = load_site_config(site_project)
    config.raw["editUrl"] = "https://example.com/edit"
    mocker.patch("docsmith.versioning.load_site_config", return_value=config)

    create_version_snapshot(config_path=site_project, version="1.0.0")

    written = json.loads(site_project.read_text(encoding="utf-8"))
    assert written["editUrl"] == "https://example.com/edit"
    assert written["versions"]["available"] == ["1.0.0"]
    assert "versions" not in config.raw
