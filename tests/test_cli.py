"""Tests for the ``docsmith`` command handlers."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest

from docsmith import cli

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.fixture(autouse=True)
def quiet_logging(mocker: MockerFixture) -> None:
    """Keep handlers from reconfiguring the root logger during tests."""
    mocker.patch.object(cli, "_configure_logging")


def test_build_prints_written_pages(
    site_project: Path, capsys: pytest.CaptureFixture[str], mocker: MockerFixture
) -> None:
    mocker.patch("docsmith.generator.builder.GitCliHistory.lookup_history", return_value=None)

    cli.build(config=site_project)

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert all(line.startswith("wrote ") for line in lines)
    assert any(line.endswith("intro.html") for line in lines)


def test_serve_uses_output_dir_and_base_url(site_project: Path, mocker: MockerFixture) -> None:
    serve_site = mocker.patch.object(cli, "serve_site")

    cli.serve(config=site_project, port=4321)

    serve_site.assert_called_once_with(
        site_project.parent.resolve() / "build", port=4321, base_url="/"
    )


def test_version_without_number_prints_usage(
    site_project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.version(None, config=site_project)

    assert excinfo.value.code == 1
    assert "Usage: docsmith version <version>" in capsys.readouterr().err


def test_version_with_bad_number(site_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.version("1.0", config=site_project)

    assert excinfo.value.code == 1
    assert capsys.readouterr().err.strip() == (
        "Error: Version must be in semver format (e.g., 1.0.0)"
    )


def test_version_creates_snapshot(site_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.version("1.0.0", config=site_project)

    assert "Version 1.0.0 created" in capsys.readouterr().out
    config = json.loads(site_project.read_text(encoding="utf-8"))
    assert config["versions"]["available"] == ["1.0.0"]


def test_dev_builds_serves_and_watches(site_project: Path, mocker: MockerFixture) -> None:
    """The dev loop builds once, starts the server, and hands off to the watcher."""
    build_site = mocker.patch.object(cli, "_build_site", return_value=[])
    server = mocker.Mock()
    mocker.patch.object(cli, "create_server", return_value=server)
    watcher_cls = mocker.patch.object(cli, "SiteWatcher")

    cli.dev(config=site_project, port=0, interval=0.1)

    build_site.assert_called_once_with(site_project)
    watched = watcher_cls.call_args.args[0]
    assert site_project in watched
    assert site_project.parent.resolve() / "docs" in watched
    assert watcher_cls.call_args.kwargs["interval"] == 0.1
    watcher_cls.return_value.watch.assert_called_once_with()
    server.shutdown.assert_called_once_with()
