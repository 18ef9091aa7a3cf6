"""Tests for the polling change watcher."""

from __future__ import annotations

import os
from pathlib import Path

from docsmith.watcher import SiteWatcher, changed_paths, snapshot_paths


def _touch(path: Path, text: str, mtime: float) -> None:
    path.write_text(text, encoding="utf-8")
    os.utime(path, (mtime, mtime))


def test_snapshot_covers_files_and_directories(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    (docs / "sub").mkdir(parents=True)
    _touch(docs / "sub" / "a.md", "a", 1000)
    config = tmp_path / "config.json"
    _touch(config, "{}", 1000)

    snapshot = snapshot_paths([docs, config, tmp_path / "absent"])

    assert sorted(snapshot) == sorted([str(docs / "sub" / "a.md"), str(config)])


def test_changed_paths_detects_edits_additions_and_removals() -> None:
    before = {"a": (1.0, 1), "b": (1.0, 1)}
    after = {"a": (2.0, 1), "c": (1.0, 1)}

    assert changed_paths(before, after) == ["a", "b", "c"]


def test_poll_rebuilds_once_after_changes_settle(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    page = docs / "a.md"
    _touch(page, "one", 1000)
    rebuilds: list[int] = []
    sleeps: list[float] = []
    watcher = SiteWatcher([docs], lambda: rebuilds.append(1), sleep=sleeps.append)

    assert watcher.poll() is False
    _touch(page, "two", 2000)
    assert watcher.poll() is True
    assert rebuilds == [1]
    assert sleeps == [watcher.debounce]
    assert watcher.poll() is False


def test_rebuild_failure_keeps_watching(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    _touch(docs / "a.md", "one", 1000)
    calls: list[int] = []

    def failing() -> None:
        calls.append(1)
        msg = "broken front matter"
        raise ValueError(msg)

    watcher = SiteWatcher([docs], failing, sleep=lambda _seconds: None)
    _touch(docs / "b.md", "new", 1000)

    assert watcher.poll() is True
    _touch(docs / "b.md", "newer", 3000)
    assert watcher.poll() is True
    assert calls == [1, 1]
