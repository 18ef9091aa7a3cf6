"""Poll source paths and rebuild the site when they change.

A snapshot maps every watched file to its modification time and size. The
watcher compares snapshots every ``interval`` seconds; once a change is seen it
waits for the tree to stay still for ``debounce`` seconds, so a burst of saves
results in a single rebuild.
"""

from __future__ import annotations

import logging
import time
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)

Snapshot = dict[str, tuple[float, int]]

DEFAULT_INTERVAL = 0.5
DEFAULT_DEBOUNCE = 0.3


def snapshot_paths(paths: cabc.Iterable[Path]) -> Snapshot:
    """Return modification times and sizes for every file under ``paths``."""
    snapshot: Snapshot = {}
    for root in paths:
        if root.is_file():
            candidates: cabc.Iterable[Path] = (root,)
        elif root.is_dir():
            candidates = (path for path in root.rglob("*") if path.is_file())
        else:
            continue
        for path in candidates:
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            snapshot[str(path)] = (stat.st_mtime, stat.st_size)
    return snapshot


def changed_paths(before: Snapshot, after: Snapshot) -> list[str]:
    """Return the sorted paths added, removed, or modified between snapshots.

    >>> changed_paths({"a": (1.0, 1)}, {"a": (2.0, 1), "b": (1.0, 1)})
    ['a', 'b']
    """
    keys = before.keys() | after.keys()
    return sorted(key for key in keys if before.get(key) != after.get(key))


class SiteWatcher:
    """Run ``rebuild`` whenever a watched path changes."""

    def __init__(
        self,
        paths: cabc.Sequence[Path],
        rebuild: cabc.Callable[[], object],
        *,
        interval: float = DEFAULT_INTERVAL,
        debounce: float = DEFAULT_DEBOUNCE,
        sleep: cabc.Callable[[float], None] = time.sleep,
    ) -> None:
        self.paths = list(paths)
        self.rebuild = rebuild
        self.interval = interval
        self.debounce = debounce
        self._sleep = sleep
        self._snapshot = snapshot_paths(self.paths)

    def poll(self) -> bool:
        """Check once for changes and rebuild if any settled; return whether it did."""
        current = snapshot_paths(self.paths)
        changes = changed_paths(self._snapshot, current)
        if not changes:
            return False

        while True:
            self._sleep(self.debounce)
            settled = snapshot_paths(self.paths)
            if settled == current:
                break
            changes = sorted(set(changes) | set(changed_paths(current, settled)))
            current = settled

        self._snapshot = current
        for path in changes:
            logger.info("Changed: %s", path)
        logger.info("Rebuilding...")
        try:
            self.rebuild()
        except Exception:
            logger.exception("Rebuild failed; waiting for the next change")
        return True

    def watch(self) -> None:
        """Poll until interrupted."""
        logger.info("Watching %s", ", ".join(str(path) for path in self.paths))
        try:
            while True:
                self.poll()
                self._sleep(self.interval)
        except KeyboardInterrupt:
            logger.info("Stopped watching")


__all__ = ["SiteWatcher", "changed_paths", "snapshot_paths"]
