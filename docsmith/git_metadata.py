"""Look up creation and last-update details for files from git history.

The build only depends on the narrow :class:`GitHistory` protocol so tests can
swap in :class:`NullHistory` or an in-memory fake instead of spawning ``git``.
Lookups are best effort: an untracked file, a missing ``git`` binary, or a
directory outside a repository all yield ``None``.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import subprocess
import typing as typ
from pathlib import Path

LOG_FORMAT = "%at|%an|%ae"


@dc.dataclass(frozen=True, slots=True)
class GitMetadata:
    """Formatted commit details for one file."""

    last_updated: str
    last_updated_by: str
    created: str | None = None
    created_by: str | None = None


class GitHistory(typ.Protocol):
    """Anything that can answer history questions about a file."""

    def lookup_history(self, path: Path) -> GitMetadata | None:
        """Return commit details for ``path`` or None when unavailable."""
        ...


class NullHistory:
    """History source used when git metadata is disabled."""

    def lookup_history(self, path: Path) -> GitMetadata | None:  # noqa: ARG002
        return None


def format_commit_date(timestamp: int) -> str:
    """Format a Unix timestamp as ``Month D, YYYY`` in UTC.

    >>> format_commit_date(1705276800)
    'January 15, 2024'
    """
    moment = dt.datetime.fromtimestamp(timestamp, tz=dt.UTC)
    return f"{moment:%B} {moment.day}, {moment.year}"


def _parse_log_line(line: str) -> tuple[str, str] | None:
    """Return ``(date, author)`` from a ``%at|%an|%ae`` line."""
    parts = line.strip().split("|")
    if len(parts) < 2 or not parts[0].isdigit():
        return None
    return format_commit_date(int(parts[0])), parts[1]


class GitCliHistory:
    """Query the ``git`` executable for first and last commits of a file."""

    def __init__(
        self,
        root_dir: Path,
        *,
        runner: typ.Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
    ) -> None:
        """Bind the history lookup to a repository working tree.

        Parameters
        ----------
        root_dir : Path
            Directory the ``git`` commands run in.
        runner : Callable, optional
            ``subprocess.run`` compatible callable; injectable for tests.
        """
        self.root_dir = root_dir
        self._runner = runner

    def lookup_history(self, path: Path) -> GitMetadata | None:
        """Return last-update and creation details for ``path``, if tracked."""
        try:
            last_output = self._git("log", "-1", f"--format={LOG_FORMAT}", "--", str(path))
            first_output = self._git(
                "log",
                "--diff-filter=A",
                "--follow",
                f"--format={LOG_FORMAT}",
                "--",
                str(path),
            )
        except (OSError, subprocess.CalledProcessError):
            return None

        last = _parse_log_line(last_output)
        if last is None:
            return None
        first_lines = [line for line in first_output.splitlines() if line.strip()]
        first = _parse_log_line(first_lines[-1]) if first_lines else None
        return GitMetadata(
            last_updated=last[0],
            last_updated_by=last[1],
            created=first[0] if first else None,
            created_by=first[1] if first else None,
        )

    def _git(self, *args: str) -> str:
        result = self._runner(  # noqa: S603 - fixed git argv
            ["git", *args],
            cwd=self.root_dir,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()


__all__ = [
    "GitCliHistory",
    "GitHistory",
    "GitMetadata",
    "NullHistory",
    "format_commit_date",
]
