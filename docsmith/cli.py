"""Cyclopts CLI entrypoint for building and previewing docsmith sites.

The ``docsmith`` console script renders a Markdown docs tree into a static
site, serves the output locally, rebuilds on change while serving, and
archives the current docs as a numbered version.

Examples
--------
Build the site described by ``config.json`` in the current directory:

>>> from docsmith.cli import main
>>> main()  # doctest: +SKIP

Snapshot the docs as version 1.0.0:

>>> from docsmith.cli import app
>>> app(["version", "1.0.0"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import threading
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .generator import SiteBuilder
from .server import create_server, normalise_base_url, serve_site
from .versioning import VersionError, create_version_snapshot
from .watcher import DEFAULT_INTERVAL, SiteWatcher

DEFAULT_CONFIG = Path("config.json")
DEFAULT_PORT = 3000

app = App(name="docsmith", config=cyclopts.config.Env("DOCSMITH_", command=False))  # type: ignore[unknown-argument]

logger = logging.getLogger(__name__)

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to the site configuration", env_var="DOCSMITH_CONFIG")
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log debug output")]
PortOption = typ.Annotated[
    int, Parameter(help="Port for the preview server", env_var=["DOCSMITH_PORT", "PORT"])
]


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        force=True,
    )


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _build_site(config_path: Path) -> list[Path]:
    site_config = load_site_config(config_path)
    result = SiteBuilder(site_config).run()
    return result.pages


@app.command(help="Build the static documentation site.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Render every Markdown document and write the site to ``outputDir``.

    Parameters
    ----------
    config : Path, optional
        Site configuration file (overridable via ``DOCSMITH_CONFIG``).
    verbose : bool, optional
        Emit debug logging.

    Returns
    -------
    None
        Prints one ``wrote <path>`` line per generated page.
    """
    _configure_logging(verbose=verbose)
    for path in _build_site(config):
        print(f"wrote {_format_path(path)}")


@app.command(help="Serve the built site locally.")
def serve(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    port: PortOption = DEFAULT_PORT,
    verbose: VerboseOption = False,
) -> None:
    """Serve ``outputDir`` over HTTP under the configured ``baseUrl``."""
    _configure_logging(verbose=verbose)
    site_config = load_site_config(config)
    serve_site(site_config.output_dir, port=port, base_url=site_config.base_url)


@app.command(help="Build, serve, and rebuild whenever sources change.")
def dev(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    port: PortOption = DEFAULT_PORT,
    interval: typ.Annotated[
        float, Parameter(help="Seconds between change checks")
    ] = DEFAULT_INTERVAL,
    verbose: VerboseOption = False,
) -> None:
    """Run the development loop until interrupted.

    The preview server runs in a daemon thread while the main thread polls the
    docs directory, the theme directory, and the configuration file. Rebuild
    failures are logged and the loop keeps watching.
    """
    _configure_logging(verbose=verbose)
    site_config = load_site_config(config)
    _build_site(config)

    server = create_server(site_config.output_dir, port=port, base_url=site_config.base_url)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.info(
        "Dev server running at http://localhost:%d%s",
        port,
        normalise_base_url(site_config.base_url),
    )

    watched = [site_config.docs_dir, config]
    if site_config.theme_dir is not None:
        watched.append(site_config.theme_dir)
    try:
        SiteWatcher(watched, lambda: _build_site(config), interval=interval).watch()
    finally:
        server.shutdown()
        server.server_close()


@app.command(help="Archive the current docs as a numbered version.")
def version(
    number: typ.Annotated[
        str | None, Parameter(help="Version in MAJOR.MINOR.PATCH form")
    ] = None,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Copy the docs into the versions directory and record the version.

    Parameters
    ----------
    number : str or None, optional
        Version label such as ``1.2.0``.
    config : Path, optional
        Site configuration file; rewritten with the new version.
    verbose : bool, optional
        Emit debug logging.

    Returns
    -------
    None
        Exits with status 1 and an ``Error:`` line when the version is
        missing, malformed, or already recorded.
    """
    _configure_logging(verbose=verbose)
    if not number:
        print("Usage: docsmith version <version>", file=sys.stderr)
        print("Example: docsmith version 1.0.0", file=sys.stderr)
        sys.exit(1)
    try:
        snapshot = create_version_snapshot(config_path=config, version=number)
    except VersionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"wrote {_format_path(snapshot.docs_dir)}")
    print(f"wrote {_format_path(snapshot.sidebar_path)}")
    print(f"Version {snapshot.version} created")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docsmith`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
