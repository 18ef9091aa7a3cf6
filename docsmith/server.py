"""Serve a built site locally under its configured base URL.

The site is generated with links rooted at ``baseUrl`` (for example
``/docs-site/``), so the handler strips that prefix before resolving files in
the output directory and redirects ``/`` to the prefix.
"""

from __future__ import annotations

import functools
import logging
import typing as typ
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class BasePathRequestHandler(SimpleHTTPRequestHandler):
    """Static file handler that mounts the output directory at ``base_url``."""

    def __init__(self, *args: typ.Any, base_url: str = "/", **kwargs: typ.Any) -> None:
        self.base_url = normalise_base_url(base_url)
        super().__init__(*args, **kwargs)

    def do_GET(self) -> None:  # noqa: N802 - http.server naming
        if self._redirect_to_base():
            return
        super().do_GET()

    def do_HEAD(self) -> None:  # noqa: N802 - http.server naming
        if self._redirect_to_base():
            return
        super().do_HEAD()

    def translate_path(self, path: str) -> str:
        """Map ``<base_url>rest`` onto ``<directory>/rest``."""
        if self.base_url != "/" and path.startswith(self.base_url):
            path = "/" + path[len(self.base_url) :]
        return super().translate_path(path)

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)

    def _redirect_to_base(self) -> bool:
        if self.base_url == "/" or self.path not in {"/", self.base_url.rstrip("/")}:
            return False
        self.send_response(302)
        self.send_header("Location", self.base_url)
        self.end_headers()
        return True


def normalise_base_url(base_url: str) -> str:
    """Return ``base_url`` with exactly one leading and trailing slash.

    >>> normalise_base_url("docs")
    '/docs/'
    >>> normalise_base_url("/")
    '/'
    """
    stripped = base_url.strip("/")
    return f"/{stripped}/" if stripped else "/"


def create_server(
    output_dir: Path, *, port: int, base_url: str = "/", host: str = ""
) -> ThreadingHTTPServer:
    """Return an HTTP server for ``output_dir`` without starting it."""
    handler = functools.partial(
        BasePathRequestHandler, directory=str(output_dir), base_url=base_url
    )
    return ThreadingHTTPServer((host, port), handler)


def serve_site(output_dir: Path, *, port: int, base_url: str = "/") -> None:
    """Serve ``output_dir`` until interrupted."""
    server = create_server(output_dir, port=port, base_url=base_url)
    logger.info(
        "Serving %s at http://localhost:%d%s",
        output_dir,
        port,
        normalise_base_url(base_url),
    )
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Stopping server")
    finally:
        server.server_close()


__all__ = ["BasePathRequestHandler", "create_server", "normalise_base_url", "serve_site"]
