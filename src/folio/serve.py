"""Serve a built documentation site.

``StaticSite`` is a small ASGI app serving files from a directory, with
directory index resolution.  ``run_server()`` runs it under pounce::

    folio serve ./docs --port 9000
"""

import logging
import mimetypes
from pathlib import Path
from typing import Any
from urllib.parse import unquote

import anyio

logger = logging.getLogger("folio.serve")

INDEX_FILES: tuple[str, ...] = tuple(
    f"{name}{ext}"
    for name in ("index", "default", "main", "home", "readme", "guide")
    for ext in (".htm", ".html")
)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9000


class StaticSite:
    """ASGI app serving a static directory.

    Security: resolves symlinks and verifies the final path is within the
    served directory to prevent path traversal.

    - ``GET``/``HEAD`` only; anything else is ``405``.
    - A directory requested without a trailing slash is redirected (``301``).
    - A directory is served through its first existing index file.
    """

    __slots__ = ("_cache_control", "_directory", "_index_files")

    def __init__(
        self,
        directory: str | Path,
        *,
        index_files: tuple[str, ...] = INDEX_FILES,
        cache_control: str = "no-cache",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index_files = index_files
        self._cache_control = cache_control

    @property
    def directory(self) -> Path:
        return self._directory

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] == "lifespan":
            await _lifespan(receive, send)
            return
        if scope["type"] != "http":
            msg = f"Unsupported scope type: {scope['type']!r}"
            raise RuntimeError(msg)

        method = scope.get("method", "GET")
        path = unquote(scope.get("path", "/"))
        status, headers, body = await self.respond(method, path)
        logger.info("%s %s %d", method, path, status)

        raw_headers = [(name.encode("latin-1"), value.encode("latin-1")) for name, value in headers]
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
        await send({"type": "http.response.start", "status": status, "headers": raw_headers})
        await send({"type": "http.response.body", "body": b"" if method == "HEAD" else body})

    async def respond(self, method: str, path: str) -> tuple[int, list[tuple[str, str]], bytes]:
        """Resolve a request to ``(status, headers, body)``."""
        if method not in ("GET", "HEAD"):
            return _text(405, "Method Not Allowed", [("allow", "GET, HEAD")])

        relative = path.lstrip("/")
        file_path = (self._directory / relative).resolve() if relative else self._directory
        if not file_path.is_relative_to(self._directory):
            return _text(403, "Forbidden")

        if file_path.is_dir():
            if relative and not path.endswith("/"):
                return 301, [("location", path + "/")], b""
            index = self._find_index(file_path)
            if index is None:
                return _text(404, "Not Found")
            file_path = index

        if not file_path.is_file():
            return _text(404, "Not Found")

        content_type, _ = mimetypes.guess_type(str(file_path))
        body = await anyio.Path(file_path).read_bytes()
        headers = [
            ("content-type", content_type or "application/octet-stream"),
            ("cache-control", self._cache_control),
        ]
        return 200, headers, body

    def _find_index(self, directory: Path) -> Path | None:
        for name in self._index_files:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        return None


def run_server(directory: str | Path, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve *directory* with pounce until interrupted."""
    from pounce.config import ServerConfig
    from pounce.server import Server

    app = StaticSite(directory)
    logger.info("Serving %s at http://%s:%d", app.directory, host, port)
    config = ServerConfig(host=host, port=port, workers=1)
    Server(config, app).run()


def _text(
    status: int,
    text: str,
    extra: list[tuple[str, str]] | None = None,
) -> tuple[int, list[tuple[str, str]], bytes]:
    headers = [("content-type", "text/plain; charset=utf-8"), *(extra or [])]
    return status, headers, text.encode("utf-8")


async def _lifespan(receive: Any, send: Any) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
