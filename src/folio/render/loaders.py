"""Content loaders — fetch pre-rendered content pages.

A loader returns ``(status, text)`` in the style of an HTTP fetch: 200
with the body on success, 404 with an empty body when the content is
missing.  The renderer treats anything but 404 as renderable and passes
the status through.
"""

import logging
from pathlib import Path
from typing import Protocol

import anyio
import httpx

logger = logging.getLogger("folio.render")


class ContentLoader(Protocol):
    """Fetches the text of a content path."""

    async def load(self, content_path: str) -> tuple[int, str]: ...


class FileContentLoader:
    """Load content from a built site directory.

    Security: resolves the final path and verifies it stays inside the
    site directory to prevent path traversal.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    async def load(self, content_path: str) -> tuple[int, str]:
        file_path = (self._root / content_path.lstrip("/")).resolve()
        if not file_path.is_relative_to(self._root):
            logger.debug("GET 403 %s", content_path)
            return 403, ""

        path = anyio.Path(file_path)
        if not await path.is_file():
            logger.debug("GET 404 %s", content_path)
            return 404, ""

        text = await path.read_text(encoding="utf-8")
        logger.debug("GET 200 %s", content_path)
        return 200, text


class HttpContentLoader:
    """Load content over HTTP relative to a base URL.

    A new ``httpx.AsyncClient`` is created per request unless one is
    supplied.  Transport errors are reported as status 0.
    """

    __slots__ = ("_base_url", "_client", "_timeout")

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._client = client
        self._timeout = timeout

    async def load(self, content_path: str) -> tuple[int, str]:
        url = self._base_url + content_path.lstrip("/")
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("GET failed %s: %s", url, exc)
            return 0, ""

        logger.debug("GET %d %s", response.status_code, url)
        text = response.text if response.status_code == 200 else ""
        return response.status_code, text
