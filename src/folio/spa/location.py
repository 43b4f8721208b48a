"""URL handling for SPA navigation.

Splits a navigation target into path, query string and fragment, and
maps it into the app's base path.
"""

from dataclasses import dataclass
from urllib.parse import unquote, urlsplit


@dataclass(frozen=True, slots=True)
class Location:
    """A navigation target relative to the app base.

    Attributes:
        path: Decoded path inside the app, always starting with ``/``.
        query_string: Raw query string without the leading ``?``.
        fragment: Fragment without the leading ``#``.
        in_base: False when the URL lies outside the app's base path.
    """

    path: str
    query_string: str = ""
    fragment: str = ""
    in_base: bool = True

    @property
    def is_root(self) -> bool:
        return self.path == "/"


def parse_location(url: str, base: str = "/") -> Location:
    """Parse *url* (absolute path or full URL) relative to *base*.

    Examples::

        parse_location("/docs/api/web/?x=1#Foo", "/docs/")
        # Location(path="/api/web/", query_string="x=1", fragment="Foo")

        parse_location("?content=guide")
        # Location(path="/", query_string="content=guide")
    """
    parts = urlsplit(url)
    path = unquote(parts.path) or "/"
    if not path.startswith("/"):
        path = "/" + path

    in_base = True
    prefix = base.rstrip("/")
    if prefix:
        if path == prefix or path.startswith(prefix + "/"):
            path = path[len(prefix) :] or "/"
        else:
            in_base = False

    return Location(
        path=path,
        query_string=parts.query,
        fragment=parts.fragment,
        in_base=in_base,
    )


def join_base(base: str, path: str) -> str:
    """Join an in-app path (``/guide/`` or ``?content=guide``) to *base*."""
    base = base if base.endswith("/") else base + "/"
    return base + path.lstrip("/")
