"""Route enums and the frozen RouteEntry record.

A ``RouteEntry`` is one row of the route table built at documentation
build time and consumed read-only by the SPA at runtime.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class RouteType(StrEnum):
    """Type of an SPA route."""

    API = "api"
    CONTENT = "content"


class SourceType(StrEnum):
    """Kind of source a route was generated from."""

    JS = "js"
    MD = "md"
    HTML = "html"


class RoutingMethod(StrEnum):
    """How routes are encoded in URLs.

    ``query``: ``?api=web``, ``?content=guide`` (same document).
    ``path``:  ``/api/web/``, ``/guide/`` (history API; needs the redirect
    trick on static hosts).
    """

    QUERY = "query"
    PATH = "path"


class ServerType(StrEnum):
    """Host the generated site is deployed to."""

    APACHE = "apache"
    GITHUB = "github"
    STATIC = "static"
    WINDOWS = "windows"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A single route table row.

    Attributes:
        type: API or CONTENT.
        name: Identifier, unique within its type.
        path: URL-facing path; shape depends on the routing method.
        source_type: Provenance of the route.
        content_path: Path of the pre-rendered HTML, ``None`` for API routes.
    """

    type: RouteType
    name: str
    path: str
    source_type: SourceType
    content_path: str | None = None

    @property
    def id(self) -> str:
        return f"{self.type}:{self.name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": str(self.type),
            "name": self.name,
            "path": self.path,
            "contentPath": self.content_path,
            "sourceType": str(self.source_type),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RouteEntry":
        """Rebuild an entry from its ``to_dict()`` form.

        The stored ``id`` is ignored; it is always derived.
        """
        return cls(
            type=RouteType(data["type"]),
            name=data["name"],
            path=data["path"],
            source_type=SourceType(data["sourceType"]),
            content_path=data.get("contentPath"),
        )
