"""Route descriptors — the outcome of a route lookup.

A descriptor is either a ``FoundRoute`` carrying the matched table entry's
fields or a ``MissingRoute`` standing for "not found".  Callers branch on
``exists()`` (or ``match``/``isinstance``) instead of checking for None.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

from folio.events import Event
from folio.routing.types import RouteEntry, RouteType, SourceType

if TYPE_CHECKING:
    from folio.session import Session

StatusCallback = Callable[[int], Any]


class Route:
    """Behaviour shared by both descriptor variants."""

    __slots__ = ()

    id: str | None
    name: str | None
    type: RouteType | None
    path: str | None
    content_path: str | None
    source_type: SourceType | None

    def exists(self) -> bool:
        return self.id is not None

    def is_equal_to(self, other: Route | None) -> bool:
        """Two existing routes are equal when their rendered paths match."""
        if other is None or not other.exists() or not self.exists():
            return False
        return other.path == self.path

    def is_current(self, session: Session) -> bool:
        """Whether this route is the one currently displayed."""
        return self.is_equal_to(session.current_route)

    async def apply(
        self,
        session: Session,
        on_complete: StatusCallback | None = None,
    ) -> Self:
        """Apply the route to the session and render it.

        Loads (or clears) the session's API documentation, emits
        ``Event.ROUTE`` and hands the route to the session's renderer.
        *on_complete* receives the renderer's HTTP-like status.
        """
        if self.type == RouteType.API and self.name is not None:
            session.load_api(self.name)
        else:
            session.clear_api()

        session.emitter.emit(Event.ROUTE, self if self.exists() else None)
        status = await session.renderer.render(session, self)
        if on_complete is not None:
            on_complete(status)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "contentPath": self.content_path,
            "path": self.path,
            "type": str(self.type) if self.type is not None else None,
            "sourceType": str(self.source_type) if self.source_type is not None else None,
            "name": self.name,
        }

    def __str__(self) -> str:
        return ", ".join(f"{key}: {value}" for key, value in self.to_dict().items())


@dataclass(frozen=True, slots=True)
class FoundRoute(Route):
    """A route that exists in the route table."""

    type: RouteType
    name: str
    path: str
    source_type: SourceType
    content_path: str | None = None

    @property
    def id(self) -> str:  # type: ignore[override]
        return f"{self.type}:{self.name}"

    @classmethod
    def from_entry(cls, entry: RouteEntry) -> FoundRoute:
        return cls(
            type=entry.type,
            name=entry.name,
            path=entry.path,
            source_type=entry.source_type,
            content_path=entry.content_path,
        )


@dataclass(frozen=True, slots=True)
class MissingRoute(Route):
    """The not-found route. Never equal to anything, renders as 404."""

    @property
    def id(self) -> None:  # type: ignore[override]
        return None

    @property
    def name(self) -> None:  # type: ignore[override]
        return None

    @property
    def type(self) -> None:  # type: ignore[override]
        return None

    @property
    def path(self) -> None:  # type: ignore[override]
        return None

    @property
    def content_path(self) -> None:  # type: ignore[override]
        return None

    @property
    def source_type(self) -> None:  # type: ignore[override]
        return None


NOT_FOUND = MissingRoute()
