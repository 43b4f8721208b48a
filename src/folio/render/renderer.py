"""Site renderer — renders route descriptors with kida partials.

Implements the ``Renderer`` protocol consumed by ``Route.apply()``:

- ``MissingRoute``  -> ``404.html``                           status 404
- API route         -> ``api.html`` with the session's docs   status 200
- content route     -> fetch ``content_path``, ``content.html``
                       (404 view when the loader reports 404)  loader status

Emits ``Event.RENDER`` after each render (``None`` payload for the 404
view) and ``Event.READY`` once, after the first successful render.
"""

import logging
from pathlib import Path
from typing import Any

from kida import Environment
from kida.utils.html import Markup

from folio.events import Event
from folio.render.loaders import ContentLoader, FileContentLoader
from folio.render.templating import (
    API_TEMPLATE,
    CONTENT_TEMPLATE,
    NOT_FOUND_TEMPLATE,
    create_environment,
    render_template,
)
from folio.routing.route import FoundRoute, MissingRoute, Route
from folio.routing.types import RouteType
from folio.session import Session

logger = logging.getLogger("folio.render")


class SiteRenderer:
    """Render documentation pages for a session.

    Args:
        loader: Where content pages are fetched from.
        env: kida Environment; defaults to the built-in templates.

    Attributes:
        html: The most recently rendered page body.
        status: Status of the most recent render.
    """

    __slots__ = ("_env", "_loader", "html", "status")

    def __init__(self, loader: ContentLoader, env: Environment | None = None) -> None:
        self._loader = loader
        self._env = env or create_environment()
        self.html = ""
        self.status: int | None = None

    @classmethod
    def for_site(cls, site_dir: str | Path, template_dir: str | Path | None = None) -> "SiteRenderer":
        """Renderer reading content from a built site directory."""
        return cls(FileContentLoader(site_dir), create_environment(template_dir))

    async def render(self, session: Session, route: Route) -> int:
        match route:
            case MissingRoute():
                return self._render_not_found(session, route)
            case FoundRoute(type=RouteType.API):
                self._render(session, API_TEMPLATE, route)
                return self._after_render(session, route, 200)
            case FoundRoute():
                status, text = await self._loader.load(route.content_path or "")
                if status == 404:
                    logger.warning("Content not found for route: %s", route)
                    return self._render_not_found(session, route)
                self._render(session, CONTENT_TEMPLATE, route, content=Markup(text))
                return self._after_render(session, route, status)
        msg = f"Cannot render {route!r}"
        raise TypeError(msg)

    def _context(self, session: Session, route: Route, **extra: Any) -> dict[str, Any]:
        return {
            "app": session.config,
            "route": route,
            "routes": session.table.entries,
            "documentation": session.documentation or (),
            "symbols": session.symbols or (),
            **extra,
        }

    def _render(self, session: Session, template: str, route: Route, **extra: Any) -> None:
        self.html = render_template(self._env, template, self._context(session, route, **extra))

    def _after_render(self, session: Session, route: Route, status: int) -> int:
        self.status = status
        session.emitter.emit(Event.RENDER, route)
        if session.initial_load:
            session.initial_load = False
            session.emitter.emit(Event.READY)
        return status

    def _render_not_found(self, session: Session, route: Route) -> int:
        self._render(session, NOT_FOUND_TEMPLATE, route)
        self.status = 404
        session.emitter.emit(Event.RENDER, None)
        return 404
