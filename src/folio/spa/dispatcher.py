"""Navigation dispatcher — maps navigation intents to route application.

The only stateful control-flow component of the SPA.  Every navigation
(link click, history pop, manual ``navigate()`` call) is matched against
the registered patterns, resolved to a route descriptor and applied
through the session's renderer.

Pipeline for one navigation::

    url -> Location (base stripped)
        -> PatternRouter.match()       (root / main file / api / content)
        -> RouteResolver               (FoundRoute | MissingRoute)
        -> idempotence check           (current route: NAVIGATE only)
        -> Route.apply()               (renderer; NAVIGATE on status 200)

Misses at any step end in the not-found branch, which applies a route
built with no type so the renderer shows its 404 view.  There are no
retries, no debouncing and no cancellation: overlapping navigations each
run to completion, and the last one to finish wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import urljoin

import anyio

from folio.events import Event
from folio.routing.patterns import Pattern, PatternRouter
from folio.routing.resolver import has_route_query, route_name, strip_query_prefix
from folio.routing.route import Route
from folio.routing.types import RouteType
from folio.session import Session
from folio.spa.location import Location, join_base, parse_location
from folio.spa.storage import consume_redirect

logger = logging.getLogger("folio.spa")

# Pattern kinds
ROOT = "root"
MAIN = "main"
API = "api"
CONTENT = "content"


class Outcome(StrEnum):
    """How a navigation ended."""

    # A new route was rendered successfully
    APPLIED = "applied"
    # Target is the current route; nothing was reloaded
    UNCHANGED = "unchanged"
    # Renderer reported a non-200 status
    FAILED = "failed"
    # No route matched; the 404 view was rendered
    NOT_FOUND = "not_found"
    # Navigation was redirected; see ``NavigationResult.redirect``
    REDIRECTED = "redirected"


@dataclass(frozen=True, slots=True)
class NavigationResult:
    """Outcome of one ``Navigator.navigate()`` call."""

    outcome: Outcome
    route: Route
    location: Location
    status: int | None = None
    redirect: NavigationResult | None = None

    @property
    def final(self) -> NavigationResult:
        """The result at the end of any redirect chain."""
        result = self
        while result.redirect is not None:
            result = result.redirect
        return result


class Navigator:
    """Navigation dispatcher bound to one ``Session``.

    Usage::

        navigator = Navigator(session)
        await navigator.load("/")                 # start + first dispatch
        await navigator.navigate("/api/web/")     # path routing
        await navigator.navigate("?content=guide")  # query routing
        await navigator.back()
    """

    __slots__ = ("_history", "_router", "_started", "session")

    def __init__(self, session: Session) -> None:
        self.session = session
        self._router: PatternRouter | None = None
        self._history: list[str] = []
        self._started = False

    # -- setup --------------------------------------------------------------

    def start(self) -> None:
        """Resolve and cache the entrance route and compile the patterns.

        Idempotent: later calls do nothing.
        """
        if self._started:
            return
        session = self.session
        config = session.config

        logger.info("SPA configuration:")
        logger.info("  App title:       %s", config.title)
        logger.info("  Routing method:  %s", config.routing.method)
        logger.info("  App server:      %s", config.server)
        logger.info("  Base path:       %s", config.base)
        logger.info("  Entrance route:  %s", config.entrance)

        session.entrance_route = session.resolver.from_route_id(config.entrance)
        if not session.entrance_route.exists():
            logger.warning("Entrance route %r does not exist", config.entrance)

        router = PatternRouter()
        router.add(Pattern("/", ROOT))
        router.add(Pattern("/" + config.main_file, MAIN))
        if config.path_routing:
            router.add(Pattern("/api", API))
            router.add(Pattern("/api/{name:path}", API))
            router.add(Pattern("/{name:path}", CONTENT))
        router.compile()
        self._router = router
        self._started = True

    async def load(self, url: str = "/") -> NavigationResult:
        """Start the dispatcher and dispatch the initial URL."""
        self.session.initial_load = True
        self.start()
        return await self.navigate(url)

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    @property
    def url(self) -> str | None:
        """The URL of the last navigation, after redirects."""
        return self._history[-1] if self._history else None

    # -- navigation ---------------------------------------------------------

    async def navigate(self, url: str) -> NavigationResult:
        """Dispatch *url* and record it in the history.

        Query-only and fragment-only targets resolve against the current
        URL (or the base before the first navigation), as a browser does.
        """
        url = self._resolve(url)
        self._history.append(url)
        return await self._dispatch(url)

    def _resolve(self, url: str) -> str:
        if url and not url.startswith(("?", "#")):
            return url
        return urljoin(self.url or join_base(self.session.config.base, ""), url)

    async def back(self) -> NavigationResult | None:
        """Go one step back in history, like a browser ``popstate``.

        Returns None when there is no previous entry.
        """
        if len(self._history) < 2:
            return None
        self._history.pop()
        return await self._dispatch(self._history[-1])

    async def _dispatch(self, url: str) -> NavigationResult:
        if not self._started or self._router is None:
            msg = "Navigator.start() must be called before navigating."
            raise RuntimeError(msg)

        location = parse_location(url, self.session.config.base)
        if not location.in_base:
            return await self._not_found(location)

        match = self._router.match(location.path)
        if match is None:
            return await self._not_found(location)

        if match.kind == MAIN:
            query = f"?{location.query_string}" if location.query_string else ""
            return await self._redirect(location, "/" + query)
        if match.kind == ROOT:
            return await self._root(location)

        resolver = self.session.resolver
        name = route_name(match.params.get("name"))
        if match.kind == API:
            # No name segment resolves the default API
            route = resolver.from_name_and_type(name, RouteType.API)
        else:
            route = resolver.from_name_and_type(name, RouteType.CONTENT)

        if not route.exists():
            return await self._not_found(location)
        return await self._apply(route, location)

    async def _root(self, location: Location) -> NavigationResult:
        session = self.session
        config = session.config

        if config.path_routing:
            target = consume_redirect(session.storage)
            if target:
                logger.info("Redirecting to: %s", target)
                return await self._redirect(location, target)

        if config.settle_delay > 0:
            await anyio.sleep(config.settle_delay)

        query_string = strip_query_prefix(location.query_string)
        if config.path_routing:
            # Path routing only expects paths; a query on the root is unknown
            if query_string:
                return await self._not_found(location)
            route = session.entrance_route
        else:
            logger.debug("Query-string: %s", query_string)
            if has_route_query(query_string):
                route = session.resolver.from_query_string(query_string)
            else:
                route = session.entrance_route

        if route is None or not route.exists():
            return await self._not_found(location)
        return await self._apply(route, location)

    async def _apply(self, route: Route, location: Location) -> NavigationResult:
        session = self.session

        if route.is_current(session):
            # Same route (e.g. a hash change): no reload
            session.emitter.emit(Event.NAVIGATE, route)
            return NavigationResult(Outcome.UNCHANGED, route, location)

        statuses: list[int] = []
        await route.apply(session, statuses.append)
        status = statuses[0] if statuses else None

        if status == 200:
            session.current_route = route
            session.emitter.emit(Event.NAVIGATE, route)
            return NavigationResult(Outcome.APPLIED, route, location, status)

        return NavigationResult(Outcome.FAILED, route, location, status)

    async def _not_found(self, location: Location) -> NavigationResult:
        logger.warning("Unknown route: %s", location.path)
        route = self.session.resolver.from_name_and_type(None, None)
        statuses: list[int] = []
        await route.apply(self.session, statuses.append)
        self.session.current_route = route
        return NavigationResult(
            Outcome.NOT_FOUND,
            route,
            location,
            statuses[0] if statuses else None,
        )

    async def _redirect(self, location: Location, target: str) -> NavigationResult:
        """Replace the current history entry with *target* and dispatch it."""
        if target.startswith("?"):
            target = "/" + target
        base = self.session.config.base
        # A stored path may already carry the base
        url = target if target.startswith(base) else join_base(base, target)
        if self._history:
            self._history[-1] = url
        else:
            self._history.append(url)
        inner = await self._dispatch(url)
        return NavigationResult(
            Outcome.REDIRECTED,
            inner.route,
            location,
            inner.status,
            redirect=inner,
        )
