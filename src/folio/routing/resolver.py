"""Route resolution — user-facing identifiers to route descriptors.

Translates a bare route name, a query string, or a ``"type:name"`` route
id into a ``FoundRoute`` or ``MissingRoute``.  Resolution never raises for
unknown routes; only an unrecognized route *type* string is treated as a
programming error.
"""

import logging
from urllib.parse import parse_qsl

from folio.config import AppConfig
from folio.errors import RouteTypeError
from folio.routing.route import NOT_FOUND, FoundRoute, Route
from folio.routing.table import RouteTable
from folio.routing.types import RouteType

logger = logging.getLogger("folio.spa")

# Query-string keys recognized for routing, in precedence order
QUERY_KEYS: tuple[RouteType, ...] = (RouteType.API, RouteType.CONTENT)


def strip_query_prefix(query_string: str | None) -> str:
    """Remove a leading ``?`` or ``&`` from a raw query string."""
    if not query_string:
        return ""
    if query_string[0] in "?&":
        return query_string[1:]
    return query_string


def route_name(segment: str | None) -> str:
    """Normalize a path segment into a route name (trailing slash dropped)."""
    return (segment or "").rstrip("/")


class RouteResolver:
    """Resolve route descriptors against a frozen route table.

    Usage::

        resolver = RouteResolver(table, config)
        resolver.from_name_and_type("guide", "content")
        resolver.from_query_string("?api=web")
        resolver.from_route_id("content:guide")
    """

    __slots__ = ("_config", "_table")

    def __init__(self, table: RouteTable, config: AppConfig | None = None) -> None:
        self._table = table
        self._config = config or AppConfig()

    @property
    def table(self) -> RouteTable:
        return self._table

    def from_name_and_type(self, name: str | None, route_type: str | None) -> Route:
        """Look up ``(type, name)``.

        - No type: not found (this is how the wildcard 404 route is built).
        - Unrecognized type string: ``RouteTypeError``.
        - Empty name: the default API for API routes, not found for content.
        - Case-insensitive routing lowercases *name* first.
        """
        if not route_type:
            return NOT_FOUND
        try:
            resolved_type = RouteType(route_type)
        except ValueError:
            raise RouteTypeError(route_type) from None

        if not name:
            if resolved_type is not RouteType.API:
                return NOT_FOUND
            name = self._config.default_api_name
        elif not self._config.routing.case_sensitive:
            name = name.lower()

        entry = self._table.find(resolved_type, name)
        if entry is None:
            return NOT_FOUND
        return FoundRoute.from_entry(entry)

    def from_query_string(self, query_string: str | None) -> Route:
        """Resolve ``api=<name>`` or ``content=<name>`` from a query string.

        ``api`` wins when both keys are present.  Other parameters are
        ignored; a string without either key resolves to not found.
        """
        qs = strip_query_prefix(query_string)
        if not qs:
            return NOT_FOUND

        params: dict[str, str] = {}
        for key, value in parse_qsl(qs, keep_blank_values=True):
            params.setdefault(key.lower(), value)

        for route_type in QUERY_KEYS:
            if route_type in params:
                return self.from_name_and_type(route_name(params[route_type]), route_type)
        return NOT_FOUND

    def from_route_id(self, route_id: str | None) -> Route:
        """Resolve a ``"type:name"`` id such as the configured entrance.

        A bare type (``"api"``) resolves the type's default route.
        """
        if not isinstance(route_id, str):
            logger.warning("Route ID is not a string: %r", route_id)
            return NOT_FOUND
        route_type, _, name = route_id.partition(":")
        return self.from_name_and_type(name, route_type)


def has_route_query(query_string: str | None) -> bool:
    """Whether a query string carries one of the routing keys."""
    qs = strip_query_prefix(query_string)
    if not qs:
        return False
    return any(key.lower() in QUERY_KEYS for key, _ in parse_qsl(qs, keep_blank_values=True))
