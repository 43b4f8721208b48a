"""Folio exception hierarchy.

Shared across the build pipeline, route table, resolver and CLI so every
module raises and catches the same types.

A route that cannot be found is *not* an error: the resolver hands back a
``MissingRoute`` instead of raising.
"""


class FolioError(Exception):
    """Base for all folio-specific errors."""


class ConfigurationError(FolioError):
    """Raised when build or app configuration is invalid.

    Typically raised by ``load_config()`` before a build starts.
    """


class RouteTypeError(ConfigurationError):
    """An unrecognized route type string reached the resolver.

    Signals an integration error upstream (a bad entrance id, a template
    calling ``create_route`` with a typo), never a user-facing 404.
    """

    def __init__(self, route_type: object) -> None:
        self.route_type = route_type
        super().__init__(
            f"Unknown route type {route_type!r}. Expected 'api' or 'content'."
        )


class BuildError(FolioError):
    """Raised when the documentation build cannot continue."""


class TableFrozenError(BuildError):
    """Raised when adding a route after the table has been frozen."""


class InvalidRouteNameError(BuildError):
    """A route name is reserved or not usable as a URL/path segment."""


class DuplicateRouteError(BuildError):
    """Two sources produced the same ``(type, name)`` pair."""

    def __init__(self, route_type: str, name: str) -> None:
        self.route_type = route_type
        self.name = name
        super().__init__(
            f"Cannot have duplicate route name {name!r} with the same route type {route_type!r}."
        )
