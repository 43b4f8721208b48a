"""Folio — documentation sites as single-page apps.

Builds JS API docs and Markdown/HTML guides into a static site, and runs
the single-page app's routing: a frozen route table, a resolver from
names, query strings and route ids, and a navigation dispatcher.

Build::

    from folio import Builder, load_config

    result = Builder(load_config("folio.json")).build()

Navigate a built site::

    from folio import Navigator, Session, SiteRenderer

    renderer = SiteRenderer.for_site("./docs")
    session = Session.load("./docs", renderer)
    navigator = Navigator(session)
    await navigator.load("/")
    await navigator.navigate("?content=guide")
"""

__version__ = "0.1.0"
__all__ = [
    "AppConfig",
    "BuildConfig",
    "BuildError",
    "BuildResult",
    "Builder",
    "ConfigurationError",
    "Event",
    "FolioError",
    "FoundRoute",
    "MissingRoute",
    "Navigator",
    "Route",
    "RouteResolver",
    "RouteTable",
    "RouteType",
    "Session",
    "SiteRenderer",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import folio`` fast while providing a clean top-level API.
    """
    if name in ("AppConfig", "BuildConfig", "load_config"):
        from folio import config as _config

        return getattr(_config, name)

    if name in ("Builder", "BuildResult"):
        from folio.build import builder as _builder

        return getattr(_builder, name)

    if name in ("Route", "FoundRoute", "MissingRoute"):
        from folio.routing import route as _route

        return getattr(_route, name)

    if name == "RouteResolver":
        from folio.routing.resolver import RouteResolver

        return RouteResolver

    if name == "RouteTable":
        from folio.routing.table import RouteTable

        return RouteTable

    if name == "RouteType":
        from folio.routing.types import RouteType

        return RouteType

    if name == "Session":
        from folio.session import Session

        return Session

    if name == "Navigator":
        from folio.spa.dispatcher import Navigator

        return Navigator

    if name == "SiteRenderer":
        from folio.render.renderer import SiteRenderer

        return SiteRenderer

    if name == "Event":
        from folio.events import Event

        return Event

    if name in ("FolioError", "ConfigurationError", "BuildError"):
        from folio import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
