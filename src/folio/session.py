"""Application session — the SPA's process-wide state made explicit.

One ``Session`` holds everything a running documentation app shares
between the dispatcher and the renderer: configuration, the frozen route
table, API documentation data, and the mutable slots for the current
route, the cached entrance route and the loaded API.  Tests build an
independent session per case.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from folio.config import AppConfig, parse_app_config
from folio.errors import ConfigurationError
from folio.events import EventEmitter
from folio.routing.resolver import RouteResolver
from folio.routing.table import RouteTable
from folio.spa.storage import MemoryStorage, Storage

if TYPE_CHECKING:
    from folio.routing.route import Route

logger = logging.getLogger("folio.spa")

DATA_FILE = "folio-data.json"


class Renderer(Protocol):
    """Renders a route and reports an HTTP-like status (200 = success)."""

    async def render(self, session: Session, route: Route) -> int: ...


@dataclass(frozen=True, slots=True)
class ApiDocs:
    """Documentation data of one API (a group of JS sources)."""

    documentation: tuple[dict[str, Any], ...] = ()
    symbols: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"documentation": list(self.documentation), "symbols": list(self.symbols)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApiDocs:
        return cls(
            documentation=tuple(data.get("documentation") or ()),
            symbols=tuple(data.get("symbols") or ()),
        )


@dataclass(slots=True)
class Session:
    """Shared state of one running documentation app.

    Attributes:
        config: Frozen app configuration (routing method is fixed here).
        table: Frozen route table.
        renderer: Renderer used by ``Route.apply()``.
        apis: API name -> documentation data.
        emitter: Event emitter shared by dispatcher and renderer.
        storage: Session-scoped key/value storage (redirect slot).
        current_route: Last successfully applied route.
        entrance_route: Entrance route, resolved once at start.
        documentation: Documentation of the API being displayed.
        symbols: Symbol names of the API being displayed.
        initial_load: True until the first render fires ``READY``.
    """

    config: AppConfig
    table: RouteTable
    renderer: Renderer
    apis: dict[str, ApiDocs] = field(default_factory=dict)
    emitter: EventEmitter = field(default_factory=EventEmitter)
    storage: Storage = field(default_factory=MemoryStorage)
    current_route: Route | None = None
    entrance_route: Route | None = None
    documentation: tuple[dict[str, Any], ...] | None = None
    symbols: tuple[str, ...] | None = None
    initial_load: bool = True
    _resolver: RouteResolver | None = field(default=None, init=False, repr=False)

    @property
    def resolver(self) -> RouteResolver:
        if self._resolver is None:
            self._resolver = RouteResolver(self.table, self.config)
        return self._resolver

    def load_api(self, name: str) -> None:
        """Make *name*'s documentation the displayed API data."""
        docs = self.apis.get(name)
        if docs is None:
            logger.warning("No documentation data for API %r", name)
            docs = ApiDocs()
        self.documentation = docs.documentation
        self.symbols = docs.symbols

    def clear_api(self) -> None:
        self.documentation = None
        self.symbols = None

    # -- construction -------------------------------------------------------

    @classmethod
    def from_data(
        cls,
        data: Mapping[str, Any],
        renderer: Renderer,
        *,
        storage: Storage | None = None,
    ) -> Session:
        """Build a session from the build's data document.

        *data* has ``app``, ``routes`` and ``apis`` keys, as written by
        the builder into ``folio-data.json``.
        """
        config = parse_app_config(data.get("app") or {})
        table = RouteTable.from_entries(data.get("routes") or (), config)
        apis = {name: ApiDocs.from_dict(value) for name, value in (data.get("apis") or {}).items()}
        return cls(
            config=config,
            table=table,
            renderer=renderer,
            apis=apis,
            storage=storage if storage is not None else MemoryStorage(),
        )

    @classmethod
    def load(cls, site_dir: str | Path, renderer: Renderer, **kwargs: Any) -> Session:
        """Load a session from a built site directory."""
        path = Path(site_dir) / DATA_FILE
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            msg = f"Not a built folio site (missing {DATA_FILE}): {site_dir}"
            raise ConfigurationError(msg) from exc
        return cls.from_data(data, renderer, **kwargs)
