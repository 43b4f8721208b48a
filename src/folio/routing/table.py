"""Route table — built once at documentation build time, then frozen.

Routes are added while sources are processed and the table is frozen
before it is written out (or handed to a Session).  Lookup is an exact
match on ``(type, name)``.
"""

import json
import re
from collections.abc import Iterable, Iterator
from typing import Any

from folio.config import AppConfig
from folio.errors import DuplicateRouteError, InvalidRouteNameError, TableFrozenError
from folio.routing.types import RouteEntry, RouteType, ServerType, SourceType

# Cannot be "api" or start with "api/"
_RESERVED_NAME_RE = re.compile(r"^api(/|$)")
_INVALID_CHARS_RE = re.compile(r"[#~&^`'\"]")

# "/" is left out of the invalid chars; it is allowed as a path separator.
_UNIX_INVALID_CHARS = re.compile(r"[\\|?*]")
_UNIX_INVALID_NAME = re.compile(r"^[.]+$")
_UNIX_MAX_LEN = 255
_WINDOWS_INVALID_CHARS = re.compile(r'[<>:"\\|?*]')
_WINDOWS_INVALID_NAME = re.compile(
    r"^(nul|prn|aux|con|lpt[0-9]|com[0-9]|(clock|keybd|screen|idle|config)\$)(\.|$)",
    re.IGNORECASE,
)
_WINDOWS_MAX_LEN = 260 - 12
_EDGE_DOT_OR_SPACE = re.compile(r"(^[. ]|[. ]$)")


def is_valid_path_name(name: str, *, windows: bool = False) -> bool:
    """Check whether *name* can be materialized as a directory path."""
    if not name or not name.strip():
        return False
    if _EDGE_DOT_OR_SPACE.search(name):
        return False
    if windows:
        chars, reserved, max_len = _WINDOWS_INVALID_CHARS, _WINDOWS_INVALID_NAME, _WINDOWS_MAX_LEN
    else:
        chars, reserved, max_len = _UNIX_INVALID_CHARS, _UNIX_INVALID_NAME, _UNIX_MAX_LEN
    return not chars.search(name) and not reserved.search(name) and len(name) <= max_len


class RouteTable:
    """Ordered, frozen-after-build collection of route entries.

    Usage::

        table = RouteTable(app_config)
        table.add("web", SourceType.JS)      # api:web
        table.add("guide", SourceType.MD)    # content:guide
        table.freeze()
        entry = table.find(RouteType.CONTENT, "guide")
    """

    __slots__ = ("_config", "_entries", "_frozen", "_index")

    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()
        self._entries: list[RouteEntry] = []
        self._index: dict[tuple[RouteType, str], RouteEntry] = {}
        self._frozen = False

    # -- build time ---------------------------------------------------------

    def add(self, name: str, source_type: SourceType) -> RouteEntry:
        """Create and register the route for a processed source.

        JS sources produce API routes; markdown and HTML produce content
        routes.  The default API group produces ``/api/`` (path routing)
        or ``?api`` (query routing).

        Raises:
            TableFrozenError: The table has been frozen.
            InvalidRouteNameError: The name is reserved or unusable.
            DuplicateRouteError: ``(type, name)`` is already registered.
        """
        if self._frozen:
            msg = "Cannot add routes after the route table is frozen."
            raise TableFrozenError(msg)

        config = self._config
        source_type = SourceType(source_type)
        if not config.routing.case_sensitive:
            name = name.lower()
        name = name.strip().strip("/")

        is_api = source_type is SourceType.JS
        route_type = RouteType.API if is_api else RouteType.CONTENT
        url_name = "" if is_api and name == config.default_api_name else name

        if _RESERVED_NAME_RE.match(name):
            msg = (
                'Route/path name "api" is a reserved word. Any ungrouped JS files '
                'are already merged under the default "api" route.'
            )
            raise InvalidRouteNameError(msg)
        if not name or _INVALID_CHARS_RE.search(name):
            msg = f"{name!r} has some invalid characters for a valid route name."
            raise InvalidRouteNameError(msg)

        # Directories are only created for path routing on non-Apache hosts.
        if config.path_routing and config.server != ServerType.APACHE:
            windows = config.server == ServerType.WINDOWS
            if not is_valid_path_name(name, windows=windows):
                msg = (
                    f"{name!r} is not a valid path name for the configured "
                    f"server type {str(config.server)!r}."
                )
                raise InvalidRouteNameError(msg)

        key = (route_type, name)
        if key in self._index:
            raise DuplicateRouteError(str(route_type), name)

        if config.path_routing:
            parts = ["api"] if is_api else []
            if url_name:
                parts.append(url_name)
            path = "/" + "/".join(parts) + "/" if parts else "/"
        else:
            path = f"?{route_type}" + (f"={url_name}" if url_name else "")

        entry = RouteEntry(
            type=route_type,
            name=name,
            path=path,
            source_type=source_type,
            content_path=None if is_api else f"content/{name}.html",
        )
        self._entries.append(entry)
        self._index[key] = entry
        return entry

    def freeze(self) -> "RouteTable":
        """Freeze the table. No more routes can be added."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- runtime ------------------------------------------------------------

    def find(self, route_type: RouteType, name: str) -> RouteEntry | None:
        """Exact ``(type, name)`` lookup. ``None`` when absent."""
        return self._index.get((route_type, name))

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        return tuple(self._entries)

    def count(self, route_type: RouteType) -> int:
        return sum(1 for e in self._entries if e.type == route_type)

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    # -- serialization ------------------------------------------------------

    def to_list(self) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.to_list(), indent=indent)

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[RouteEntry | dict[str, Any]],
        config: AppConfig | None = None,
    ) -> "RouteTable":
        """Build a frozen table from precomputed entries (e.g. loaded JSON).

        Entries are trusted as-is; only ``(type, name)`` uniqueness is
        enforced.
        """
        table = cls(config)
        for item in entries:
            entry = item if isinstance(item, RouteEntry) else RouteEntry.from_dict(item)
            key = (entry.type, entry.name)
            if key in table._index:
                raise DuplicateRouteError(str(entry.type), entry.name)
            table._entries.append(entry)
            table._index[key] = entry
        return table.freeze()
