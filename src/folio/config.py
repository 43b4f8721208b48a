"""Build and application configuration.

All config objects are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.  ``load_config()``
turns a JSON file (or an equivalent mapping) into a ``BuildConfig``.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from folio.errors import ConfigurationError
from folio.routing.types import RoutingMethod, ServerType

DEFAULT_API_NAME = "_def_"


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    """SPA routing settings.

    ``case_sensitive=False`` lowercases route names both when the table is
    built and when names are resolved at runtime.
    """

    method: RoutingMethod = RoutingMethod.QUERY
    case_sensitive: bool = True


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Settings of the generated single-page app. Immutable after creation.

    Override what you need::

        config = AppConfig(title="My Lib", entrance="content:guide")
    """

    title: str = ""
    base: str = "/"
    # Route id ("type:name") shown when the app loads without a route
    entrance: str = "api"
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    server: ServerType = ServerType.STATIC
    favicon: str = ""
    default_api_name: str = DEFAULT_API_NAME
    main_file: str = "index.html"

    # Seconds to wait before reading the query string on root navigation.
    # 0 disables the delay.
    settle_delay: float = 0.0

    def __post_init__(self) -> None:
        if not self.base.endswith("/"):
            object.__setattr__(self, "base", self.base + "/")
        if self.settle_delay < 0:
            msg = f"settle_delay must be >= 0, got {self.settle_delay!r}"
            raise ConfigurationError(msg)

    @property
    def path_routing(self) -> bool:
        return self.routing.method == RoutingMethod.PATH

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "base": self.base,
            "entrance": self.entrance,
            "routing": {
                "method": str(self.routing.method),
                "caseSensitive": self.routing.case_sensitive,
            },
            "server": str(self.server),
            "favicon": self.favicon,
            "defaultApiName": self.default_api_name,
            "mainFile": self.main_file,
            "settleDelay": self.settle_delay,
        }


@dataclass(frozen=True, slots=True)
class MarkdownConfig:
    """Markdown parsing options."""

    gfm: bool = True
    tasks: bool = True
    highlight: bool = False
    plugins: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class JSDocConfig:
    """Doc-comment extraction options."""

    include_pattern: str = r".+\.js(doc|x)?$"
    exclude_pattern: str = r"(^|[\\/])_"
    sort: bool = True
    undocumented: bool = False


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """A complete build configuration.

    ``src`` entries are either path/glob strings or mappings of
    ``name -> path(s)``.  A mapping names a JS group (and its API route)
    or renames a markdown/HTML file's content route.
    """

    src: tuple[str | Mapping[str, Any], ...]
    dest: Path
    app: AppConfig = field(default_factory=AppConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    jsdoc: JSDocConfig = field(default_factory=JSDocConfig)
    template_dir: Path | None = None
    clean: bool = False
    # Target directory (relative to dest) -> list of files/globs
    assets: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    # Base directory for relative src/asset paths
    root: Path = field(default_factory=Path.cwd)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_config(source: str | Path | Mapping[str, Any]) -> BuildConfig:
    """Load a ``BuildConfig`` from a JSON file path or a mapping.

    Relative ``src``, ``dest``, ``template`` and asset paths are resolved
    against the config file's directory (or the cwd for mappings).

    Raises:
        ConfigurationError: The file is unreadable or a value is invalid.
    """
    if isinstance(source, Mapping):
        data = dict(source)
        root = Path.cwd()
    else:
        path = Path(source)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            msg = f"Config file not found: {path}"
            raise ConfigurationError(msg) from exc
        except json.JSONDecodeError as exc:
            msg = f"Config file {path} is not valid JSON: {exc}"
            raise ConfigurationError(msg) from exc
        if not isinstance(data, dict):
            msg = f"Config file {path} must contain a JSON object."
            raise ConfigurationError(msg)
        root = path.resolve().parent

    src = data.get("src")
    if not src:
        msg = "Source path(s) is not defined or invalid."
        raise ConfigurationError(msg)
    if isinstance(src, (str, Mapping)):
        src = [src]

    dest = data.get("dest")
    if not dest:
        msg = "Destination directory is not set."
        raise ConfigurationError(msg)

    template = data.get("template")
    if isinstance(template, Mapping):
        template = template.get("path")

    assets = {
        target: _ensure_tuple(files) for target, files in (data.get("assets") or {}).items()
    }

    return BuildConfig(
        src=tuple(src),
        dest=(root / dest).resolve(),
        app=parse_app_config(data.get("app") or {}),
        markdown=_parse_markdown(data.get("markdown") or {}),
        jsdoc=_parse_jsdoc(data.get("jsdoc") or {}),
        template_dir=(root / template).resolve() if template else None,
        clean=bool(data.get("clean", False)),
        assets=assets,
        root=root,
    )


def parse_app_config(data: Mapping[str, Any]) -> AppConfig:
    """Build an ``AppConfig`` from its JSON form.

    ``routing`` accepts either a bare method string (``"path"``) or an
    object with ``method`` and ``caseSensitive`` keys.
    """
    routing = data.get("routing", {})
    if isinstance(routing, str):
        routing = {"method": routing}
    case_sensitive = routing.get("caseSensitive", True)
    if not isinstance(case_sensitive, bool):
        case_sensitive = True

    return AppConfig(
        title=data.get("title", ""),
        base=data.get("base") or "/",
        entrance=data.get("entrance", "api"),
        routing=RoutingConfig(
            method=_enum(RoutingMethod, routing.get("method", "query"), "routing method"),
            case_sensitive=case_sensitive,
        ),
        server=_enum(ServerType, data.get("server", "static"), "server type"),
        favicon=data.get("favicon", ""),
        default_api_name=data.get("defaultApiName", DEFAULT_API_NAME),
        main_file=data.get("mainFile", "index.html"),
        settle_delay=float(data.get("settleDelay", 0.0)),
    )


def _parse_markdown(data: Mapping[str, Any]) -> MarkdownConfig:
    plugins = data.get("plugins")
    return MarkdownConfig(
        gfm=bool(data.get("gfm", True)),
        tasks=bool(data.get("tasks", True)),
        highlight=bool(data.get("highlight", False)),
        plugins=tuple(plugins) if plugins else None,
    )


def _parse_jsdoc(data: Mapping[str, Any]) -> JSDocConfig:
    defaults = JSDocConfig()
    return JSDocConfig(
        include_pattern=data.get("includePattern", defaults.include_pattern),
        exclude_pattern=data.get("excludePattern", defaults.exclude_pattern),
        sort=bool(data.get("sort", True)),
        undocumented=bool(data.get("undocumented", False)),
    )


def _enum(enum_type: type[Any], value: Any, label: str) -> Any:
    try:
        return enum_type(str(value).lower())
    except ValueError:
        allowed = ", ".join(repr(str(m)) for m in enum_type)
        msg = f"Invalid {label} {value!r}. Expected one of: {allowed}"
        raise ConfigurationError(msg) from None


def _ensure_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)
