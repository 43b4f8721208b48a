"""Documentation build — sources in, static single-page site out.

``build(config)`` runs the whole pipeline once::

    sources -> JS groups  -> symbol docs -> api routes
            -> markdown   -> content/<name>.html -> content routes
            -> html       -> content/<name>.html -> content routes
    route table (frozen) -> folio-data.json, index.html, host config

Outputs in ``dest``:

- ``content/<name>.html``: pre-rendered content pages.
- ``folio-data.json``: app config, routes and API documentation; the
  data a ``Session`` is loaded from.
- ``index.html``: the main file of the SPA.
- assets, the favicon and (path routing only) host configuration.
"""

import glob
import json
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from kida import Environment

from folio.build.jsdoc import parse_files, symbol_names
from folio.build.server_config import write_server_config
from folio.build.sources import SourceSet, collect_sources
from folio.config import BuildConfig
from folio.errors import BuildError
from folio.markdown import MarkdownRenderer
from folio.render.templating import INDEX_TEMPLATE, create_environment, render_template
from folio.routing.table import RouteTable
from folio.routing.types import RouteEntry, RouteType, SourceType
from folio.session import DATA_FILE, ApiDocs

logger = logging.getLogger("folio.build")

CONTENT_DIR = "content"


@dataclass(slots=True)
class BuildResult:
    """Outcome of one build.

    Attributes:
        dest: Output directory.
        routes: The frozen route table.
        apis: API name -> documentation data.
        files: Every file written, relative to ``dest``.
    """

    dest: Path
    routes: RouteTable
    apis: dict[str, ApiDocs] = field(default_factory=dict)
    files: list[str] = field(default_factory=list)

    @property
    def stats(self) -> dict[str, int]:
        return {
            "api": self.routes.count(RouteType.API),
            "content": self.routes.count(RouteType.CONTENT),
        }


class Builder:
    """Runs the build pipeline for one ``BuildConfig``.

    Usage::

        result = Builder(config).build()
        print(result.stats)   # {"api": 2, "content": 3}
    """

    __slots__ = ("_env", "_markdown", "_result", "config", "routes")

    def __init__(self, config: BuildConfig, *, env: Environment | None = None) -> None:
        self.config = config
        self.routes = RouteTable(config.app)
        self._env = env or create_environment(config.template_dir)
        self._markdown: MarkdownRenderer | None = None
        self._result: BuildResult | None = None

    def build(self) -> BuildResult:
        """Run the pipeline. A Builder builds once.

        Raises:
            BuildError: A route is invalid or duplicated, or an output
                cannot be written.
        """
        if self._result is not None:
            return self._result

        config = self.config
        dest = config.dest
        logger.info("Building documentation into %s", dest)
        self._prepare_dest(dest)
        result = BuildResult(dest=dest, routes=self.routes)

        sources = collect_sources(
            config.src,
            config.root,
            config.jsdoc,
            default_api_name=config.app.default_api_name,
        )
        self._process_js(sources, result)
        self._process_markdown(sources, result)
        self._process_html(sources, result)
        self.routes.freeze()

        self._copy_assets(result)
        self._write_data(result)
        self._write_index(result)
        for path in write_server_config(dest, self.routes, config.app, self._env):
            result.files.append(path.relative_to(dest).as_posix())

        stats = result.stats
        logger.info(
            "Documentation built: %d API route(s), %d content route(s)",
            stats["api"],
            stats["content"],
        )
        self._result = result
        return result

    # -- steps --------------------------------------------------------------

    def _prepare_dest(self, dest: Path) -> None:
        if dest.exists() and not dest.is_dir():
            msg = f"Destination is not a directory: {dest}"
            raise BuildError(msg)
        if self.config.clean and dest.exists():
            root = self.config.root.resolve()
            if dest.resolve() == root or dest.resolve() in root.parents:
                msg = f"Refusing to clean {dest}: it contains the build root."
                raise BuildError(msg)
            logger.info("Cleaning destination directory: %s", dest)
            shutil.rmtree(dest)
        dest.mkdir(parents=True, exist_ok=True)

    def _process_js(self, sources: SourceSet, result: BuildResult) -> None:
        default_name = self.config.app.default_api_name
        for name, files in sources.js.items():
            if not files:
                if name != default_name:
                    logger.warning("No JS files for API %r; skipped.", name)
                continue
            logger.info("Parsing %d JS file(s) into API %r", len(files), name)
            entry = self.routes.add(name, SourceType.JS)
            documentation = parse_files(
                files,
                self.config.jsdoc,
                link_base=_route_url(entry.path),
            )
            result.apis[entry.name] = ApiDocs(
                documentation=tuple(documentation),
                symbols=tuple(symbol_names(documentation)),
            )

    def _process_markdown(self, sources: SourceSet, result: BuildResult) -> None:
        for name, path in sources.md.items():
            if self._markdown is None:
                self._markdown = MarkdownRenderer(self.config.markdown)
            logger.info("Parsing markdown: %s", path)
            html = self._markdown.render(path.read_text(encoding="utf-8"))
            entry = self.routes.add(name, SourceType.MD)
            self._write_content(entry, html, result)

    def _process_html(self, sources: SourceSet, result: BuildResult) -> None:
        for name, path in sources.html.items():
            logger.info("Copying HTML content: %s", path)
            entry = self.routes.add(name, SourceType.HTML)
            self._write_content(entry, path.read_text(encoding="utf-8"), result)

    def _write_content(self, entry: RouteEntry, html: str, result: BuildResult) -> None:
        # content_path is always set for content routes
        target = self.config.dest / str(entry.content_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        result.files.append(str(entry.content_path))

    def _copy_assets(self, result: BuildResult) -> None:
        config = self.config
        dest = config.dest
        for target_dir, patterns in config.assets.items():
            out_dir = (dest / target_dir.strip("/")).resolve()
            if not out_dir.is_relative_to(dest.resolve()):
                msg = f"Asset target {target_dir!r} is outside the destination."
                raise BuildError(msg)
            for pattern in patterns:
                matches = _glob(pattern, config.root)
                if not matches:
                    logger.warning("No assets matched: %s", pattern)
                for source in matches:
                    copied = _copy(source, out_dir)
                    result.files.extend(p.relative_to(dest.resolve()).as_posix() for p in copied)

        favicon = config.app.favicon
        if favicon:
            source = (config.root / favicon).resolve()
            if source.is_file():
                shutil.copy2(source, dest / source.name)
                result.files.append(source.name)
            else:
                logger.warning("Favicon not found: %s", source)

    def _write_data(self, result: BuildResult) -> None:
        data: dict[str, Any] = {
            "app": self.config.app.to_dict(),
            "routes": self.routes.to_list(),
            "apis": {name: docs.to_dict() for name, docs in result.apis.items()},
        }
        (self.config.dest / DATA_FILE).write_text(json.dumps(data, indent=2), encoding="utf-8")
        result.files.append(DATA_FILE)

    def _write_index(self, result: BuildResult) -> None:
        app = self.config.app
        html = render_template(
            self._env,
            INDEX_TEMPLATE,
            {"app": app, "routes": self.routes.entries},
        )
        (self.config.dest / app.main_file).write_text(html, encoding="utf-8")
        result.files.append(app.main_file)


def build(config: BuildConfig) -> BuildResult:
    """Build the documentation described by *config*."""
    return Builder(config).build()


def _route_url(path: str) -> str:
    # Symbol links are relative to the base: "api/web/" or "?api=web"
    return path.lstrip("/")


def _glob(pattern: str, root: Path) -> list[Path]:
    path = Path(pattern)
    if not path.is_absolute():
        path = root / path
    return sorted(Path(p) for p in glob.glob(str(path), recursive=True))


def _copy(source: Path, out_dir: Path) -> list[Path]:
    target = out_dir / source.name
    if source.is_dir():
        shutil.copytree(source, target, dirs_exist_ok=True)
        return [p for p in target.rglob("*") if p.is_file()]
    out_dir.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, target)
    return [target]
