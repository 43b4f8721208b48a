"""Source discovery — expand configured sources and classify them.

Each ``src`` entry is a path or glob string, or a mapping of
``name -> path(s)``:

- JS files are grouped; ungrouped files go to the default API group.
- Markdown and HTML files are keyed by name (lowercased basename unless
  the mapping renames them).
- A ``:md`` / ``:html`` / ``:js`` suffix forces the parser
  (``"LICENSE:md"``).
- Duplicates are ignored and unsupported files skipped, with a warning.
"""

import glob
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from folio.config import DEFAULT_API_NAME, JSDocConfig

logger = logging.getLogger("folio.build")

_FORCED_RE = re.compile(r"(.*):([a-z]+)$", re.IGNORECASE)
_JS_RE = re.compile(r"^\.?(javascript|jsdoc|jsx?)$", re.IGNORECASE)
_MD_RE = re.compile(r"^\.?(md|markdown)?$", re.IGNORECASE)
_HTML_RE = re.compile(r"^\.?html?$", re.IGNORECASE)
_GLOB_CHARS = frozenset("*?[")


class ParserType(StrEnum):
    JSDOC = "jsdoc"
    MARKDOWN = "markdown"
    HTML = "html"


@dataclass(frozen=True, slots=True)
class ParseInfo:
    """How a source string should be parsed."""

    src_path: str
    forced: bool
    parser: ParserType | None


@dataclass(slots=True)
class SourceSet:
    """Classified sources, ready for parsing.

    Attributes:
        js: API group name -> JS files.
        md: content name -> markdown file.
        html: content name -> HTML file.
    """

    js: dict[str, list[Path]] = field(default_factory=lambda: {DEFAULT_API_NAME: []})
    md: dict[str, Path] = field(default_factory=dict)
    html: dict[str, Path] = field(default_factory=dict)


def parser_type(ext: str) -> ParserType | None:
    """Map an extension (or forced suffix) to a parser."""
    if _JS_RE.match(ext):
        return ParserType.JSDOC
    if _MD_RE.match(ext):
        return ParserType.MARKDOWN
    if _HTML_RE.match(ext):
        return ParserType.HTML
    return None


def parse_info(src: str) -> ParseInfo:
    """Split an optional forced-parser suffix off a source string."""
    match = _FORCED_RE.match(src)
    if match:
        return ParseInfo(src_path=match.group(1), forced=True, parser=parser_type(match.group(2)))
    return ParseInfo(src_path=src, forced=False, parser=parser_type(Path(src).suffix))


def collect_sources(
    src: tuple[str | Mapping[str, Any], ...],
    root: Path,
    jsdoc: JSDocConfig | None = None,
    *,
    default_api_name: str = DEFAULT_API_NAME,
) -> SourceSet:
    """Expand and classify all configured sources."""
    jsdoc = jsdoc or JSDocConfig()
    root = root.resolve()
    sources = SourceSet(js={default_api_name: []})
    include = re.compile(jsdoc.include_pattern) if jsdoc.include_pattern else None
    exclude = re.compile(jsdoc.exclude_pattern) if jsdoc.exclude_pattern else None

    for item in src:
        if isinstance(item, str):
            _pick(sources, item, None, root, include, exclude, default_api_name)
        elif isinstance(item, Mapping):
            for name, value in item.items():
                values = [value] if isinstance(value, str) else list(value)
                for entry in values:
                    _pick(sources, entry, name, root, include, exclude, default_api_name)
        else:
            logger.warning("Ignoring invalid source entry: %r", item)
    return sources


def expand(pattern: str, root: Path) -> list[Path]:
    """Expand a path or glob relative to *root* into existing files."""
    path = Path(pattern)
    if not path.is_absolute():
        path = root / path
    if _GLOB_CHARS.intersection(pattern):
        matches = glob.glob(str(path), recursive=True)
        return sorted(Path(p).resolve() for p in matches if Path(p).is_file())
    if path.is_file():
        return [path.resolve()]
    return []


def _pick(
    sources: SourceSet,
    src: str,
    name: str | None,
    root: Path,
    include: re.Pattern[str] | None,
    exclude: re.Pattern[str] | None,
    default_api_name: str,
) -> None:
    info = parse_info(src)
    logger.info("Expanding: %s%s", src, f' into "{name}"' if name else "")

    files = expand(info.src_path, root)
    if not files:
        logger.warning(" » No files matched: %s", src)

    for file_path in files:
        parser = info.parser if info.forced else parser_type(file_path.suffix)
        if info.forced and parser is not None:
            logger.warning(" » %s parser will be forced on: %s", parser, file_path)

        is_js = parser is ParserType.JSDOC or (
            not info.forced and include is not None and include.search(str(file_path)) is not None
        )
        if is_js:
            if exclude is not None and exclude.search(_relative(file_path, root)):
                logger.debug(" » Excluded: %s", file_path)
                continue
            group = sources.js.setdefault(name or default_api_name, [])
            if file_path in group:
                logger.warning(" » Duplicate ignored: %s", file_path)
            else:
                logger.debug("Queued: %s", file_path)
                group.append(file_path)
        elif parser is ParserType.MARKDOWN:
            _queue_named(sources.md, name, file_path)
        elif parser is ParserType.HTML:
            _queue_named(sources.html, name, file_path)
        else:
            logger.warning(" » Unsupported source ignored: %s", file_path)


def _queue_named(target: dict[str, Path], name: str | None, file_path: Path) -> None:
    key = (name or file_path.stem).lower()
    if key in target:
        logger.warning(" » Duplicate ignored: %s", file_path)
        return
    logger.debug("Queued: %s", file_path)
    target[key] = file_path


def _relative(file_path: Path, root: Path) -> str:
    if file_path.is_relative_to(root):
        return str(file_path.relative_to(root))
    return str(file_path)
