"""Doc-comment extraction from JavaScript sources.

A lightweight reader for ``/** ... */`` blocks.  Each block becomes a
symbol record; the symbol name comes from an explicit ``@name`` tag or is
inferred from the declaration that follows the comment::

    /**
     * Adds two numbers.
     * @param {number} a - First operand.
     * @returns {number} The sum.
     */
    function add(a, b) { ... }

Supported tags: ``@name``, ``@memberof``, ``@param``, ``@returns`` /
``@return``, ``@private`` / ``@protected`` / ``@public``, ``@access``,
``@class``, ``@namespace``, ``@constant``, ``@typedef``, ``@ignore``.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from folio.config import JSDocConfig

logger = logging.getLogger("folio.build")

_COMMENT_RE = re.compile(r"/\*\*(?!/)(.*?)\*/", re.DOTALL)
_TAG_RE = re.compile(r"^@(\w+)\s*(.*)$", re.DOTALL)
_TYPE_RE = re.compile(r"^\{([^}]*)\}\s*(.*)$", re.DOTALL)
_PARAM_NAME_RE = re.compile(r"^(\[[^\]]+\]|\S+)\s*(?:-\s*)?(.*)$", re.DOTALL)

_DECLARATIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^(?:export\s+)?(?:default\s+)?class\s+([\w$]+)"), "class"),
    (re.compile(r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*([\w$]+)"), "function"),
    (re.compile(r"^(?:export\s+)?(?:const|let|var)\s+([\w$]+)\s*=\s*(?:async\s+)?(?:function|\()"), "function"),
    (re.compile(r"^(?:export\s+)?const\s+([\w$]+)"), "constant"),
    (re.compile(r"^(?:export\s+)?(?:let|var)\s+([\w$]+)"), "member"),
    (re.compile(r"^([\w$]+(?:\.[\w$]+)+)\s*=\s*(?:async\s+)?(?:function|\()"), "function"),
    (re.compile(r"^([\w$]+(?:\.[\w$]+)+)\s*="), "member"),
    (re.compile(r"^(?:static\s+)?(?:async\s+)?([\w$]+)\s*\([^)]*\)\s*\{"), "function"),
)
_KIND_TAGS = {
    "class": "class",
    "constructor": "class",
    "namespace": "namespace",
    "constant": "constant",
    "const": "constant",
    "typedef": "typedef",
    "module": "module",
    "function": "function",
    "method": "function",
    "member": "member",
    "event": "event",
}


@dataclass(slots=True)
class Symbol:
    """One documented symbol.

    ``longname`` is the fully qualified name (``Foo.bar``, ``Foo#baz``)
    used as anchor and sort key.
    """

    name: str
    longname: str
    kind: str = "member"
    description: str = ""
    params: list[dict[str, str]] = field(default_factory=list)
    returns: dict[str, str] | None = None
    memberof: str | None = None
    access: str = "public"
    link: str = ""
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "longname": self.longname,
            "kind": self.kind,
            "description": self.description,
            "params": list(self.params),
            "returns": self.returns,
            "memberof": self.memberof,
            "access": self.access,
            "link": self.link,
            "meta": dict(self.meta),
        }


def parse_source(text: str, *, filename: str = "") -> list[Symbol]:
    """Extract symbols from one JS source text."""
    symbols: list[Symbol] = []
    for match in _COMMENT_RE.finditer(text):
        lineno = text.count("\n", 0, match.start()) + 1
        following = text[match.end() :].lstrip()
        symbol = _parse_comment(match.group(1), following)
        if symbol is None:
            logger.debug("Skipped unnamed doc comment at %s:%d", filename, lineno)
            continue
        symbol.meta = {"filename": filename, "lineno": lineno}
        symbols.append(symbol)
    return symbols


def parse_files(
    files: Iterable[Path],
    config: JSDocConfig | None = None,
    *,
    link_base: str = "",
) -> list[dict[str, Any]]:
    """Parse a JS group into documentation records.

    Private symbols are dropped unless ``config.undocumented`` is set.
    Every symbol gets ``link`` = *link_base* + ``#`` + longname.
    """
    config = config or JSDocConfig()
    symbols: list[Symbol] = []
    for file_path in files:
        logger.debug("Parsing: %s", file_path)
        text = Path(file_path).read_text(encoding="utf-8")
        symbols.extend(parse_source(text, filename=Path(file_path).name))

    if not config.undocumented:
        symbols = [s for s in symbols if s.access != "private"]
    if config.sort:
        symbols.sort(key=lambda s: s.longname.lower())

    for symbol in symbols:
        symbol.link = f"{link_base}#{symbol.longname}"
    return [symbol.to_dict() for symbol in symbols]


def symbol_names(documentation: Iterable[dict[str, Any]]) -> list[str]:
    """Sorted, de-duplicated long names of a documentation list."""
    return sorted({doc["longname"] for doc in documentation}, key=str.lower)


def _parse_comment(body: str, following: str) -> Symbol | None:
    lines = [_strip_star(line) for line in body.splitlines()]
    description: list[str] = []
    tags: list[tuple[str, str]] = []
    for line in lines:
        match = _TAG_RE.match(line)
        if match:
            tags.append((match.group(1).lower(), match.group(2).strip()))
        elif tags:
            tag, value = tags[-1]
            tags[-1] = (tag, f"{value}\n{line}".strip())
        else:
            description.append(line)

    if any(tag == "ignore" for tag, _ in tags):
        return None

    name, kind = _infer_declaration(following)
    memberof: str | None = None
    access = "public"
    params: list[dict[str, str]] = []
    returns: dict[str, str] | None = None

    for tag, value in tags:
        if tag == "name" and value:
            name = value.split()[0]
        elif tag == "memberof" and value:
            memberof = value.split()[0]
        elif tag in ("param", "arg", "argument"):
            params.append(_parse_param(value))
        elif tag in ("returns", "return"):
            type_, desc = _split_type(value)
            returns = {"type": type_, "description": desc}
        elif tag in ("private", "protected", "public"):
            access = tag
        elif tag == "access" and value:
            access = value.split()[0].lower()
        elif tag == "description" and value:
            description.append(value)
        elif tag in _KIND_TAGS:
            kind = _KIND_TAGS[tag]
            if value and not name:
                name = value.split()[0]

    if not name:
        return None

    longname = name
    if memberof and not name.startswith(memberof):
        longname = f"{memberof}.{name}"
    elif "." in name:
        memberof, _, short = name.rpartition(".")
        name = short

    return Symbol(
        name=name,
        longname=longname,
        kind=kind,
        description="\n".join(description).strip(),
        params=params,
        returns=returns,
        memberof=memberof,
        access=access,
    )


def _strip_star(line: str) -> str:
    line = line.strip()
    if line.startswith("*"):
        line = line[1:]
        if line.startswith(" "):
            line = line[1:]
    return line.rstrip()


def _infer_declaration(code: str) -> tuple[str, str]:
    first_line = code.split("\n", 1)[0].strip()
    for pattern, kind in _DECLARATIONS:
        match = pattern.match(first_line)
        if match:
            return match.group(1), kind
    return "", "member"


def _split_type(value: str) -> tuple[str, str]:
    match = _TYPE_RE.match(value)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return "", value.strip()


def _parse_param(value: str) -> dict[str, str]:
    type_, rest = _split_type(value)
    match = _PARAM_NAME_RE.match(rest)
    if not match:
        return {"name": "", "type": type_, "description": ""}
    name, desc = match.groups()
    return {"name": name.strip("[]").split("=")[0], "type": type_, "description": desc.strip()}
