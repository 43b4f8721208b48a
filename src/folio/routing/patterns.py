"""Trie-based path pattern matching for path-mode navigation.

Patterns are registered during dispatcher setup and compiled into an
immutable lookup structure.  ``match()`` turns a path into the pattern's
kind plus captured parameters, or ``None`` when nothing matches; the
caller decides what a miss means.

Two segment forms are supported: static segments (``/api``) and a
trailing catch-all (``/{name:path}``) that captures the rest of the path.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a pattern.

    Static:    ``/api``          (param_name=None)
    Catch-all: ``/{name:path}``  (param_name="name")
    """

    value: str
    param_name: str | None = None

    @property
    def is_catch_all(self) -> bool:
        return self.param_name is not None


@dataclass(frozen=True, slots=True)
class Pattern:
    """A registered pattern and the kind of navigation it stands for."""

    path: str
    kind: str


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """Result of a successful match."""

    pattern: Pattern
    params: dict[str, str]

    @property
    def kind(self) -> str:
        return self.pattern.kind


def parse_pattern(path: str) -> list[PathSegment]:
    """Parse a pattern string into segments.

    Examples::

        "/"                 -> []
        "/api"              -> [PathSegment("api")]
        "/api/{name:path}"  -> [PathSegment("api"), PathSegment("{name:path}", "name")]

    Raises:
        ValueError: A parameter is not a ``:path`` catch-all, or a
            catch-all is not the last segment.
    """
    parts = [part for part in path.strip("/").split("/") if part]
    segments: list[PathSegment] = []
    for index, part in enumerate(parts):
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue
        param_name, _, converter = part[1:-1].partition(":")
        if converter != "path":
            msg = f"Only {{name:path}} parameters are supported, got {part!r} in {path!r}"
            raise ValueError(msg)
        if index != len(parts) - 1:
            msg = f"Catch-all {part!r} must be the last segment of {path!r}"
            raise ValueError(msg)
        segments.append(PathSegment(value=part, param_name=param_name or "path"))
    return segments


class _TrieNode:
    """A node in the pattern trie. Mutable during compilation only."""

    __slots__ = ("catch_all", "children", "pattern")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        self.catch_all: _CatchAllEdge | None = None
        self.pattern: Pattern | None = None


@dataclass(slots=True)
class _CatchAllEdge:
    """Consumes the remaining path."""

    param_name: str
    pattern: Pattern


class PatternRouter:
    """Compiled matcher over navigation patterns.

    Usage::

        router = PatternRouter()
        router.add(Pattern("/api/{name:path}", "api"))
        router.add(Pattern("/{name:path}", "content"))
        router.compile()
        router.match("/api/web/")   # PatternMatch(kind="api", params={"name": "web"})
    """

    __slots__ = ("_compiled", "_patterns", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._patterns: list[Pattern] = []
        self._compiled = False

    def add(self, pattern: Pattern) -> None:
        """Add a pattern. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add patterns after compilation."
            raise RuntimeError(msg)

        self._patterns.append(pattern)
        node = self._root
        for seg in parse_pattern(pattern.path):
            if seg.param_name is not None:
                node.catch_all = _CatchAllEdge(param_name=seg.param_name, pattern=pattern)
                return
            node = node.children.setdefault(seg.value, _TrieNode())
        node.pattern = pattern

    def compile(self) -> None:
        """Freeze the router. No more patterns can be added."""
        self._compiled = True

    @property
    def patterns(self) -> tuple[Pattern, ...]:
        return tuple(self._patterns)

    def match(self, path: str) -> PatternMatch | None:
        """Match *path* against the compiled patterns.

        Static children win over catch-alls.  Empty segments (including a
        trailing slash) are ignored.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        return self._match_node(self._root, parts, 0)

    def _match_node(self, node: _TrieNode, parts: list[str], index: int) -> PatternMatch | None:
        if index == len(parts):
            if node.pattern is not None:
                return PatternMatch(pattern=node.pattern, params={})
            return None

        child = node.children.get(parts[index])
        if child is not None:
            result = self._match_node(child, parts, index + 1)
            if result is not None:
                return result

        if node.catch_all is not None:
            remaining = "/".join(parts[index:])
            return PatternMatch(
                pattern=node.catch_all.pattern,
                params={node.catch_all.param_name: remaining},
            )
        return None
