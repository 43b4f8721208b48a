"""Tests for folio.routing.patterns — trie-based navigation patterns."""

import pytest

from folio.routing.patterns import Pattern, PatternRouter, parse_pattern


def _router(*patterns: tuple[str, str]) -> PatternRouter:
    router = PatternRouter()
    for path, kind in patterns:
        router.add(Pattern(path, kind))
    router.compile()
    return router


class TestParsePattern:
    def test_root(self) -> None:
        assert parse_pattern("/") == []

    def test_static(self) -> None:
        segments = parse_pattern("/api")
        assert [s.value for s in segments] == ["api"]
        assert not segments[0].is_catch_all

    def test_catch_all(self) -> None:
        segments = parse_pattern("/api/{name:path}")
        assert segments[1].is_catch_all
        assert segments[1].param_name == "name"

    @pytest.mark.parametrize("path", ["/{name}", "/{id:int}"])
    def test_only_path_parameters(self, path: str) -> None:
        with pytest.raises(ValueError, match="supported"):
            parse_pattern(path)

    def test_catch_all_must_be_last(self) -> None:
        with pytest.raises(ValueError, match="last segment"):
            parse_pattern("/{name:path}/edit")


class TestPatternRouter:
    @pytest.fixture
    def router(self) -> PatternRouter:
        return _router(
            ("/", "root"),
            ("/index.html", "main"),
            ("/api", "api"),
            ("/api/{name:path}", "api"),
            ("/{name:path}", "content"),
        )

    def test_root(self, router: PatternRouter) -> None:
        match = router.match("/")
        assert match is not None
        assert match.kind == "root"
        assert match.params == {}

    def test_static_beats_catch_all(self, router: PatternRouter) -> None:
        match = router.match("/index.html")
        assert match is not None
        assert match.kind == "main"

    @pytest.mark.parametrize("path", ["/api", "/api/"])
    def test_bare_api(self, router: PatternRouter, path: str) -> None:
        match = router.match(path)
        assert match is not None
        assert match.kind == "api"
        assert "name" not in match.params

    def test_named_api(self, router: PatternRouter) -> None:
        match = router.match("/api/web/")
        assert match is not None
        assert match.kind == "api"
        assert match.params == {"name": "web"}

    def test_content(self, router: PatternRouter) -> None:
        match = router.match("/guide/")
        assert match is not None
        assert match.kind == "content"
        assert match.params == {"name": "guide"}

    def test_nested_content(self, router: PatternRouter) -> None:
        match = router.match("/guides/intro")
        assert match is not None
        assert match.params == {"name": "guides/intro"}

    def test_no_match(self) -> None:
        router = _router(("/", "root"))
        assert router.match("/guide/") is None

    def test_static_prefix_falls_back_to_catch_all(self) -> None:
        router = _router(("/api", "api"), ("/{name:path}", "content"))
        match = router.match("/api/x")
        assert match is not None
        assert match.kind == "content"
        assert match.params == {"name": "api/x"}

    def test_add_after_compile(self) -> None:
        router = _router(("/", "root"))
        with pytest.raises(RuntimeError):
            router.add(Pattern("/x", "x"))

    def test_patterns_listed_in_order(self, router: PatternRouter) -> None:
        assert [p.kind for p in router.patterns] == ["root", "main", "api", "api", "content"]
