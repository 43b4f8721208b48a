"""Tests for folio.routing.resolver — names, query strings and route ids."""

import pytest

from folio.config import AppConfig, RoutingConfig
from folio.errors import RouteTypeError
from folio.routing.resolver import (
    RouteResolver,
    has_route_query,
    route_name,
    strip_query_prefix,
)
from folio.routing.route import FoundRoute, MissingRoute
from folio.routing.table import RouteTable
from folio.routing.types import RouteType, SourceType

ROUTES = [("_def_", SourceType.JS), ("web", SourceType.JS), ("guide", SourceType.MD)]


def _resolver(**kwargs) -> RouteResolver:
    config = AppConfig(**kwargs)
    table = RouteTable(config)
    for name, source_type in ROUTES:
        table.add(name, source_type)
    return RouteResolver(table.freeze(), config)


@pytest.fixture
def resolver() -> RouteResolver:
    return _resolver()


class TestFromNameAndType:
    @pytest.mark.parametrize(
        ("route_type", "name"),
        [("api", "_def_"), ("api", "web"), ("content", "guide")],
    )
    def test_present_pairs_exist(self, resolver: RouteResolver, route_type: str, name: str) -> None:
        route = resolver.from_name_and_type(name, route_type)
        assert route.exists()
        assert route.id == f"{route_type}:{name}"

    @pytest.mark.parametrize(
        ("route_type", "name"),
        [("api", "guide"), ("content", "web"), ("content", "missing"), ("api", "nope")],
    )
    def test_absent_pairs_do_not_exist(
        self, resolver: RouteResolver, route_type: str, name: str
    ) -> None:
        assert not resolver.from_name_and_type(name, route_type).exists()

    def test_empty_api_name_is_default(self, resolver: RouteResolver) -> None:
        route = resolver.from_name_and_type("", "api")
        assert route.exists()
        assert route.name == "_def_"
        assert route.id == "api:_def_"

    def test_custom_default_api_name(self) -> None:
        config = AppConfig(default_api_name="core")
        table = RouteTable(config)
        table.add("core", SourceType.JS)
        resolver = RouteResolver(table.freeze(), config)
        route = resolver.from_name_and_type(None, RouteType.API)
        assert route.id == "api:core"

    def test_empty_content_name_is_missing(self, resolver: RouteResolver) -> None:
        assert isinstance(resolver.from_name_and_type("", "content"), MissingRoute)

    def test_no_type_is_missing(self, resolver: RouteResolver) -> None:
        assert isinstance(resolver.from_name_and_type("guide", None), MissingRoute)

    def test_unknown_type_raises(self, resolver: RouteResolver) -> None:
        with pytest.raises(RouteTypeError) as exc_info:
            resolver.from_name_and_type("guide", "page")
        assert exc_info.value.route_type == "page"

    def test_case_insensitive(self) -> None:
        resolver = _resolver(routing=RoutingConfig(case_sensitive=False))
        upper = resolver.from_name_and_type("Guide", "content")
        lower = resolver.from_name_and_type("guide", "content")
        assert upper.exists()
        assert upper.id == lower.id == "content:guide"

    def test_case_sensitive(self, resolver: RouteResolver) -> None:
        assert not resolver.from_name_and_type("Guide", "content").exists()

    def test_returns_found_route(self, resolver: RouteResolver) -> None:
        assert isinstance(resolver.from_name_and_type("web", RouteType.API), FoundRoute)


class TestFromQueryString:
    def test_api(self, resolver: RouteResolver) -> None:
        route = resolver.from_query_string("api=web")
        assert route == resolver.from_name_and_type("web", "api")

    def test_api_wins_over_content(self, resolver: RouteResolver) -> None:
        assert resolver.from_query_string("api=web&content=guide").type == RouteType.API
        assert resolver.from_query_string("content=guide&api=web").type == RouteType.API

    def test_content(self, resolver: RouteResolver) -> None:
        assert resolver.from_query_string("content=guide").id == "content:guide"

    @pytest.mark.parametrize("qs", ["?api", "api", "api=", "&api"])
    def test_bare_api_is_default(self, resolver: RouteResolver, qs: str) -> None:
        assert resolver.from_query_string(qs).id == "api:_def_"

    def test_leading_question_mark_stripped(self, resolver: RouteResolver) -> None:
        assert resolver.from_query_string("?content=guide").exists()

    def test_trailing_slash_stripped(self, resolver: RouteResolver) -> None:
        assert resolver.from_query_string("content=guide/").id == "content:guide"

    def test_other_keys_ignored(self, resolver: RouteResolver) -> None:
        assert resolver.from_query_string("utm=1&content=guide&x=2").id == "content:guide"

    @pytest.mark.parametrize("qs", ["", None, "?", "foo=bar", "page=guide"])
    def test_unrecognized_is_missing(self, resolver: RouteResolver, qs: str | None) -> None:
        assert not resolver.from_query_string(qs).exists()

    def test_keys_are_case_insensitive(self, resolver: RouteResolver) -> None:
        assert resolver.from_query_string("API=web").id == "api:web"

    def test_unknown_name_is_missing(self, resolver: RouteResolver) -> None:
        assert not resolver.from_query_string("content=nope").exists()


class TestFromRouteId:
    def test_type_and_name(self, resolver: RouteResolver) -> None:
        assert resolver.from_route_id("content:guide").id == "content:guide"

    def test_bare_api(self, resolver: RouteResolver) -> None:
        assert resolver.from_route_id("api").id == "api:_def_"

    def test_non_string(self, resolver: RouteResolver) -> None:
        assert not resolver.from_route_id(None).exists()

    def test_unknown_type_raises(self, resolver: RouteResolver) -> None:
        with pytest.raises(RouteTypeError):
            resolver.from_route_id("page:guide")


class TestHelpers:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("?a=1", "a=1"), ("&a=1", "a=1"), ("a=1", "a=1"), ("", ""), (None, "")],
    )
    def test_strip_query_prefix(self, raw: str | None, expected: str) -> None:
        assert strip_query_prefix(raw) == expected

    def test_route_name(self) -> None:
        assert route_name("guide/") == "guide"
        assert route_name("web") == "web"
        assert route_name(None) == ""

    def test_has_route_query(self) -> None:
        assert has_route_query("?api")
        assert has_route_query("x=1&content=guide")
        assert not has_route_query("x=1")
        assert not has_route_query("")
