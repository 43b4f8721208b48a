"""Tests for folio.session — the explicit application session."""

import json
from pathlib import Path

import pytest

from folio.config import AppConfig, RoutingConfig
from folio.errors import ConfigurationError
from folio.routing.table import RouteTable
from folio.routing.types import RoutingMethod, SourceType
from folio.session import DATA_FILE, ApiDocs, Session
from folio.spa.storage import MemoryStorage


class _NullRenderer:
    async def render(self, session, route) -> int:
        return 200


def _data() -> dict[str, object]:
    config = AppConfig(title="Lib", routing=RoutingConfig(method=RoutingMethod.PATH))
    table = RouteTable(config)
    table.add("web", SourceType.JS)
    table.add("guide", SourceType.MD)
    return {
        "app": config.to_dict(),
        "routes": table.to_list(),
        "apis": {"web": ApiDocs(documentation=({"longname": "Web"},), symbols=("Web",)).to_dict()},
    }


class TestSession:
    def test_from_data(self) -> None:
        session = Session.from_data(_data(), _NullRenderer())
        assert session.config.title == "Lib"
        assert session.config.path_routing
        assert session.table.frozen
        assert [e.id for e in session.table] == ["api:web", "content:guide"]
        assert session.apis["web"].symbols == ("Web",)
        assert session.current_route is None
        assert session.initial_load is True

    def test_independent_sessions(self) -> None:
        first = Session.from_data(_data(), _NullRenderer())
        second = Session.from_data(_data(), _NullRenderer())
        first.load_api("web")
        first.storage.set_item("redirectPath", "guide/")
        assert second.documentation is None
        assert second.storage.get_item("redirectPath") is None

    def test_custom_storage(self) -> None:
        storage = MemoryStorage({"redirectPath": "guide/"})
        session = Session.from_data(_data(), _NullRenderer(), storage=storage)
        assert session.storage is storage

    def test_load_and_clear_api(self) -> None:
        session = Session.from_data(_data(), _NullRenderer())
        session.load_api("web")
        assert session.documentation == ({"longname": "Web"},)
        session.clear_api()
        assert session.documentation is None
        assert session.symbols is None

    def test_resolver_is_cached(self) -> None:
        session = Session.from_data(_data(), _NullRenderer())
        assert session.resolver is session.resolver
        assert session.resolver.table is session.table

    def test_load_from_directory(self, tmp_path: Path) -> None:
        (tmp_path / DATA_FILE).write_text(json.dumps(_data()))
        session = Session.load(tmp_path, _NullRenderer())
        assert len(session.table) == 2

    def test_load_missing_data(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match=DATA_FILE):
            Session.load(tmp_path, _NullRenderer())
