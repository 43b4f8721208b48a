"""Tests for folio.build.jsdoc — doc-comment extraction."""

from pathlib import Path

from folio.build.jsdoc import parse_files, parse_source, symbol_names
from folio.config import JSDocConfig

SOURCE = '''
/**
 * HTTP client.
 * @class
 */
class Client {
    /**
     * Sends a GET request.
     * @param {string} url - Target URL.
     * @param {Object} [options] Request options.
     * @returns {Promise<Response>} The response.
     * @memberof Client
     */
    get(url, options) {}
}

/**
 * Adds two numbers.
 * @param {number} a - First operand.
 * @param {number} b - Second operand.
 * @return {number} The sum.
 */
function add(a, b) { return a + b; }

/**
 * Formats a value.
 */
export const format = (value) => String(value);

/** Default timeout. */
const TIMEOUT = 30;

/**
 * Internal helper.
 * @private
 */
function helper() {}

/**
 * Not documented anywhere.
 * @ignore
 */
function hidden() {}

/**
 * @name utils.noop
 * @function
 */
'''


def _by_longname(source: str = SOURCE) -> dict[str, object]:
    return {s.longname: s for s in parse_source(source, filename="client.js")}


class TestParseSource:
    def test_class(self) -> None:
        symbol = _by_longname()["Client"]
        assert symbol.kind == "class"
        assert symbol.description == "HTTP client."

    def test_method_with_memberof(self) -> None:
        symbol = _by_longname()["Client.get"]
        assert symbol.name == "get"
        assert symbol.memberof == "Client"
        assert symbol.kind == "function"
        assert symbol.params == [
            {"name": "url", "type": "string", "description": "Target URL."},
            {"name": "options", "type": "Object", "description": "Request options."},
        ]
        assert symbol.returns == {"type": "Promise<Response>", "description": "The response."}

    def test_function(self) -> None:
        symbol = _by_longname()["add"]
        assert symbol.kind == "function"
        assert symbol.description == "Adds two numbers."
        assert [p["name"] for p in symbol.params] == ["a", "b"]
        assert symbol.returns == {"type": "number", "description": "The sum."}

    def test_arrow_function_constant(self) -> None:
        assert _by_longname()["format"].kind == "function"

    def test_constant(self) -> None:
        symbol = _by_longname()["TIMEOUT"]
        assert symbol.kind == "constant"
        assert symbol.description == "Default timeout."

    def test_private_access(self) -> None:
        assert _by_longname()["helper"].access == "private"

    def test_ignored(self) -> None:
        assert "hidden" not in _by_longname()

    def test_explicit_dotted_name(self) -> None:
        symbol = _by_longname()["utils.noop"]
        assert symbol.name == "noop"
        assert symbol.memberof == "utils"
        assert symbol.kind == "function"

    def test_meta(self) -> None:
        symbol = _by_longname()["Client"]
        assert symbol.meta == {"filename": "client.js", "lineno": 2}

    def test_unnamed_comment_skipped(self) -> None:
        assert parse_source("/** Floating comment. */\n\n") == []

    def test_plain_block_comment_ignored(self) -> None:
        assert parse_source("/* not docs */\nfunction f() {}") == []


class TestParseFiles:
    def _write(self, tmp_path: Path) -> Path:
        path = tmp_path / "client.js"
        path.write_text(SOURCE)
        return path

    def test_sorted_and_private_dropped(self, tmp_path: Path) -> None:
        docs = parse_files([self._write(tmp_path)])
        names = [d["longname"] for d in docs]
        assert names == sorted(names, key=str.lower)
        assert "helper" not in names

    def test_undocumented_keeps_private(self, tmp_path: Path) -> None:
        docs = parse_files([self._write(tmp_path)], JSDocConfig(undocumented=True))
        assert "helper" in [d["longname"] for d in docs]

    def test_links(self, tmp_path: Path) -> None:
        docs = parse_files([self._write(tmp_path)], link_base="api/web/")
        by_name = {d["longname"]: d for d in docs}
        assert by_name["Client.get"]["link"] == "api/web/#Client.get"

    def test_unsorted_keeps_source_order(self, tmp_path: Path) -> None:
        docs = parse_files([self._write(tmp_path)], JSDocConfig(sort=False))
        assert [d["longname"] for d in docs][:2] == ["Client", "Client.get"]

    def test_symbol_names(self, tmp_path: Path) -> None:
        docs = parse_files([self._write(tmp_path)])
        names = symbol_names(docs)
        assert names == sorted(set(names), key=str.lower)
        assert "Client.get" in names
