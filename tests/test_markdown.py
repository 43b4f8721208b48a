"""Tests for folio.markdown — patitas renderer and docs post-processing."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from folio.config import MarkdownConfig
from folio.errors import BuildError
from folio.markdown import MarkdownError, MarkdownNotInstalledError, idify, postprocess


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ── MarkdownRenderer ─────────────────────────────────────────────────────


class TestMarkdownRenderer:
    """Test the MarkdownRenderer wrapper over patitas."""

    def test_renders_heading_with_rule(self) -> None:
        from folio.markdown import MarkdownRenderer

        soup = _soup(MarkdownRenderer().render("# Getting Started"))
        heading = soup.find("h1")
        assert heading is not None
        assert "Getting Started" in heading.get_text()
        assert heading.find_next_sibling().name == "hr"

    def test_renders_paragraph(self) -> None:
        from folio.markdown import MarkdownRenderer

        html = MarkdownRenderer().render("Hello, world!")
        assert "<p>" in html
        assert "Hello, world!" in html

    def test_without_gfm_no_rule(self) -> None:
        from folio.markdown import MarkdownRenderer

        html = MarkdownRenderer(MarkdownConfig(gfm=False)).render("# Title")
        assert _soup(html).find("hr") is None

    def test_empty_source_returns_empty(self) -> None:
        from folio.markdown import MarkdownRenderer

        assert MarkdownRenderer().render("") == ""


# ── idify ────────────────────────────────────────────────────────────────


class TestIdify:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Getting Started", "getting-started"),
            ("Getting Started, v2", "getting-started-v2"),
            ("  What's new?  ", "whats-new-"),
            ("$config_value", "$config_value"),
            ("API v1.2", "api-v12"),
        ],
    )
    def test_idify(self, text: str, expected: str) -> None:
        assert idify(text) == expected


# ── postprocess ──────────────────────────────────────────────────────────


class TestHeadings:
    def test_existing_id_rederived_from_text(self) -> None:
        html = postprocess('<h3 id="install-amp-run">Install &amp; Run</h3>', gfm=False)
        assert html == '<h3 id="install---run">Install &amp; Run</h3>'

    def test_other_attributes_kept(self) -> None:
        heading = _soup(postprocess('<h2 id="x" class="t">Usage</h2>', gfm=False)).h2
        assert heading["id"] == "usage"
        assert heading["class"] == ["t"]

    def test_inline_markup_ignored_for_id(self) -> None:
        html = postprocess('<h4 id="x"><code>run()</code> method</h4>', gfm=False)
        assert _soup(html).h4["id"] == "run---method"

    def test_heading_without_id_left_alone(self) -> None:
        assert postprocess("<h3>Plain</h3>", gfm=False) == "<h3>Plain</h3>"

    def test_rule_after_top_headings_only(self) -> None:
        soup = _soup(postprocess("<h1>A</h1><h2>B</h2><h3>C</h3>"))
        assert len(soup.find_all("hr")) == 2
        assert soup.h1.find_next_sibling().name == "hr"
        assert soup.h2.find_next_sibling().name == "hr"
        assert soup.h3.find_next_sibling() is None


class TestTasks:
    def test_checkbox_items(self) -> None:
        source = (
            "<ul>\n"
            '<li><input type="checkbox" disabled> todo</li>\n'
            '<li><input type="checkbox" checked disabled> done</li>\n'
            "</ul>"
        )
        soup = _soup(postprocess(source))
        assert soup.ul["class"] == ["folio", "task-list"]
        assert all(li["class"] == ["folio", "task-item"] for li in soup.find_all("li"))

    def test_list_marked_when_task_is_not_first(self) -> None:
        source = (
            "<ul>\n<li>plain</li>\n"
            '<li><input type="checkbox" disabled> todo</li>\n</ul>'
        )
        soup = _soup(postprocess(source))
        first, second = soup.find_all("li")
        assert soup.ul["class"] == ["folio", "task-list"]
        assert first.get("class") is None
        assert second["class"] == ["folio", "task-item"]

    def test_every_enclosing_list_marked(self) -> None:
        source = (
            "<ul><li>outer<ul>"
            '<li><input type="checkbox" disabled> nested</li>'
            "</ul></li></ul>"
        )
        soup = _soup(postprocess(source))
        outer, inner = soup.find_all("ul")
        assert outer["class"] == ["folio", "task-list"]
        assert inner["class"] == ["folio", "task-list"]

    def test_bracket_markers_become_checkboxes(self) -> None:
        soup = _soup(postprocess("<ul><li>[ ] open</li><li>[x] closed</li></ul>"))
        open_item, closed_item = soup.find_all("li")
        assert open_item.input["type"] == "checkbox"
        assert not open_item.input.has_attr("checked")
        assert closed_item.input.has_attr("checked")
        assert "[x]" not in closed_item.get_text()
        assert closed_item.get_text().strip() == "closed"

    def test_plain_lists_untouched(self) -> None:
        source = "<ul>\n<li>one</li>\n</ul>"
        assert postprocess(source) == source

    def test_tasks_disabled(self) -> None:
        source = '<ul>\n<li><input type="checkbox"/> todo</li>\n</ul>'
        assert postprocess(source, tasks=False) == source


class TestDocsEdits:
    @pytest.mark.parametrize("cls", ["folio-hide", "folio-ignore"])
    def test_hidden(self, cls: str) -> None:
        soup = _soup(postprocess(f'<p class="{cls}">secret</p>'))
        assert soup.p["style"] == "display: none"

    def test_hide_keeps_existing_style(self) -> None:
        soup = _soup(postprocess('<p class="folio-hide" style="color: red;">x</p>'))
        assert soup.p["style"] == "color: red; display: none"

    def test_removed(self) -> None:
        html = postprocess('<p>keep</p><div class="folio-remove"><p class="folio-remove">x</p></div>')
        assert html == "<p>keep</p>"

    def test_details_content_wrapped(self) -> None:
        source = "<details><summary>More</summary><p>one</p><p>two</p></details>"
        soup = _soup(postprocess(source))
        wrapper = soup.details.find("div", class_="details-content")
        assert wrapper is not None
        assert [p.get_text() for p in wrapper.find_all("p")] == ["one", "two"]
        assert soup.details.summary.find_next_sibling() is wrapper

    def test_details_without_content(self) -> None:
        source = "<details><summary>Empty</summary></details>"
        assert postprocess(source) == source

    def test_image_width_limited(self) -> None:
        soup = _soup(postprocess('<p><img src="a.png" alt="a"></p>'))
        assert soup.img["style"] == "max-width: 100%"


# ── Errors ───────────────────────────────────────────────────────────────


class TestMarkdownErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(MarkdownNotInstalledError, MarkdownError)
        assert issubclass(MarkdownError, BuildError)

    def test_missing_patitas_raises(self, monkeypatch) -> None:
        import sys

        from folio.markdown import MarkdownRenderer

        monkeypatch.setitem(sys.modules, "patitas", None)
        with pytest.raises(MarkdownNotInstalledError, match="patitas"):
            MarkdownRenderer()
