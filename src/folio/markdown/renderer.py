"""Markdown sources to content pages, via patitas.

The build renders every Markdown source once; ``postprocess`` then applies
the docs-flavoured tweaks (GFM rules under h1/h2, heading ids, task list
classes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from folio.config import MarkdownConfig
from folio.markdown.errors import MarkdownNotInstalledError
from folio.markdown.postprocess import postprocess

if TYPE_CHECKING:
    from patitas import Markdown


class MarkdownRenderer:
    """Turn Markdown text into the HTML of a content page.

    Usage::

        renderer = MarkdownRenderer(MarkdownConfig(highlight=True))
        html = renderer.render(path.read_text())
    """

    __slots__ = ("_config", "_md")

    def __init__(self, config: MarkdownConfig | None = None) -> None:
        self._config = config or MarkdownConfig()
        markdown_cls = _patitas_markdown()
        self._md: Markdown = markdown_cls(
            plugins=list(self._config.plugins or ("all",)),
            highlight=self._config.highlight,
        )

    @property
    def config(self) -> MarkdownConfig:
        return self._config

    def render(self, source: str) -> str:
        if not source:
            return ""
        html = self._md(source)
        return postprocess(html, gfm=self._config.gfm, tasks=self._config.tasks)


def _patitas_markdown() -> Any:
    try:
        from patitas import Markdown
    except ImportError:
        msg = "Rendering Markdown sources needs 'patitas'. Install with: pip install patitas"
        raise MarkdownNotInstalledError(msg) from None
    return Markdown
