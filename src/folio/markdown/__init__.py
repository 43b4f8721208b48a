"""Markdown rendering for documentation content via patitas.

Markdown sources become content pages: patitas renders the HTML, then a
docs-flavoured post-processing pass adds heading ids, GFM-style rules
under top-level headings and task-list classes.

Basic usage::

    from folio.markdown import MarkdownRenderer

    md = MarkdownRenderer()
    html = md.render("# Guide")
"""

from folio.markdown.errors import MarkdownError, MarkdownNotInstalledError
from folio.markdown.postprocess import idify, postprocess
from folio.markdown.renderer import MarkdownRenderer

__all__ = [
    "MarkdownError",
    "MarkdownNotInstalledError",
    "MarkdownRenderer",
    "idify",
    "postprocess",
]
