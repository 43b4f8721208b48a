"""Kida environment setup for documentation templates.

Creates a kida Environment that looks up a user template directory first
and falls back to folio's built-in templates.  The environment is
created once per build (or renderer) and is immutable afterwards.
"""

import html
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader
from kida.utils.html import Markup

from folio.spa.location import join_base

# Template names; the first three are partials rendered into the main element
API_TEMPLATE = "api.html"
CONTENT_TEMPLATE = "content.html"
NOT_FOUND_TEMPLATE = "404.html"
INDEX_TEMPLATE = "index.html"
REDIRECT_TEMPLATE = "redirect.html"
HTACCESS_TEMPLATE = "htaccess"

_DOT_PROP_RE = re.compile(r"(.*)([.#~]\w+)")


def dot_prop(name: str) -> Markup:
    """Emphasize the last member of a dotted long name.

    Example:
        {{ "Foo.bar#baz" | dot_prop }}
        → <span class="color-gray">Foo.bar</span>#baz
    """
    match = _DOT_PROP_RE.match(name or "")
    if not match:
        return Markup(f"<b>{html.escape(name or '')}</b>")
    owner, member = match.groups()
    return Markup(f'<span class="color-gray">{html.escape(owner)}</span>{html.escape(member)}')


def attr(value: Any, name: str) -> str | Markup:
    """Output an HTML attribute when value is truthy, else empty string."""
    if not value:
        return ""
    return Markup(f' {name}="{html.escape(str(value))}"')


def safe_html(value: Any) -> Markup:
    """Mark pre-rendered HTML (content pages, doc descriptions) as safe."""
    return Markup(value or "")


BUILTIN_FILTERS: dict[str, Callable[..., Any]] = {
    "attr": attr,
    "dot_prop": dot_prop,
    "html": safe_html,
    "url": join_base,
}


def create_environment(
    template_dir: str | Path | None = None,
    *,
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create the kida Environment for rendering documentation.

    Templates in *template_dir* override the built-in ones by name.
    """
    loaders = []
    if template_dir is not None:
        loaders.append(FileSystemLoader(str(template_dir)))
    loaders.append(PackageLoader("folio", "templates"))

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )

    env.update_filters(BUILTIN_FILTERS)
    if filters:
        env.update_filters(filters)

    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env


def render_template(env: Environment, name: str, context: dict[str, Any]) -> str:
    """Render a template to string."""
    return env.get_template(name).render(context)
