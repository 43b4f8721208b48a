"""Host configuration for path-routed sites.

Query routing needs nothing: every route is served by the main file.
Path routing needs the host to send ``/guide/`` to the main file:

- ``apache``: an ``.htaccess`` rewriting unknown paths to the main file.
- ``github`` / ``static`` / ``windows``: a ``<route>/index.html`` per
  route that stores the route path in ``sessionStorage.redirectPath`` and
  refreshes back to the base, where the SPA picks the path up again.
"""

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from kida import Environment

from folio.config import AppConfig
from folio.render.templating import HTACCESS_TEMPLATE, REDIRECT_TEMPLATE, render_template
from folio.routing.types import RouteEntry, ServerType

logger = logging.getLogger("folio.build")

_REDIRECT_SERVERS = frozenset({ServerType.GITHUB, ServerType.STATIC, ServerType.WINDOWS})


def write_server_config(
    dest: Path,
    routes: Iterable[RouteEntry],
    config: AppConfig,
    env: Environment,
) -> list[Path]:
    """Write host configuration files into *dest*.

    Returns:
        The files written. Existing redirect pages are left untouched.
    """
    if not config.path_routing:
        return []

    logger.info("Evaluating server/host configuration for the SPA...")

    if config.server == ServerType.APACHE:
        target = dest / ".htaccess"
        logger.info("Generating Apache config file (.htaccess): %s", target)
        text = render_template(
            env,
            HTACCESS_TEMPLATE,
            {"base": config.base, "main": config.main_file, "main_escaped": re.escape(config.main_file)},
        )
        target.write_text(text, encoding="utf-8")
        return [target]

    if config.server not in _REDIRECT_SERVERS:
        return []

    written: list[Path] = []
    for route in routes:
        segments = [part for part in route.path.split("/") if part]
        if not segments:
            continue
        target = dest.joinpath(*segments, "index.html")
        if target.exists():
            logger.debug("Redirect page exists, skipped: %s", target)
            continue
        text = render_template(
            env,
            REDIRECT_TEMPLATE,
            {
                "back_to_base": "../" * len(segments),
                "redirect_path": route.path.lstrip("/"),
            },
        )
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        written.append(target)

    logger.info("Generated %d redirect page(s)", len(written))
    return written
