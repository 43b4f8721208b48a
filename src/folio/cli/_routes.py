"""``folio routes`` — list the routes a build would create.

Classifies the configured sources and prints a table of ID, TYPE, PATH
and SOURCE without writing any output.
"""

import argparse
import sys

from folio.errors import FolioError


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table for ``args.config``."""
    from folio.build.sources import collect_sources
    from folio.config import load_config
    from folio.routing.table import RouteTable
    from folio.routing.types import SourceType

    try:
        config = load_config(args.config)
        sources = collect_sources(
            config.src,
            config.root,
            config.jsdoc,
            default_api_name=config.app.default_api_name,
        )
        table = RouteTable(config.app)
        for name, files in sources.js.items():
            if files:
                table.add(name, SourceType.JS)
        for name in sources.md:
            table.add(name, SourceType.MD)
        for name in sources.html:
            table.add(name, SourceType.HTML)
        table.freeze()
    except FolioError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not table:
        print("No routes.")
        return

    rows = [(e.id, str(e.type), e.path, str(e.source_type)) for e in table]
    headers = ("ID", "TYPE", "PATH", "SOURCE")
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6 + len(headers[3]), 80))
    for row in rows:
        print(fmt.format(*row))
