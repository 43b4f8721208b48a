"""Folio CLI — build, inspect and serve documentation sites.

Entry point registered as ``folio`` in ``pyproject.toml``::

    [project.scripts]
    folio = "folio.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``folio`` command."""
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Folio — documentation sites as single-page apps.",
    )
    # Shared by every subcommand so "-v" may follow it
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show progress (-vv for debug output)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- folio build ------------------------------------------------------
    build_parser = subparsers.add_parser(
        "build", parents=[common], help="Build a documentation site"
    )
    build_parser.add_argument("config", help="Path to the JSON build configuration")
    build_parser.add_argument("--dest", default=None, help="Override the output directory")
    build_parser.add_argument(
        "--clean",
        action="store_true",
        help="Empty the output directory before building",
    )

    # -- folio routes -----------------------------------------------------
    routes_parser = subparsers.add_parser(
        "routes", parents=[common], help="List the routes a build would create"
    )
    routes_parser.add_argument("config", help="Path to the JSON build configuration")

    # -- folio serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", parents=[common], help="Serve a built site")
    serve_parser.add_argument("directory", nargs="?", default=".", help="Built site directory")
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)

    if args.command == "build":
        from folio.cli._build import run_build

        run_build(args)
    elif args.command == "routes":
        from folio.cli._routes import run_routes

        run_routes(args)
    elif args.command == "serve":
        from folio.cli._serve import run_serve

        run_serve(args)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("folio").setLevel(level)
