"""``folio build`` — build a documentation site from a JSON config."""

import argparse
import dataclasses
import sys
from pathlib import Path

from folio.errors import FolioError


def run_build(args: argparse.Namespace) -> None:
    """Load ``args.config``, apply CLI overrides and run the build.

    Prints the output directory and route counts.  Any ``FolioError``
    is reported on stderr with exit status 1.
    """
    from folio.build.builder import build
    from folio.config import load_config

    try:
        config = load_config(args.config)
        overrides: dict[str, object] = {}
        if args.dest:
            overrides["dest"] = Path(args.dest).resolve()
        if args.clean:
            overrides["clean"] = True
        if overrides:
            config = dataclasses.replace(config, **overrides)
        result = build(config)
    except FolioError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    stats = result.stats
    print(f"Documentation built: {result.dest}")
    print(f"  API routes:     {stats['api']}")
    print(f"  Content routes: {stats['content']}")
