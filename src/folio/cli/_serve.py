"""``folio serve`` — serve a built site with pounce."""

import argparse
import sys
from pathlib import Path


def run_serve(args: argparse.Namespace) -> None:
    """Serve ``args.directory`` until interrupted."""
    from folio.serve import DEFAULT_HOST, DEFAULT_PORT, run_server

    directory = Path(args.directory)
    if not directory.is_dir():
        print(f'Error: Cannot serve "{args.directory}". Path does not exist!', file=sys.stderr)
        raise SystemExit(1)

    run_server(directory, host=args.host or DEFAULT_HOST, port=args.port or DEFAULT_PORT)
