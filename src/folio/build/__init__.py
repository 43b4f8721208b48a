"""Build pipeline — sources, doc comments, outputs and host configuration.

Basic usage::

    from folio.build import build
    from folio.config import load_config

    result = build(load_config("folio.json"))
    print(result.stats)
"""

from folio.build.builder import Builder, BuildResult, build

__all__ = ["BuildResult", "Builder", "build"]
