"""Lookup of pre-bundled (optimized) dependencies.

A separate build step writes one module per dependency into the
optimized directory, named after the identifier (``lodash.js``,
``@vue/shared.js``). This module only answers whether such a file exists.
"""

from pathlib import Path, PurePosixPath


def resolve_optimized_module(
    root: str | Path,
    identifier: str,
    optimized_dir: str | Path = "node_modules/.modrelay",
) -> Path | None:
    """Pre-bundled file for *identifier*, or None when it was never optimized."""
    if not identifier:
        return None
    cache_dir = (Path(root) / optimized_dir).resolve()
    if not cache_dir.is_dir():
        return None

    name = identifier if PurePosixPath(identifier).suffix else f"{identifier}.js"
    candidate = (cache_dir / name).resolve()
    if not candidate.is_relative_to(cache_dir):
        return None
    return candidate if candidate.is_file() else None
