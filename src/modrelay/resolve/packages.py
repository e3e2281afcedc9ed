"""Package-tree resolution.

Finds the file behind a bare module identifier the way JavaScript
package managers lay dependencies out: look for
``node_modules/<package>`` in the project root, then in each ancestor
directory, nearest first. A bare package name resolves through the
entry point its ``package.json`` declares; an identifier with a sub-path
resolves to a file inside the package.

Everything here is blocking file-system work. The resolution chain runs
it in a worker thread.
"""

import json
from pathlib import Path
from typing import Any

# Manifest fields naming a package's entry point, most browser-friendly first.
ENTRY_FIELDS = ("module", "browser", "main")

# Extensions tried for extension-less sub-paths and entry points.
EXTENSIONS = (".js", ".mjs", ".json")


def split_identifier(identifier: str) -> tuple[str, str]:
    """Split an identifier into ``(package, subpath)``.

    Scoped packages take two segments::

        split_identifier("lodash/debounce")   # ("lodash", "debounce")
        split_identifier("@vue/shared")       # ("@vue/shared", "")
        split_identifier("@scope/pkg/a/b.js") # ("@scope/pkg", "a/b.js")
    """
    segments = identifier.strip("/").split("/")
    count = 2 if segments[0].startswith("@") else 1
    return "/".join(segments[:count]), "/".join(segments[count:])


def find_package_dir(root: Path, package: str) -> Path | None:
    """Nearest ``node_modules/<package>`` directory from *root* upwards."""
    for directory in (root, *root.parents):
        candidate = directory / "node_modules" / package
        if candidate.is_dir():
            return candidate
    return None


def read_manifest(package_dir: Path) -> dict[str, Any]:
    """Parsed ``package.json`` of *package_dir*; empty when missing or invalid."""
    try:
        data = json.loads((package_dir / "package.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _entry_point(manifest: dict[str, Any]) -> str:
    for field in ENTRY_FIELDS:
        value = manifest.get(field)
        # ``browser`` may also be a replacement map; only the string form names an entry.
        if isinstance(value, str) and value:
            return value
    return "index.js"


def _try_file(base: Path) -> Path | None:
    """*base* itself, *base* plus a known extension, or ``base/index.js``."""
    if base.is_file():
        return base
    for ext in EXTENSIONS:
        candidate = base.with_name(base.name + ext)
        if candidate.is_file():
            return candidate
    index = base / "index.js"
    if index.is_file():
        return index
    return None


def resolve_package_tree_file(root: str | Path, identifier: str) -> Path | None:
    """Resolve *identifier* against the ``node_modules`` tree above *root*.

    Returns an absolute path, or None when the package or file is missing.
    """
    if not identifier or identifier.startswith((".", "/")):
        return None

    package, subpath = split_identifier(identifier)
    package_dir = find_package_dir(Path(root).resolve(), package)
    if package_dir is None:
        return None

    if subpath:
        return _try_file(package_dir / subpath)

    entry = _entry_point(read_manifest(package_dir))
    found = _try_file(package_dir / entry)
    if found is None and entry != "index.js":
        found = _try_file(package_dir / "index.js")
    return found
