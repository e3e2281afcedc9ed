"""Framework runtime probe.

The dev server must keep working when a project imports ``vue`` without
declaring it as a dependency. At startup we check whether the project
has its own copy; if it does not, a small, closed set of identifiers is
served from the runtime packages shipped with modrelay instead.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from modrelay.resolve.packages import find_package_dir, read_manifest

logger = logging.getLogger("modrelay.resolve")

# The only identifiers the runtime fallback ever answers for.
FALLBACK_IDS = (
    "vue",
    "@vue/runtime-dom",
    "@vue/runtime-core",
    "@vue/reactivity",
    "@vue/shared",
)

BUNDLED_RUNTIME_DIR = Path(__file__).resolve().parent.parent / "_runtime"


def _bundled_entry(runtime_dir: Path, identifier: str) -> Path:
    if identifier == "vue":
        return runtime_dir / "vue" / "dist" / "vue.runtime.esm-bundler.js"
    name = identifier.rsplit("/", 1)[-1]
    return runtime_dir / identifier / "dist" / f"{name}.esm-bundler.js"


@dataclass(frozen=True, slots=True)
class FrameworkRuntimeTable:
    """Whether the framework runtime is installed in the project, and where
    to find the bundled substitutes when it is not.
    """

    is_local: bool
    version: str | None = None
    fallbacks: Mapping[str, Path] = field(default_factory=lambda: MappingProxyType({}))

    def fallback_for(self, identifier: str) -> Path | None:
        """Bundled file for *identifier*, only when the runtime is not local."""
        if self.is_local:
            return None
        return self.fallbacks.get(identifier)


def resolve_framework_runtime(
    root: str | Path,
    runtime_dir: str | Path | None = None,
) -> FrameworkRuntimeTable:
    """Probe *root* for a locally installed framework runtime.

    Called once per server start. ``runtime_dir`` is a ``node_modules``-style
    directory holding the bundled runtime packages; None selects the copy
    shipped inside the modrelay package.
    """
    bundled = Path(runtime_dir).resolve() if runtime_dir is not None else BUNDLED_RUNTIME_DIR
    entries = {ident: _bundled_entry(bundled, ident) for ident in FALLBACK_IDS}
    # Only files present now; a missing bundle leaves later tiers to answer.
    fallbacks = MappingProxyType({ident: file for ident, file in entries.items() if file.is_file()})

    local_dir = find_package_dir(Path(root).resolve(), "vue")
    if local_dir is not None and (local_dir / "package.json").is_file():
        version = read_manifest(local_dir).get("version")
        logger.debug("framework runtime %s installed at %s", version, local_dir)
        return FrameworkRuntimeTable(is_local=True, version=version, fallbacks=fallbacks)

    version = read_manifest(bundled / "vue").get("version")
    logger.debug("framework runtime not installed locally, using bundled copy in %s", bundled)
    return FrameworkRuntimeTable(is_local=False, version=version, fallbacks=fallbacks)
