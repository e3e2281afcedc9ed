"""Module identifier resolution.

Maps the identifiers source files import (``vue``, ``lodash/debounce``)
to files on disk, and remembers the answer in both directions.

    ResolutionChain -- ordered strategies, first file wins
    IdentifierCache -- identifier -> file, file -> request path
    FrameworkRuntimeTable -- bundled runtime fallback when not installed locally
"""

from modrelay.resolve.cache import IdentifierCache
from modrelay.resolve.chain import (
    Resolution,
    ResolutionChain,
    ResolutionContext,
    Strategy,
    default_strategies,
)
from modrelay.resolve.importer import Importer, KnownImporter, UnknownImporter, importer_from_referer
from modrelay.resolve.optimized import resolve_optimized_module
from modrelay.resolve.packages import resolve_package_tree_file
from modrelay.resolve.runtime import FrameworkRuntimeTable, resolve_framework_runtime

__all__ = [
    "FrameworkRuntimeTable",
    "IdentifierCache",
    "Importer",
    "KnownImporter",
    "Resolution",
    "ResolutionChain",
    "ResolutionContext",
    "Strategy",
    "UnknownImporter",
    "default_strategies",
    "importer_from_referer",
    "resolve_framework_runtime",
    "resolve_optimized_module",
    "resolve_package_tree_file",
]
