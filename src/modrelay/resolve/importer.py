"""Importer context for failed module requests.

Browsers send a ``Referer`` header naming the document whose import
triggered the request. It is only used for diagnostics, so a missing or
garbled header degrades to ``UnknownImporter`` instead of failing the
request.
"""

from dataclasses import dataclass
from typing import TypeAlias
from urllib.parse import urlsplit


@dataclass(frozen=True, slots=True)
class KnownImporter:
    """The importing document's URL path, e.g. ``/src/main.js``."""

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class UnknownImporter:
    """No usable ``Referer`` header was sent."""

    def __str__(self) -> str:
        return "unknown importer"


Importer: TypeAlias = KnownImporter | UnknownImporter


def importer_from_referer(referer: str | None) -> Importer:
    """Extract the importing document's path from a ``Referer`` value."""
    if not referer:
        return UnknownImporter()
    try:
        parts = urlsplit(referer.strip())
    except ValueError:
        return UnknownImporter()
    # An absolute URL is expected; a bare path is accepted as-is.
    if not parts.path or (not parts.scheme and not parts.path.startswith("/")):
        return UnknownImporter()
    return KnownImporter(parts.path)
