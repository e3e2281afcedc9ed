"""Bidirectional identifier ↔ file cache.

One instance per App. The module resolver writes it after every
successful resolution; anything that needs to map a changed file back to
the URL the browser imported it from (a watcher, an HMR layer) reads it
through ``lookup_request_path``.

Both mappings are written by a single synchronous call, so no other task
on the event loop can observe one without the other. Concurrent
resolutions of the same identifier write the same values, so the last
write winning is harmless and no lock is taken.
"""

from __future__ import annotations

from pathlib import Path


class IdentifierCache:
    """Process-lifetime mapping of module identifiers to resolved files.

    Entries are never evicted by the resolver. ``clear()`` exists for
    server restarts and tests.
    """

    __slots__ = ("_file_to_request_path", "_id_to_file")

    def __init__(self) -> None:
        self._id_to_file: dict[str, Path] = {}
        self._file_to_request_path: dict[Path, str] = {}

    def record_resolution(self, identifier: str, file: str | Path, request_path: str) -> None:
        """Insert or overwrite both directions of a resolution."""
        resolved = Path(file)
        self._id_to_file[identifier] = resolved
        self._file_to_request_path[resolved] = request_path

    def lookup_file(self, identifier: str) -> Path | None:
        """File previously resolved for *identifier*, if any."""
        return self._id_to_file.get(identifier)

    def lookup_request_path(self, file: str | Path) -> str | None:
        """Request path a resolved *file* is served under, if any."""
        return self._file_to_request_path.get(Path(file))

    def clear(self) -> None:
        self._id_to_file.clear()
        self._file_to_request_path.clear()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._id_to_file

    def __len__(self) -> int:
        return len(self._id_to_file)

    def __repr__(self) -> str:
        return f"IdentifierCache({len(self)} modules)"
