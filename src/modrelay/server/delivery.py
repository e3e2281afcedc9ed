"""File content delivery.

Reads files for the module resolver and the static middleware. Contents
are kept in a small LRU keyed by path and validated against the file's
``mtime_ns`` and size, so a page reload re-reads only what changed.
Browsers revalidate with ``If-None-Match`` and get an empty 304 back
while the file is unchanged.
"""

import mimetypes
import threading
from collections import OrderedDict
from dataclasses import dataclass
from email.utils import formatdate
from pathlib import Path

import anyio

from modrelay.errors import NotFound
from modrelay.http.request import Request
from modrelay.http.response import Response

mimetypes.add_type("application/javascript", ".mjs")


@dataclass(frozen=True, slots=True)
class CachedFile:
    """File bytes plus the validators derived from its stat result."""

    body: bytes
    mtime_ns: int
    size: int

    @property
    def etag(self) -> str:
        return f'W/"{self.size:x}-{self.mtime_ns:x}"'

    @property
    def last_modified(self) -> str:
        return formatdate(self.mtime_ns / 1_000_000_000, usegmt=True)


class FileCache:
    """Bounded, thread-safe LRU of file contents.

    Reads happen in worker threads, hence the lock.
    """

    __slots__ = ("_entries", "_lock", "maxsize")

    def __init__(self, maxsize: int = 512) -> None:
        self.maxsize = maxsize
        self._entries: OrderedDict[Path, CachedFile] = OrderedDict()
        self._lock = threading.Lock()

    def read(self, path: Path) -> CachedFile:
        """Return current contents of *path*, re-reading when it changed.

        Raises:
            FileNotFoundError: If *path* does not exist.
            IsADirectoryError: If *path* is a directory.
        """
        stat = path.stat()
        with self._lock:
            entry = self._entries.get(path)
            if entry is not None and entry.mtime_ns == stat.st_mtime_ns and entry.size == stat.st_size:
                self._entries.move_to_end(path)
                return entry

        entry = CachedFile(body=path.read_bytes(), mtime_ns=stat.st_mtime_ns, size=stat.st_size)
        with self._lock:
            self._entries[path] = entry
            self._entries.move_to_end(path)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)
        return entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# Shared by every App in the process; entries self-validate against disk.
file_cache = FileCache()


def guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    if content_type is None:
        return "application/octet-stream"
    if content_type.startswith("text/") or content_type == "application/javascript":
        return f"{content_type}; charset=utf-8"
    return content_type


async def serve_file(
    request: Request,
    file: str | Path,
    *,
    cache_control: str = "no-cache",
    cache: FileCache | None = None,
) -> Response:
    """Build the response for *file*, or a 304 when the browser's copy is current.

    Raises:
        NotFound: If the file is missing, is not a regular file, or cannot
            be read.
    """
    path = Path(file)
    store = cache if cache is not None else file_cache
    try:
        entry = await anyio.to_thread.run_sync(store.read, path)
    except OSError as exc:
        raise NotFound(f"{path} cannot be read: {exc.strerror or exc}") from exc

    if request.if_none_match == entry.etag:
        response = Response(body=b"", status=304, content_type=guess_content_type(path))
    else:
        response = Response(body=entry.body, content_type=guess_content_type(path))

    return (
        response.with_header("Cache-Control", cache_control)
        .with_header("ETag", entry.etag)
        .with_header("Last-Modified", entry.last_modified)
    )
