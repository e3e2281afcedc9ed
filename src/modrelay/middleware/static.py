"""Static project file middleware.

Serves the project's own files (``index.html``, ``/src/main.js``,
stylesheets) from the project root. Root-level serving resolves
directory index files; misses fall through to the next handler.
"""

from pathlib import Path

from modrelay.errors import NotFound
from modrelay.http.request import Request
from modrelay.http.response import Response
from modrelay.middleware.protocol import Next
from modrelay.server.delivery import serve_file


class StaticFiles:
    """Middleware that serves files from a directory.

    Files are served for paths matching the configured prefix.
    Non-matching paths and missing files fall through to the next handler.

    Security: resolves symlinks and verifies the final path is within the
    configured directory to prevent path traversal.

    Usage::

        app.add_middleware(StaticFiles(directory="./frontend", prefix="/"))
    """

    __slots__ = ("_cache_control", "_directory", "_index", "_prefix")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/",
        *,
        index: str = "index.html",
        cache_control: str = "no-cache",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

        # Normalize prefix: ensure leading slash, strip trailing.
        # Root prefix "/" normalizes to "" (every path is a candidate).
        stripped = "/" + prefix.strip("/")
        self._prefix = stripped if stripped != "/" else ""

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve a file or fall through."""
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        path = request.path

        if self._prefix:
            if not path.startswith(self._prefix + "/") and path != self._prefix:
                return await next(request)
            relative = path[len(self._prefix) :].lstrip("/")
        else:
            relative = path.lstrip("/")

        file_path = (self._directory / relative).resolve() if relative else self._directory
        if not file_path.is_relative_to(self._directory):
            return Response(body="Forbidden", status=403)

        if file_path.is_dir():
            index_path = file_path / self._index
            if not index_path.is_file():
                return await next(request)
            # Relative URLs inside the index must resolve against the directory.
            if relative and not path.endswith("/"):
                return Response(body="", status=301).with_header("Location", path + "/")
            file_path = index_path

        if not file_path.is_file():
            return await next(request)

        try:
            return await serve_file(request, file_path, cache_control=self._cache_control)
        except NotFound:
            # Deleted between the check and the read
            return await next(request)
