"""Bare module import resolution middleware.

Browsers cannot resolve ``import { ref } from "vue"``. Source served by
the dev server has such imports rewritten to ``/@modules/vue``; this
middleware answers those requests by mapping the identifier to a file
(see ``modrelay.resolve.chain`` for the tier order) and serving it.

Every response produced here is typed as JavaScript, failures included,
so the browser never tries to interpret an error as another content type.
Unresolvable identifiers get an empty 404 and an error log naming the
importing document. Paths outside the prefix fall through untouched.
"""

import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeAlias

from modrelay.errors import NotFound
from modrelay.http.request import Request
from modrelay.http.response import JAVASCRIPT, Response
from modrelay.middleware.protocol import Next
from modrelay.resolve.cache import IdentifierCache
from modrelay.resolve.chain import ResolutionChain, ResolutionContext
from modrelay.resolve.importer import importer_from_referer
from modrelay.resolve.runtime import FrameworkRuntimeTable
from modrelay.server.delivery import serve_file

logger = logging.getLogger("modrelay.resolve")

ServeFile: TypeAlias = Callable[..., Awaitable[Response]]


class ModuleResolver:
    """Middleware that serves ``<prefix><identifier>`` requests.

    The cache and the runtime table are created once per server and
    injected, so each App (and each test) gets its own state::

        resolver = ModuleResolver(
            root,
            cache=IdentifierCache(),
            runtime=resolve_framework_runtime(root),
        )
        app.add_middleware(resolver)
    """

    __slots__ = ("_cache_control", "_chain", "_context", "_prefix", "_serve")

    def __init__(
        self,
        root: str | Path,
        *,
        cache: IdentifierCache,
        runtime: FrameworkRuntimeTable,
        chain: ResolutionChain | None = None,
        prefix: str = "/@modules/",
        cache_control: str = "no-cache",
        serve: ServeFile = serve_file,
    ) -> None:
        self._context = ResolutionContext(root=Path(root).resolve(), cache=cache, runtime=runtime)
        self._chain = chain or ResolutionChain()
        self._prefix = prefix
        self._cache_control = cache_control
        self._serve = serve

    @property
    def cache(self) -> IdentifierCache:
        return self._context.cache

    @property
    def chain(self) -> ResolutionChain:
        return self._chain

    @property
    def prefix(self) -> str:
        return self._prefix

    def request_path(self, identifier: str) -> str:
        """Client-facing URL path for *identifier*."""
        return self._prefix + identifier

    async def __call__(self, request: Request, next: Next) -> Response:
        """Resolve and serve a module request, or fall through."""
        if not request.path.startswith(self._prefix):
            return await next(request)

        identifier = request.path[len(self._prefix) :]
        resolution = await self._chain.resolve(identifier, self._context) if identifier else None

        if resolution is None:
            importer = importer_from_referer(request.referer)
            logger.error(
                'Failed to resolve module import "%s". (imported by %s)',
                identifier,
                importer,
            )
            return Response(body=b"", status=404, content_type=JAVASCRIPT)

        self._context.cache.record_resolution(
            identifier, resolution.file, self.request_path(identifier)
        )
        logger.debug(
            "(%s) %s -> %s", resolution.tier, identifier, self._debug_path(resolution.file)
        )

        try:
            response = await self._serve(request, resolution.file, cache_control=self._cache_control)
        except NotFound:
            logger.error(
                'Module "%s" resolved to %s, which cannot be read.',
                identifier,
                resolution.file,
            )
            return Response(body=b"", status=404, content_type=JAVASCRIPT)
        return response.with_content_type(JAVASCRIPT)

    def _debug_path(self, file: Path) -> str:
        """*file* relative to the project root, or absolute when outside it."""
        if file.is_relative_to(self._context.root):
            return str(file.relative_to(self._context.root))
        return str(file)
