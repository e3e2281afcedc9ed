"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The server checks the shape, not the lineage.
A middleware either answers the request itself or awaits ``next`` and
may adjust what comes back.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from modrelay.http.request import Request
from modrelay.http.response import Response

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for modrelay middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class NoStore:
            async def __call__(self, request: Request, next: Next) -> Response:
                response = await next(request)
                return response.with_header("Cache-Control", "no-store")
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
