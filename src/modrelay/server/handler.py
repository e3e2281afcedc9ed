"""ASGI handler — translates ASGI scope/messages to modrelay types.

The only component that touches raw ASGI directly. Converts scope dicts
to Request objects, dispatches through the middleware pipeline, and
sends the Response back through ASGI send().
"""

from collections.abc import Callable
from typing import Any

from modrelay._internal.asgi import Receive, Scope, Send
from modrelay.errors import HTTPError, NotFound
from modrelay.http.request import Request
from modrelay.http.response import Response
from modrelay.middleware.protocol import Next
from modrelay.server.errors import handle_http_error, handle_internal_error
from modrelay.server.sender import send_response


async def _dispatch(request: Request) -> Response:
    """Innermost handler: nothing in the pipeline answered."""
    raise NotFound(f"{request.path} not found")


def build_pipeline(middleware: tuple[Callable[..., Any], ...]) -> Next:
    """Wrap *middleware* around the innermost handler, first entry outermost."""
    handler: Next = _dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = make_next
    return handler


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Next,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await pipeline(request)
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug)

    await send_response(response, send, head=request.method == "HEAD")
