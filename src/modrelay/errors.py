"""modrelay exception hierarchy.

Shared by the app, the ASGI handler and the middleware so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class ModRelayError(Exception):
    """Base for all modrelay-specific errors."""


class ConfigurationError(ModRelayError):
    """Raised when server configuration is invalid.

    Typically raised by ``App._freeze()`` at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(ModRelayError):
    """An error that maps directly to an HTTP status code.

    The ASGI handler catches these and turns them into plain responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing in the pipeline answered the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
