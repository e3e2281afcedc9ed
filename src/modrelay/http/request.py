"""Immutable HTTP request.

The dev server only ever reads requests: method, path and a handful of
headers (``Referer``, ``If-None-Match``). Headers are decoded once at
creation and stored lower-cased in a read-only mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from modrelay._internal.asgi import Receive


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``headers`` keys are lower-case. When a header repeats, the first
    value wins, which is all the module pipeline needs.
    """

    method: str
    path: str
    headers: Mapping[str, str]
    query_string: str = ""

    # Private: ASGI receive callable (bodies are never read by the dev server)
    _receive: Receive | None = None

    @property
    def referer(self) -> str | None:
        """The ``Referer`` header, naming the document that issued the request."""
        return self.headers.get("referer")

    @property
    def if_none_match(self) -> str | None:
        """The ``If-None-Match`` header sent by a revalidating browser."""
        return self.headers.get("if-none-match")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive | None = None) -> Request:
        """Create a Request from an ASGI scope."""
        headers: dict[str, str] = {}
        for raw_name, raw_value in scope.get("headers", ()):
            name = raw_name.decode("latin-1").lower()
            if name not in headers:
                headers[name] = raw_value.decode("latin-1")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=MappingProxyType(headers),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            _receive=receive,
        )
