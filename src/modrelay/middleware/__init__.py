"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    ModuleResolver -- Resolve and serve /@modules/<identifier> imports
    StaticFiles -- Serve project files from a directory
"""

from modrelay.middleware.modules import ModuleResolver
from modrelay.middleware.protocol import Middleware, Next
from modrelay.middleware.static import StaticFiles

__all__ = [
    "Middleware",
    "ModuleResolver",
    "Next",
    "StaticFiles",
]
