"""modrelay — a development server that resolves bare module imports.

Source files import packages by name (``import { ref } from "vue"``).
modrelay serves those imports from ``/@modules/<identifier>``, mapping
each identifier to a file through a fixed tier order (bundled framework
runtime, cache, pre-bundled dependency, ``node_modules`` walk) and
remembering the answer in both directions.

Basic usage::

    from modrelay import App, AppConfig

    app = App(AppConfig(root="./frontend", debug=True))
    app.run()

Or from the shell::

    modrelay serve ./frontend --port 3000
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "IdentifierCache",
    "Middleware",
    "ModRelayError",
    "ModuleResolver",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "StaticFiles",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import modrelay`` fast while providing a clean top-level API.
    """
    if name == "App":
        from modrelay.app import App

        return App

    if name == "AppConfig":
        from modrelay.config import AppConfig

        return AppConfig

    if name == "Request":
        from modrelay.http.request import Request

        return Request

    if name == "Response":
        from modrelay.http.response import Response

        return Response

    if name == "IdentifierCache":
        from modrelay.resolve.cache import IdentifierCache

        return IdentifierCache

    if name in ("Middleware", "ModuleResolver", "Next", "StaticFiles"):
        import modrelay.middleware as _mw

        return getattr(_mw, name)

    if name in ("ModRelayError", "ConfigurationError", "HTTPError", "NotFound"):
        import modrelay.errors as _errors

        return getattr(_errors, name)

    msg = f"module 'modrelay' has no attribute {name!r}"
    raise AttributeError(msg)
