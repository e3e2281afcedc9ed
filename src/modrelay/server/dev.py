"""Development server.

Starts a pounce ASGI server with the live modrelay App object.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
) -> None:
    """Start a single-worker pounce server for *app*.

    Pounce's ``run()`` takes an import string, but modrelay has a live
    ``App`` object, so ``pounce.Server`` is driven directly.

    Args:
        app: ASGI callable (modrelay App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart when Python sources change. Only useful while
            working on modrelay itself; project files never need it.
        reload_dirs: Extra directories to watch when reload is active.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_dirs=reload_dirs,
    )
    server = Server(config, app)
    server.run()
