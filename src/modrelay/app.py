"""modrelay application class.

Mutable during setup (middleware registration). Frozen at runtime when
app.run() or __call__() is first invoked: the configuration is
validated, the framework runtime is probed, and the middleware pipeline
is compiled.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from functools import partial
from typing import Any

from modrelay._internal.asgi import Receive, Scope, Send
from modrelay.config import AppConfig
from modrelay.errors import ConfigurationError
from modrelay.middleware.modules import ModuleResolver
from modrelay.middleware.protocol import Middleware, Next
from modrelay.middleware.static import StaticFiles
from modrelay.resolve.cache import IdentifierCache
from modrelay.resolve.chain import ResolutionChain, Strategy, default_strategies
from modrelay.resolve.optimized import resolve_optimized_module
from modrelay.resolve.runtime import FrameworkRuntimeTable, resolve_framework_runtime
from modrelay.server.handler import build_pipeline, handle_request

logger = logging.getLogger("modrelay.server")


class App:
    """The modrelay dev server application.

    One ``App`` owns one ``IdentifierCache``; pass your own to share or
    inspect it. ``runtime`` and ``strategies`` replace the startup probe
    and the resolution tiers, mostly for tests.

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app when several requests arrive at once.
    """

    __slots__ = (
        "_cache",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_module_resolver",
        "_pipeline",
        "_runtime",
        "_strategies",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        cache: IdentifierCache | None = None,
        runtime: FrameworkRuntimeTable | None = None,
        strategies: Iterable[Strategy] | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._cache: IdentifierCache = cache if cache is not None else IdentifierCache()
        self._runtime: FrameworkRuntimeTable | None = runtime
        self._strategies: tuple[Strategy, ...] | None = (
            tuple(strategies) if strategies is not None else None
        )
        self._middleware_list: list[Middleware] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._module_resolver: ModuleResolver | None = None
        self._pipeline: Next | None = None

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware ahead of module resolution and static files."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Collaborator access --

    @property
    def module_cache(self) -> IdentifierCache:
        """The identifier cache. Collaborators must treat it as read-only."""
        return self._cache

    @property
    def runtime(self) -> FrameworkRuntimeTable:
        """Framework runtime table, probed once at freeze time."""
        self._ensure_frozen()
        assert self._runtime is not None
        return self._runtime

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Compile the app and start the development server."""
        self._ensure_frozen()

        from modrelay.server.dev import run_dev_server

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info(
            "serving %s on http://%s:%d (modules under %s)",
            self.config.root_path,
            _host,
            _port,
            self.config.module_prefix,
        )
        run_dev_server(
            self,
            _host,
            _port,
            reload=self.config.reload,
            reload_dirs=self.config.reload_dirs,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._pipeline is not None

        await handle_request(
            scope,
            receive,
            send,
            pipeline=self._pipeline,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, freezing the app at startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except ConfigurationError as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Validate config, probe the runtime, and compile the pipeline.

        MUST only be called while holding _freeze_lock.
        """
        self._validate_config()
        root = self.config.root_path

        # 1. Framework runtime — queried once per server start
        if self._runtime is None:
            self._runtime = resolve_framework_runtime(root, self.config.runtime_dir)
        if not self._runtime.is_local:
            if self._runtime.fallbacks:
                logger.info("vue is not installed in %s, serving the bundled runtime", root)
            else:
                logger.warning(
                    "vue is not installed in %s and no bundled runtime was found; "
                    "vue imports resolve through optimized modules and node_modules only",
                    root,
                )

        # 2. Resolution tiers
        strategies = self._strategies
        if strategies is None:
            strategies = default_strategies(
                optimized=partial(resolve_optimized_module, optimized_dir=self.config.optimized_path),
            )

        self._module_resolver = ModuleResolver(
            root,
            cache=self._cache,
            runtime=self._runtime,
            chain=ResolutionChain(strategies),
            prefix=self.config.module_prefix,
            cache_control=self.config.module_cache_control,
        )

        # 3. Pipeline: user middleware, module resolution, project files
        middleware_list: list[Callable[..., Any]] = [*self._middleware_list, self._module_resolver]
        if self.config.serve_static:
            middleware_list.append(
                StaticFiles(
                    root,
                    prefix="/",
                    index=self.config.index,
                    cache_control=self.config.static_cache_control,
                )
            )
        self._middleware = tuple(middleware_list)
        self._pipeline = build_pipeline(self._middleware)
        self._frozen = True

    def _validate_config(self) -> None:
        prefix = self.config.module_prefix
        if not prefix.startswith("/") or not prefix.endswith("/") or prefix == "/":
            msg = f"module_prefix must start and end with '/' and name a segment, got {prefix!r}"
            raise ConfigurationError(msg)
        if not self.config.root_path.is_dir():
            msg = f"Project root {self.config.root_path} is not a directory"
            raise ConfigurationError(msg)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving. "
                "Register middleware before calling app.run()."
            )
            raise RuntimeError(msg)
