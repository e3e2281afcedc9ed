"""Server configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Dev server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(root="./frontend", port=5000, debug=True)

    Relative ``optimized_dir`` paths are taken relative to ``root``.
    """

    # Project
    root: str | Path = "."

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    # Reload (development mode)
    reload: bool = False
    reload_dirs: tuple[str, ...] = ()

    # Module resolution
    module_prefix: str = "/@modules/"
    optimized_dir: str | Path = "node_modules/.modrelay"
    runtime_dir: str | Path | None = None  # None = runtime bundled with modrelay
    module_cache_control: str = "no-cache"

    # Static project files
    serve_static: bool = True
    index: str = "index.html"
    static_cache_control: str = "no-cache"

    # Logging (applied by the CLI only)
    log_level: str = "info"

    @property
    def root_path(self) -> Path:
        """Absolute, symlink-resolved project root."""
        return Path(self.root).resolve()

    @property
    def optimized_path(self) -> Path:
        """Absolute directory holding pre-bundled modules."""
        return self.root_path / self.optimized_dir
