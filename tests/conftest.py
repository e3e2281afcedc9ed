"""Shared fixtures: on-disk project trees and counting resolver fakes."""

import json
from pathlib import Path

import pytest

from modrelay.resolve.runtime import FrameworkRuntimeTable


def write_package(
    node_modules: Path,
    name: str,
    files: dict[str, str],
    manifest: dict[str, object] | None = None,
) -> Path:
    """Create ``node_modules/<name>`` with a package.json and *files*."""
    package_dir = node_modules / name
    package_dir.mkdir(parents=True, exist_ok=True)
    (package_dir / "package.json").write_text(json.dumps({"name": name, **(manifest or {})}))
    for relative, content in files.items():
        target = package_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return package_dir


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small front-end project with dependencies and one optimized module."""
    root = tmp_path / "app"
    (root / "src").mkdir(parents=True)
    (root / "index.html").write_text('<script type="module" src="/src/main.js"></script>')
    (root / "src" / "main.js").write_text('import pad from "/@modules/left-pad"\n')

    node_modules = root / "node_modules"
    write_package(node_modules, "left-pad", {"index.js": "export default function pad() {}"})
    write_package(
        node_modules,
        "lodash",
        {"lodash.js": "module.exports = {}", "debounce.js": "export default 1"},
        {"main": "lodash.js"},
    )

    optimized = node_modules / ".modrelay"
    optimized.mkdir()
    (optimized / "lodash.js").write_text("export default {} // optimized")
    return root.resolve()


@pytest.fixture
def runtime_dir(tmp_path: Path) -> Path:
    """A bundled runtime directory laid out like the one shipped with modrelay."""
    bundled = tmp_path / "bundled"
    write_package(
        bundled,
        "vue",
        {"dist/vue.runtime.esm-bundler.js": "export const bundled = true"},
        {"version": "3.0.0"},
    )
    write_package(
        bundled,
        "@vue/shared",
        {"dist/shared.esm-bundler.js": "export const shared = true"},
        {"version": "3.0.0"},
    )
    return bundled.resolve()


@pytest.fixture
def non_local_runtime(runtime_dir: Path) -> FrameworkRuntimeTable:
    return FrameworkRuntimeTable(
        is_local=False,
        version="3.0.0",
        fallbacks={
            "vue": runtime_dir / "vue" / "dist" / "vue.runtime.esm-bundler.js",
            "@vue/shared": runtime_dir / "@vue" / "shared" / "dist" / "shared.esm-bundler.js",
        },
    )


class CountingLookup:
    """Collaborator fake that records every identifier it is asked about."""

    def __init__(self, results: dict[str, Path] | None = None) -> None:
        self.results = results or {}
        self.calls: list[str] = []

    def __call__(self, root: Path, identifier: str) -> Path | None:
        self.calls.append(identifier)
        return self.results.get(identifier)


@pytest.fixture
def lookup() -> type[CountingLookup]:
    """Factory for counting resolver fakes: ``lookup({"id": path})``."""
    return CountingLookup


@pytest.fixture
def make_package():
    """``make_package(node_modules, name, files, manifest)`` helper."""
    return write_package
