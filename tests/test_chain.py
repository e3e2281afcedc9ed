"""Tests for modrelay.resolve.chain — tier order and fault handling."""

from pathlib import Path

import pytest

from modrelay.resolve.cache import IdentifierCache
from modrelay.resolve.chain import (
    ResolutionChain,
    ResolutionContext,
    Strategy,
    default_strategies,
)
from modrelay.resolve.runtime import FrameworkRuntimeTable

RUNTIME_VUE = Path("/bundled/vue/dist/vue.runtime.esm-bundler.js")


def _context(*, is_local: bool = False, cache: IdentifierCache | None = None) -> ResolutionContext:
    return ResolutionContext(
        root=Path("/project"),
        cache=cache or IdentifierCache(),
        runtime=FrameworkRuntimeTable(is_local=is_local, fallbacks={"vue": RUNTIME_VUE}),
    )


class TestDefaultOrder:
    def test_tier_names(self) -> None:
        assert ResolutionChain().tiers == ("non-local vue", "cached", "optimized", "node_modules")

    def test_blocking_flags(self) -> None:
        blocking = [s.blocking for s in default_strategies()]
        assert blocking == [False, False, True, True]


class TestRuntimeTier:
    async def test_beats_cache_and_disk(self, lookup) -> None:
        cache = IdentifierCache()
        cache.record_resolution("vue", "/stale/vue.js", "/@modules/vue")
        optimized = lookup({"vue": Path("/opt/vue.js")})
        packages = lookup({"vue": Path("/nm/vue/index.js")})
        chain = ResolutionChain(default_strategies(optimized=optimized, package_tree=packages))

        result = await chain.resolve("vue", _context(cache=cache))

        assert result is not None
        assert result.file == RUNTIME_VUE
        assert result.tier == "non-local vue"
        assert optimized.calls == []
        assert packages.calls == []

    async def test_local_runtime_falls_through(self, lookup) -> None:
        packages = lookup({"vue": Path("/nm/vue/index.js")})
        chain = ResolutionChain(default_strategies(optimized=lookup(), package_tree=packages))

        result = await chain.resolve("vue", _context(is_local=True))

        assert result is not None
        assert result.file == Path("/nm/vue/index.js")
        assert result.tier == "node_modules"


class TestCacheTier:
    async def test_hit_skips_disk(self, lookup) -> None:
        cache = IdentifierCache()
        cache.record_resolution("lodash", "/opt/lodash.js", "/@modules/lodash")
        optimized = lookup()
        packages = lookup()
        chain = ResolutionChain(default_strategies(optimized=optimized, package_tree=packages))

        result = await chain.resolve("lodash", _context(cache=cache))

        assert result is not None
        assert result.tier == "cached"
        assert result.file == Path("/opt/lodash.js")
        assert optimized.calls == []
        assert packages.calls == []


class TestDiskTiers:
    async def test_optimized_beats_package_tree(self, lookup) -> None:
        optimized = lookup({"lodash": Path("/root/.cache/optimized/lodash.js")})
        packages = lookup({"lodash": Path("/root/node_modules/lodash/lodash.js")})
        chain = ResolutionChain(default_strategies(optimized=optimized, package_tree=packages))

        result = await chain.resolve("lodash", _context())

        assert result is not None
        assert result.file == Path("/root/.cache/optimized/lodash.js")
        assert result.tier == "optimized"
        assert packages.calls == []

    async def test_package_tree_last(self, lookup) -> None:
        optimized = lookup()
        packages = lookup({"left-pad": Path("/root/node_modules/left-pad/index.js")})
        chain = ResolutionChain(default_strategies(optimized=optimized, package_tree=packages))

        result = await chain.resolve("left-pad", _context())

        assert result is not None
        assert result.tier == "node_modules"
        assert optimized.calls == ["left-pad"]
        assert packages.calls == ["left-pad"]

    async def test_all_decline(self, lookup) -> None:
        chain = ResolutionChain(default_strategies(optimized=lookup(), package_tree=lookup()))
        assert await chain.resolve("does-not-exist", _context()) is None

    async def test_str_result_becomes_path(self) -> None:
        chain = ResolutionChain(
            [Strategy("fixed", lambda identifier, context: "/somewhere/x.js", blocking=True)]
        )
        result = await chain.resolve("x", _context())
        assert result is not None
        assert result.file == Path("/somewhere/x.js")

    async def test_strategies_do_not_write_cache(self, lookup) -> None:
        cache = IdentifierCache()
        chain = ResolutionChain(
            default_strategies(optimized=lookup({"lodash": Path("/opt/lodash.js")}), package_tree=lookup())
        )

        await chain.resolve("lodash", _context(cache=cache))

        assert len(cache) == 0


class TestFaults:
    async def test_raising_strategy_declines(self, lookup, caplog: pytest.LogCaptureFixture) -> None:
        def broken(root: Path, identifier: str) -> Path:
            raise PermissionError("node_modules unreadable")

        packages = lookup({"left-pad": Path("/nm/left-pad/index.js")})
        chain = ResolutionChain(default_strategies(optimized=broken, package_tree=packages))

        with caplog.at_level("WARNING", logger="modrelay.resolve"):
            result = await chain.resolve("left-pad", _context())

        assert result is not None
        assert result.tier == "node_modules"
        assert any("optimized" in r.message and "left-pad" in r.message for r in caplog.records)
        assert any(r.exc_info for r in caplog.records)

    async def test_custom_order(self) -> None:
        seen: list[str] = []

        def record(name: str):
            def resolve(identifier: str, context: ResolutionContext) -> None:
                seen.append(name)

            return resolve

        chain = ResolutionChain([Strategy("a", record("a")), Strategy("b", record("b"), blocking=True)])

        assert await chain.resolve("x", _context()) is None
        assert seen == ["a", "b"]
