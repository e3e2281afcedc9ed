"""Ordered module resolution strategies.

A module identifier is resolved by trying strategies in a fixed order
and stopping at the first one that names a file:

1. ``non-local vue`` — bundled framework runtime, only when the project
   does not install its own. Beats the cache: it is a substitution, not
   a lookup result.
2. ``cached`` — a file recorded by an earlier request.
3. ``optimized`` — a pre-bundled copy of the dependency.
4. ``node_modules`` — the package tree walk.

The order lives in a tuple of ``Strategy`` records so it can be read,
tested per tier, and swapped out in tests. Strategies never write the
cache; the module resolver middleware does that once the chain returns.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import TypeAlias

import anyio

from modrelay.resolve.cache import IdentifierCache
from modrelay.resolve.optimized import resolve_optimized_module
from modrelay.resolve.packages import resolve_package_tree_file
from modrelay.resolve.runtime import FrameworkRuntimeTable

logger = logging.getLogger("modrelay.resolve")

# Collaborator lookups: (project root, identifier) -> file or None
ModuleLookup: TypeAlias = Callable[[Path, str], Path | str | None]


@dataclass(frozen=True, slots=True)
class ResolutionContext:
    """Everything a strategy may consult besides the identifier."""

    root: Path
    cache: IdentifierCache
    runtime: FrameworkRuntimeTable


# Uniform strategy signature: (identifier, context) -> file or None
Resolver: TypeAlias = Callable[[str, ResolutionContext], Path | str | None]


@dataclass(frozen=True, slots=True)
class Strategy:
    """One tier of the chain.

    ``blocking`` strategies touch the file system and run in a worker
    thread so other requests keep moving.
    """

    name: str
    resolve: Resolver
    blocking: bool = False


@dataclass(frozen=True, slots=True)
class Resolution:
    """A successful resolution and the tier that produced it."""

    identifier: str
    file: Path
    tier: str


def runtime_fallback(identifier: str, context: ResolutionContext) -> Path | None:
    return context.runtime.fallback_for(identifier)


def cached(identifier: str, context: ResolutionContext) -> Path | None:
    return context.cache.lookup_file(identifier)


def _from_lookup(lookup: ModuleLookup, identifier: str, context: ResolutionContext) -> Path | str | None:
    return lookup(context.root, identifier)


def default_strategies(
    *,
    optimized: ModuleLookup = resolve_optimized_module,
    package_tree: ModuleLookup = resolve_package_tree_file,
) -> tuple[Strategy, ...]:
    """The standard four tiers, with replaceable disk lookups."""
    return (
        Strategy("non-local vue", runtime_fallback),
        Strategy("cached", cached),
        Strategy("optimized", partial(_from_lookup, optimized), blocking=True),
        Strategy("node_modules", partial(_from_lookup, package_tree), blocking=True),
    )


class ResolutionChain:
    """Runs strategies in order until one yields a file."""

    __slots__ = ("strategies",)

    def __init__(self, strategies: Iterable[Strategy] | None = None) -> None:
        self.strategies: tuple[Strategy, ...] = (
            tuple(strategies) if strategies is not None else default_strategies()
        )

    @property
    def tiers(self) -> tuple[str, ...]:
        return tuple(strategy.name for strategy in self.strategies)

    async def resolve(self, identifier: str, context: ResolutionContext) -> Resolution | None:
        """Resolve *identifier*, or return None when every strategy declines.

        A strategy that raises counts as declining; the fault is logged and
        the next tier is tried.
        """
        for strategy in self.strategies:
            try:
                if strategy.blocking:
                    found = await anyio.to_thread.run_sync(strategy.resolve, identifier, context)
                else:
                    found = strategy.resolve(identifier, context)
            except Exception:
                logger.warning(
                    "(%s) resolver failed for %r, trying next tier",
                    strategy.name,
                    identifier,
                    exc_info=True,
                )
                continue
            if found:
                return Resolution(identifier, Path(found), strategy.name)
        return None
