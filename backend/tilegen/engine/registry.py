"""Splitter registry — every division strategy is a standalone function registered via decorator.

Usage:
    @splitter(DivisionType.REGULAR, description="Even strips along one axis")
    def regular_split(tile: Tile, ctx: SplitContext) -> list[Tile] | None:
        ...

A splitter returns the tiles that replace its input, or ``None`` when the
strategy is infeasible for that tile. It never raises for infeasibility.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from tilegen.engine.context import SplitContext
    from tilegen.engine.tile import Tile

logger = logging.getLogger(__name__)

SplitFn = Callable[["Tile", "SplitContext"], Optional[list["Tile"]]]


class DivisionType(enum.IntEnum):
    """Declaration order is the candidate order used by the selector."""

    NONE = 0
    CONCENTRIC = 1
    UNEQUAL_THIRDS = 2
    UNEQUAL_HALVES = 3
    REGULAR = 4


@dataclass
class SplitterSpec:
    division: DivisionType
    fn: SplitFn
    description: str = ""


class SplitterRegistry:
    """One splitter per division type."""

    def __init__(self) -> None:
        self._splitters: dict[DivisionType, SplitterSpec] = {}

    def register(self, spec: SplitterSpec) -> None:
        if spec.division in self._splitters:
            raise ValueError(f"Duplicate splitter for {spec.division.name}")
        self._splitters[spec.division] = spec
        logger.debug("Registered splitter %s", spec.division.name)

    def replace(self, spec: SplitterSpec) -> None:
        self._splitters[spec.division] = spec

    def get(self, division: DivisionType) -> SplitterSpec:
        return self._splitters[division]

    def __contains__(self, division: DivisionType) -> bool:
        return division in self._splitters

    def all(self) -> list[SplitterSpec]:
        return sorted(self._splitters.values(), key=lambda s: s.division)

    def copy(self) -> SplitterRegistry:
        other = SplitterRegistry()
        other._splitters = dict(self._splitters)
        return other

    @property
    def count(self) -> int:
        return len(self._splitters)


# Module-level singleton
_registry = SplitterRegistry()


def get_registry() -> SplitterRegistry:
    return _registry


def splitter(division: DivisionType, *, description: str = ""):
    """Decorator to register a splitter function."""

    def decorator(fn: SplitFn) -> SplitFn:
        _registry.register(SplitterSpec(division=division, fn=fn, description=description))
        return fn

    return decorator
