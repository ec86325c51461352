"""Tile partitioner — level-by-level recursive subdivision of the canvas.

Level ``i`` (1..iterationRange.max) only touches the frontier: tiles whose
level is ``i - 1``. Everything else is carried over untouched. A frontier tile
is replaced by the children of the strategy that succeeds for it, tagged with
level ``i``. Tiles that keep their old level drop out of every later frontier:
a held tile (None strategy), a tile no Regular split fits, and the whole
output of a Concentric split.

Fallback chain per tile:
    Concentric infeasible  -> re-pick without Concentric
    Unequal split failed   -> Regular
    Regular infeasible     -> tile frozen unchanged
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Generator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import tilegen.engine.splitters  # noqa: F401  registers the splitters
from tilegen.engine.config import PartitionConfig
from tilegen.engine.context import SplitContext
from tilegen.engine.random_source import RandomSource, SeededRandomSource
from tilegen.engine.registry import DivisionType, SplitterRegistry, get_registry
from tilegen.engine.selector import DivisionStrategySelector
from tilegen.engine.tile import Canvas, Tile

if TYPE_CHECKING:
    from tilegen.models.parameters import ParameterSet

logger = logging.getLogger(__name__)

_UNEQUAL = {DivisionType.UNEQUAL_THIRDS, DivisionType.UNEQUAL_HALVES}


@dataclass
class LevelResult:
    """Tile list after one level of subdivision."""

    level: int
    tiles: list[Tile]
    frontier: int = 0
    produced: int = 0


@dataclass
class PartitionStats:
    applied: Counter = field(default_factory=Counter)
    fallbacks: Counter = field(default_factory=Counter)
    frozen: int = 0
    held: int = 0
    degenerate: int = 0

    def to_dict(self) -> dict:
        return {
            "applied": {d.name: n for d, n in sorted(self.applied.items())},
            "fallbacks": dict(self.fallbacks),
            "frozen": self.frozen,
            "held": self.held,
            "degenerate": self.degenerate,
        }


class TilePartitioner:
    """Drives the subdivision. One instance can generate repeatedly; each run
    keeps consuming the same random source."""

    def __init__(
        self,
        canvas: Canvas,
        parameters: ParameterSet,
        rng: RandomSource | None = None,
        registry: SplitterRegistry | None = None,
        config: PartitionConfig | None = None,
    ) -> None:
        self.canvas = canvas
        self.parameters = parameters
        self.rng = rng or SeededRandomSource()
        self.registry = registry or get_registry()
        self.config = config or PartitionConfig()
        self.selector = DivisionStrategySelector(
            parameters.weights(),
            parameters.iteration_range.min,
            self.config,
        )
        self.stats = PartitionStats()

    def generate(self) -> list[Tile]:
        """Run every level and return the final tile list."""
        start = time.perf_counter()
        tiles = [self.canvas.root_tile()]
        for result in self.run_levels():
            tiles = result.tiles

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Partition: %d tiles after %d levels in %.1fms",
            len(tiles),
            self.parameters.iteration_range.max,
            elapsed,
        )
        return tiles

    def run_levels(self) -> Generator[LevelResult, None, None]:
        """Yield the tile list after each level, starting from the root tile."""
        self.stats = PartitionStats()
        tiles = [self.canvas.root_tile()]

        for level in range(1, self.parameters.iteration_range.max + 1):
            next_tiles: list[Tile] = []
            frontier = 0
            produced = 0
            for tile in tiles:
                if tile.level != level - 1:
                    next_tiles.append(tile)
                    continue
                if tile.is_degenerate:
                    # Zero-area tiles are rendered, never split
                    self.stats.degenerate += 1
                    next_tiles.append(tile)
                    continue

                frontier += 1
                children = self.expand(tile, level)
                produced += len(children)
                next_tiles.extend(children)

            tiles = next_tiles
            logger.debug("  level %d: %d frontier tiles -> %d tiles", level, frontier, produced)
            yield LevelResult(level=level, tiles=tiles, frontier=frontier, produced=produced)

    def expand(self, tile: Tile, level: int) -> list[Tile]:
        """Replace one frontier tile, walking the fallback chain as needed."""
        divisions = self.rng.uniform_int(
            self.parameters.division_range.min,
            self.parameters.division_range.max + 1,
        )
        ctx = SplitContext(
            canvas=self.canvas,
            parameters=self.parameters,
            rng=self.rng,
            level=level,
            divisions=divisions,
            config=self.config,
        )
        division = self.selector.pick(self.rng, level, divisions)

        if division is DivisionType.CONCENTRIC:
            result = self._attempt(DivisionType.CONCENTRIC, tile, ctx)
            if result is not None:
                return result
            self.stats.fallbacks["concentric_repick"] += 1
            logger.debug("  concentric infeasible for %s, re-picking", tile.bounds)
            division = self.selector.pick(
                self.rng, level, divisions, excluded={DivisionType.CONCENTRIC}
            )

        if division is DivisionType.NONE:
            self.stats.held += 1
            return self._attempt(DivisionType.NONE, tile, ctx) or [tile]

        if division in _UNEQUAL:
            result = self._attempt(division, tile, ctx)
            if result is not None:
                return result
            self.stats.fallbacks["unequal_to_regular"] += 1
            logger.debug("  %s failed for %s, falling back to regular", division.name, tile.bounds)

        result = self._attempt(DivisionType.REGULAR, tile, ctx)
        if result is None:
            self.stats.frozen += 1
            logger.debug("  regular infeasible for %s, tile frozen", tile.bounds)
            return [tile]
        return result

    def _attempt(self, division: DivisionType, tile: Tile, ctx: SplitContext) -> list[Tile] | None:
        result = self.registry.get(division).fn(tile, ctx)
        if result is not None:
            self.stats.applied[division] += 1
        return result


def generate_tiles(
    parameters: ParameterSet,
    canvas: Canvas | None = None,
    rng: RandomSource | None = None,
    seed: int | None = None,
) -> list[Tile]:
    """Factory-style shortcut: build a partitioner and run it once."""
    source = rng or SeededRandomSource(seed)
    return TilePartitioner(canvas or Canvas(), parameters, rng=source).generate()
