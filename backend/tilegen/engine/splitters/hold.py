"""None strategy — the tile is kept as it is, level included.

Returning the tile with its old level is what freezes it: the partitioner's
frontier only takes tiles whose level is exactly one below the current one.
"""

from __future__ import annotations

from tilegen.engine.context import SplitContext
from tilegen.engine.registry import DivisionType, splitter
from tilegen.engine.tile import Tile


@splitter(DivisionType.NONE, description="Keep the tile and stop subdividing it")
def hold(tile: Tile, ctx: SplitContext) -> list[Tile] | None:
    return [tile]
