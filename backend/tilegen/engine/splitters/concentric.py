"""Concentric split — the tile plus nested inset copies of itself.

Ring ``i`` is inset on all four sides by ``step * (i + 1)`` where ``step`` is
the minimum tile size. The ring count is how many steps fit into half of the
shorter side, capped at ``concentricRange.max``. Rings may collapse to zero
width or height; those are kept and rendered as-is.

The whole group keeps the parent tile's level, so it drops out of every later
frontier. Re-splitting a ring would hand its thin inset sides to Regular
children below the minimum tile size.

Directions follow the tile's aspect (wide: RIGHT/LEFT, tall: DOWN/UP) and one
of two policies drawn per call: alternate by ring parity, or one fixed
direction for the whole group.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable

from tilegen.engine.context import SplitContext
from tilegen.engine.directions import alternate, pair_for_shape
from tilegen.engine.registry import DivisionType, splitter
from tilegen.engine.tile import GradientDirection, Tile

_ALTERNATING = "alternating"
_FIXED = "fixed"


def ring_count(tile: Tile, ctx: SplitContext) -> int:
    step = ctx.min_tile_size
    fitting = math.floor(min(tile.width, tile.height) / (2 * step))
    return max(0, min(fitting, ctx.parameters.concentric_range.max))


def _clamp(value: float, upper: float) -> float:
    return min(max(value, 0.0), upper)


@splitter(DivisionType.CONCENTRIC, description="Nested inset rings")
def concentric_split(tile: Tile, ctx: SplitContext) -> list[Tile] | None:
    rings = ring_count(tile, ctx)
    if rings == 0:
        return None

    pair = pair_for_shape(tile.width, tile.height)
    policy = ctx.rng.choice([_ALTERNATING, _FIXED])
    if policy == _ALTERNATING:
        direction_of: Callable[[int], GradientDirection] = lambda i: alternate(pair, i)
    else:
        fixed = ctx.rng.choice(pair)
        direction_of = lambda i: fixed

    step = ctx.min_tile_size
    # Outer tile takes the slot before ring 0, so alternation continues inward
    tiles = [replace(tile, direction=direction_of(1))]
    for i in range(rings):
        offset = step * (i + 1)
        tiles.append(
            Tile(
                x=tile.x + offset,
                y=tile.y + offset,
                width=_clamp(tile.width - offset * 2, ctx.canvas.width),
                height=_clamp(tile.height - offset * 2, ctx.canvas.height),
                level=tile.level,
                direction=direction_of(i),
            )
        )
    return tiles
