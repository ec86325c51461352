"""Unequal thirds — quarter / half / quarter along the longer axis.

No minimum size check is applied here, unlike the regular and concentric
splits. The selector only offers this strategy at shallow depths, where tiles
are still large.
"""

from __future__ import annotations

from tilegen.engine.context import SplitContext
from tilegen.engine.directions import pair_for_axis
from tilegen.engine.registry import DivisionType, splitter
from tilegen.engine.tile import Axis, Tile

_SECTIONS = 4
_GROUPS = (1, 2, 1)


@splitter(DivisionType.UNEQUAL_THIRDS, description="Quarter / half / quarter along the longer axis")
def unequal_thirds_split(tile: Tile, ctx: SplitContext) -> list[Tile] | None:
    axis = tile.longer_axis
    section = tile.size(axis) / _SECTIONS
    direction = ctx.rng.choice(pair_for_axis(axis))

    children: list[Tile] = []
    offset = 0.0
    for group in _GROUPS:
        size = section * group
        children.append(
            Tile(
                x=tile.x + (offset if axis is Axis.WIDTH else 0.0),
                y=tile.y + (offset if axis is Axis.HEIGHT else 0.0),
                width=size if axis is Axis.WIDTH else tile.width,
                height=size if axis is Axis.HEIGHT else tile.height,
                level=ctx.level,
                direction=direction,
            )
        )
        offset += size
    return children
