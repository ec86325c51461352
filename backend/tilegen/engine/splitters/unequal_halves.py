"""Unequal halves — one third and two thirds of the longer axis, in random order.

Children inherit the parent's direction. When a child's shape disagrees with
the inherited direction (a wide child with a vertical flow, or the reverse) a
matching direction is drawn, and the next child inherits that one.
"""

from __future__ import annotations

from tilegen.engine.context import SplitContext
from tilegen.engine.directions import match_shape
from tilegen.engine.registry import DivisionType, splitter
from tilegen.engine.tile import Axis, Tile

_SECTIONS = 3


@splitter(DivisionType.UNEQUAL_HALVES, description="One third / two thirds along the longer axis")
def unequal_halves_split(tile: Tile, ctx: SplitContext) -> list[Tile] | None:
    axis = tile.longer_axis
    section = tile.size(axis) / _SECTIONS
    sizes = ctx.rng.shuffle([section, section * 2])

    direction = tile.direction
    children: list[Tile] = []
    offset = 0.0
    for size in sizes:
        width = size if axis is Axis.WIDTH else tile.width
        height = size if axis is Axis.HEIGHT else tile.height
        direction = match_shape(direction, width, height, ctx.rng)
        children.append(
            Tile(
                x=tile.x + (offset if axis is Axis.WIDTH else 0.0),
                y=tile.y + (offset if axis is Axis.HEIGHT else 0.0),
                width=width,
                height=height,
                level=ctx.level,
                direction=direction,
            )
        )
        offset += size
    return children
