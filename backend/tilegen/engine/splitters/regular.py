"""Regular split — N equal strips along one axis.

The axis is a coin flip. If the strips would be thinner than the minimum tile
size, the other axis is tried; if that fails too the tile cannot be split.
"""

from __future__ import annotations

from tilegen.engine.context import SplitContext
from tilegen.engine.directions import HORIZONTAL_PAIR, VERTICAL_PAIR, alternate
from tilegen.engine.registry import DivisionType, splitter
from tilegen.engine.tile import Axis, Tile


def choose_axis(tile: Tile, ctx: SplitContext) -> tuple[Axis, float] | None:
    """Return the split axis and strip size, or None if neither axis fits."""
    axis = Axis.WIDTH if ctx.rng.uniform_bool(ctx.config.axis_probability) else Axis.HEIGHT
    strip = tile.size(axis) / ctx.divisions
    if strip < ctx.min_tile_size:
        axis = axis.other
        strip = tile.size(axis) / ctx.divisions
    if strip < ctx.min_tile_size:
        return None
    return axis, strip


@splitter(DivisionType.REGULAR, description="Equal strips along a random axis")
def regular_split(tile: Tile, ctx: SplitContext) -> list[Tile] | None:
    chosen = choose_axis(tile, ctx)
    if chosen is None:
        return None
    axis, strip = chosen

    width = strip if axis is Axis.WIDTH else tile.width
    height = strip if axis is Axis.HEIGHT else tile.height

    # Drawn once for the whole group, used by tall strips stacked along height
    shared = ctx.rng.choice(VERTICAL_PAIR)

    children: list[Tile] = []
    for k in range(ctx.divisions):
        if width > height:
            direction = alternate(HORIZONTAL_PAIR, k)
        elif axis is Axis.HEIGHT:
            direction = shared
        else:
            direction = alternate(VERTICAL_PAIR, k)

        children.append(
            Tile(
                x=tile.x + (strip * k if axis is Axis.WIDTH else 0.0),
                y=tile.y + (strip * k if axis is Axis.HEIGHT else 0.0),
                width=width,
                height=height,
                level=ctx.level,
                direction=direction,
            )
        )
    return children
