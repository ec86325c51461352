"""SVG preview of a partition: one outlined rect per tile.

Tiles live in a y-up space; SVG is y-down, so rows are flipped here. The
gradient direction and level travel along as data attributes and pick a
stroke class, which is enough to eyeball a layout without the shader.
"""

from __future__ import annotations

from collections.abc import Sequence

from tilegen.engine.tile import Canvas, Tile
from tilegen.svg.serializer import serialize_svg

_STYLES = {
    "rect": "fill: none; stroke-width: 0.002",
    ".dir-UP": "stroke: #4ECDC4",
    ".dir-DOWN": "stroke: #45B7D1",
    ".dir-LEFT": "stroke: #FF6B6B",
    ".dir-RIGHT": "stroke: #F7DC6F",
    ".degenerate": "stroke: #888888",
}


def tile_to_element(tile: Tile, canvas: Canvas) -> dict:
    css = "degenerate" if tile.is_degenerate else f"dir-{tile.direction.name}"
    return {
        "tag": "rect",
        "x": float(tile.x),
        "y": float(canvas.height - tile.y - tile.height),
        "width": float(tile.width),
        "height": float(tile.height),
        "class": css,
        "data-level": tile.level,
        "data-direction": tile.direction.name,
    }


def tiles_to_svg(tiles: Sequence[Tile], canvas: Canvas, title: str = "") -> str:
    elements = [tile_to_element(t, canvas) for t in tiles]
    return serialize_svg(
        elements,
        canvas_w=canvas.width,
        canvas_h=canvas.height,
        title=title,
        description=f"{len(tiles)} tiles",
        styles=_STYLES,
    )
