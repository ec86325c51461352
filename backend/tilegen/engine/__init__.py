"""Tile partitioning engine."""

from tilegen.engine.registry import DivisionType, get_registry, splitter
from tilegen.engine.tile import Axis, Canvas, GradientDirection, Tile
from tilegen.engine.partitioner import TilePartitioner, generate_tiles

__all__ = [
    "splitter",
    "DivisionType",
    "get_registry",
    "Axis",
    "Canvas",
    "GradientDirection",
    "Tile",
    "TilePartitioner",
    "generate_tiles",
]
