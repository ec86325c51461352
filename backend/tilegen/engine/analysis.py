"""Partition report — geometric sanity figures for a generated tile list.

Concentric groups overlap on purpose, so overlap is reported, not treated as
an error. Containment is the hard check.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from shapely.geometry import box
from shapely.ops import unary_union

from tilegen.engine.config import PartitionConfig
from tilegen.engine.tile import Canvas, Tile

logger = logging.getLogger(__name__)

_DEFAULT_TOLERANCE = PartitionConfig.tolerance


@dataclass
class PartitionReport:
    tile_count: int = 0
    degenerate_count: int = 0
    max_level: int = 0
    # Fraction of the canvas covered by the union of the tiles
    coverage: float = 0.0
    # Summed tile area divided by covered area; 1.0 means no overlap
    overlap_ratio: float = 1.0
    out_of_bounds: list[int] = field(default_factory=list)
    levels: dict[int, int] = field(default_factory=dict)
    directions: dict[str, int] = field(default_factory=dict)

    @property
    def contained(self) -> bool:
        return not self.out_of_bounds

    def to_dict(self) -> dict:
        return {
            "tile_count": self.tile_count,
            "degenerate_count": self.degenerate_count,
            "max_level": self.max_level,
            "coverage": round(self.coverage, 6),
            "overlap_ratio": round(self.overlap_ratio, 6),
            "contained": self.contained,
            "out_of_bounds": self.out_of_bounds,
            "levels": self.levels,
            "directions": self.directions,
        }


def is_contained(tile: Tile, canvas: Canvas, tolerance: float = _DEFAULT_TOLERANCE) -> bool:
    xmin, ymin, xmax, ymax = tile.bounds
    return (
        xmin >= -tolerance
        and ymin >= -tolerance
        and xmax <= canvas.width + tolerance
        and ymax <= canvas.height + tolerance
        and tile.width >= 0.0
        and tile.height >= 0.0
    )


def analyze_partition(
    tiles: Sequence[Tile],
    canvas: Canvas,
    tolerance: float = _DEFAULT_TOLERANCE,
) -> PartitionReport:
    report = PartitionReport(tile_count=len(tiles))
    if not tiles:
        return report

    report.out_of_bounds = [i for i, t in enumerate(tiles) if not is_contained(t, canvas, tolerance)]
    if report.out_of_bounds:
        logger.warning("%d tiles extend past the canvas", len(report.out_of_bounds))

    report.degenerate_count = sum(1 for t in tiles if t.is_degenerate)
    report.max_level = max(t.level for t in tiles)
    report.levels = dict(sorted(Counter(t.level for t in tiles).items()))
    report.directions = dict(sorted(Counter(t.direction.name for t in tiles).items()))

    solid = [box(*t.bounds) for t in tiles if not t.is_degenerate]
    if solid:
        union = unary_union(solid)
        covered = float(union.area)
        report.coverage = covered / canvas.area if canvas.area > 0 else 0.0
        total = sum(float(p.area) for p in solid)
        report.overlap_ratio = total / covered if covered > 0 else 1.0

    return report
