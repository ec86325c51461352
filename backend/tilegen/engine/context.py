"""SplitContext — everything a splitter may read besides the tile itself."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tilegen.engine.config import PartitionConfig

if TYPE_CHECKING:
    from tilegen.engine.random_source import RandomSource
    from tilegen.engine.tile import Canvas
    from tilegen.models.parameters import ParameterSet


@dataclass
class SplitContext:
    canvas: Canvas
    parameters: ParameterSet
    rng: RandomSource
    # Level the produced children are tagged with
    level: int = 1
    # Division count drawn for the tile being split
    divisions: int = 2
    config: PartitionConfig = field(default_factory=PartitionConfig)

    @property
    def min_tile_size(self) -> float:
        """Smallest allowed split dimension; also the concentric ring step."""
        return self.parameters.thinnest_tile_size * self.canvas.width
