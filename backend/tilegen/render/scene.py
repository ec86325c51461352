"""TileScene — owns the current tiles and instance buffer, rebuilds on parameter changes.

A rebuild always releases the previous buffer before the new one is built,
including when partitioning or building fails. ``POST /api/tiles/instances``
builds its buffers through a scene and disposes it once the response is
serialised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from tilegen.engine.analysis import PartitionReport, analyze_partition
from tilegen.engine.partitioner import TilePartitioner
from tilegen.engine.random_source import RandomSource, SeededRandomSource
from tilegen.engine.tile import Canvas, Tile
from tilegen.models.parameters import ParameterSet
from tilegen.render.instances import InstanceBuffer, build_instances

logger = logging.getLogger(__name__)


class TileScene:
    def __init__(
        self,
        canvas: Canvas,
        parameters: ParameterSet,
        rng_factory: Callable[[], RandomSource] | None = None,
    ) -> None:
        self.canvas = canvas
        self.parameters = parameters
        self.rng_factory = rng_factory or SeededRandomSource
        self.tiles: list[Tile] = []
        self.buffer: InstanceBuffer | None = None
        self.generation = 0

    def regenerate(
        self,
        parameters: ParameterSet | None = None,
        tiles: list[Tile] | None = None,
    ) -> InstanceBuffer:
        """Rebuild from ``parameters`` (or the current ones).

        Passing ``tiles`` skips partitioning and builds from that list instead.
        """
        if parameters is not None:
            self.parameters = parameters

        previous, self.buffer = self.buffer, None
        try:
            if tiles is None:
                partitioner = TilePartitioner(self.canvas, self.parameters, rng=self.rng_factory())
                tiles = partitioner.generate()
        finally:
            if previous is not None:
                previous.release()
                logger.debug("Released instance buffer of generation %d", self.generation)

        self.tiles = list(tiles)
        self.buffer = build_instances(self.tiles, self.canvas)
        self.generation += 1
        logger.info("Scene generation %d: %d tiles", self.generation, len(self.tiles))
        return self.buffer

    def report(self) -> PartitionReport:
        return analyze_partition(self.tiles, self.canvas)

    def dispose(self) -> None:
        if self.buffer is not None:
            self.buffer.release()
            self.buffer = None
        self.tiles = []
