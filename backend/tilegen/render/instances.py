"""Instance buffers — per-tile transforms and direction attributes for instanced drawing.

Each tile becomes one instance of a unit quad: scaled to (width, height) and
moved to the tile centre, with the canvas centred on the origin.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from tilegen.engine.tile import Canvas, Tile

logger = logging.getLogger(__name__)


@dataclass
class InstanceBuffer:
    """Row-major 4x4 transforms (translation in the last column) and one direction float per instance."""

    matrices: NDArray[np.float32] = field(default_factory=lambda: np.zeros((0, 4, 4), np.float32))
    directions: NDArray[np.float32] = field(default_factory=lambda: np.zeros(0, np.float32))
    released: bool = False

    @property
    def count(self) -> int:
        self._check()
        return int(self.matrices.shape[0])

    @property
    def positions(self) -> NDArray[np.float32]:
        self._check()
        return self.matrices[:, :3, 3]

    @property
    def scales(self) -> NDArray[np.float32]:
        self._check()
        return np.stack([self.matrices[:, 0, 0], self.matrices[:, 1, 1]], axis=1)

    def release(self) -> None:
        """Drop the arrays. Safe to call more than once."""
        if self.released:
            return
        self.matrices = np.zeros((0, 4, 4), np.float32)
        self.directions = np.zeros(0, np.float32)
        self.released = True

    def to_dict(self) -> dict:
        self._check()
        return {
            "count": self.count,
            "matrices": self.matrices.tolist(),
            "directions": self.directions.tolist(),
        }

    def _check(self) -> None:
        if self.released:
            raise RuntimeError("InstanceBuffer used after release()")


def instance_positions(tiles: Sequence[Tile], canvas: Canvas) -> NDArray[np.float64]:
    """Tile centres relative to the canvas centre, shape (N, 2)."""
    if not tiles:
        return np.zeros((0, 2))
    xy = np.array([[t.x, t.y] for t in tiles], dtype=np.float64)
    wh = np.array([[t.width, t.height] for t in tiles], dtype=np.float64)
    return xy - np.array([canvas.width, canvas.height]) / 2 + wh / 2


def build_instances(tiles: Sequence[Tile], canvas: Canvas) -> InstanceBuffer:
    n = len(tiles)
    matrices = np.zeros((n, 4, 4), dtype=np.float32)
    if n:
        positions = instance_positions(tiles, canvas)
        matrices[:, 0, 0] = [t.width for t in tiles]
        matrices[:, 1, 1] = [t.height for t in tiles]
        matrices[:, 2, 2] = 1.0
        matrices[:, 3, 3] = 1.0
        matrices[:, 0, 3] = positions[:, 0]
        matrices[:, 1, 3] = positions[:, 1]

    directions = np.array([t.direction.value for t in tiles], dtype=np.float32)
    logger.debug("Built %d tile instances", n)
    return InstanceBuffer(matrices=matrices, directions=directions)
