"""Tile value records and the gradient direction tag.

Tiles are immutable: splitters never touch their input, they return new tiles.
Coordinates are offsets from the canvas origin (bottom-left, y up, the way the
instance transforms consume them).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace


class GradientDirection(enum.Enum):
    """Axis and sign of the gradient painted inside a tile.

    The value is the float the shader reads from the per-instance attribute.
    """

    UP = 0.0
    DOWN = 0.25
    RIGHT = 0.5
    LEFT = 0.75

    @property
    def is_horizontal(self) -> bool:
        return self in (GradientDirection.RIGHT, GradientDirection.LEFT)

    @property
    def is_vertical(self) -> bool:
        return self in (GradientDirection.UP, GradientDirection.DOWN)


class Axis(enum.Enum):
    WIDTH = "width"
    HEIGHT = "height"

    @property
    def other(self) -> Axis:
        return Axis.HEIGHT if self is Axis.WIDTH else Axis.WIDTH


@dataclass(frozen=True)
class Canvas:
    """Scene bounds. The original scene is normalised to height 1."""

    width: float = 1.0
    height: float = 1.0

    @classmethod
    def from_aspect(cls, aspect_ratio: float) -> Canvas:
        return cls(width=float(aspect_ratio), height=1.0)

    @property
    def area(self) -> float:
        return self.width * self.height

    def root_tile(self) -> Tile:
        return Tile(
            x=0.0,
            y=0.0,
            width=self.width,
            height=self.height,
            level=0,
            direction=GradientDirection.UP,
        )


@dataclass(frozen=True)
class Tile:
    x: float
    y: float
    width: float
    height: float
    level: int = 0
    direction: GradientDirection = GradientDirection.UP

    def size(self, axis: Axis) -> float:
        return self.width if axis is Axis.WIDTH else self.height

    @property
    def longer_axis(self) -> Axis:
        """WIDTH only when strictly wider; square tiles split along height."""
        return Axis.WIDTH if self.width > self.height else Axis.HEIGHT

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax)"""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def with_level(self, level: int) -> Tile:
        return replace(self, level=level)

    def to_dict(self) -> dict[str, float | int | str]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "level": self.level,
            "direction": self.direction.name,
        }
