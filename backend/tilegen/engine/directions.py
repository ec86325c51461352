"""Gradient direction tagging helpers shared by the splitters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilegen.engine.tile import Axis, GradientDirection

if TYPE_CHECKING:
    from tilegen.engine.random_source import RandomSource

HORIZONTAL_PAIR = (GradientDirection.RIGHT, GradientDirection.LEFT)
VERTICAL_PAIR = (GradientDirection.DOWN, GradientDirection.UP)


def pair_for_axis(axis: Axis) -> tuple[GradientDirection, GradientDirection]:
    return HORIZONTAL_PAIR if axis is Axis.WIDTH else VERTICAL_PAIR


def pair_for_shape(width: float, height: float) -> tuple[GradientDirection, GradientDirection]:
    """Wide tiles flow horizontally, everything else vertically."""
    return HORIZONTAL_PAIR if width > height else VERTICAL_PAIR


def alternate(pair: tuple[GradientDirection, GradientDirection], index: int) -> GradientDirection:
    return pair[index % 2]


def match_shape(
    direction: GradientDirection, width: float, height: float, rng: RandomSource
) -> GradientDirection:
    """Keep ``direction`` unless it runs across the tile's dominant axis.

    A wide tile holding a vertical direction gets a random horizontal one and
    vice versa. Square tiles keep whatever they have.
    """
    if width > height and direction.is_vertical:
        return rng.choice(HORIZONTAL_PAIR)
    if height > width and direction.is_horizontal:
        return rng.choice(VERTICAL_PAIR)
    return direction
