"""Tests for instance buffer building."""

import numpy as np
import pytest

from tilegen.engine.tile import Canvas, GradientDirection, Tile
from tilegen.render.instances import build_instances, instance_positions

HALVES = [
    Tile(0.0, 0.0, 0.5, 1.0, level=1, direction=GradientDirection.DOWN),
    Tile(0.5, 0.0, 0.5, 1.0, level=1, direction=GradientDirection.UP),
]


def test_positions_are_centred_on_canvas():
    positions = instance_positions(HALVES, Canvas())
    np.testing.assert_allclose(positions, [[-0.25, 0.0], [0.25, 0.0]])


def test_positions_on_wide_canvas():
    canvas = Canvas.from_aspect(2.0)
    positions = instance_positions([canvas.root_tile()], canvas)
    np.testing.assert_allclose(positions, [[0.0, 0.0]])


def test_build_instances():
    buffer = build_instances(HALVES, Canvas())
    assert buffer.count == 2
    assert buffer.matrices.dtype == np.float32
    np.testing.assert_allclose(buffer.scales, [[0.5, 1.0], [0.5, 1.0]])
    np.testing.assert_allclose(buffer.positions[:, :2], [[-0.25, 0.0], [0.25, 0.0]])
    np.testing.assert_allclose(buffer.directions, [0.25, 0.0])
    assert buffer.matrices[0, 3, 3] == 1.0


def test_degenerate_tile_gets_zero_scale():
    buffer = build_instances([Tile(0.5, 0.5, 0.0, 0.0, direction=GradientDirection.LEFT)], Canvas())
    np.testing.assert_allclose(buffer.scales, [[0.0, 0.0]])
    np.testing.assert_allclose(buffer.directions, [0.75])


def test_empty_tile_list():
    buffer = build_instances([], Canvas())
    assert buffer.count == 0
    assert buffer.to_dict() == {"count": 0, "matrices": [], "directions": []}


def test_release_is_idempotent_and_final():
    buffer = build_instances(HALVES, Canvas())
    buffer.release()
    buffer.release()
    assert buffer.released
    with pytest.raises(RuntimeError):
        buffer.count
