"""Tests for the level-by-level partitioner."""

from dataclasses import replace

import pytest

from tilegen.engine.analysis import analyze_partition, is_contained
from tilegen.engine.partitioner import TilePartitioner, generate_tiles
from tilegen.engine.random_source import RecordingRandomSource, ReplayRandomSource, SeededRandomSource
from tilegen.engine.registry import DivisionType, SplitterSpec, get_registry
from tilegen.engine.tile import Canvas, GradientDirection, Tile
from tilegen.models.parameters import ParameterSet
from tests.conftest import ScriptedRandomSource

CANVASES = [Canvas(1.0, 1.0), Canvas.from_aspect(1.6)]


def _rect(tile):
    return (tile.x, tile.y, tile.width, tile.height)


def test_single_regular_split():
    params = ParameterSet.only(
        DivisionType.REGULAR,
        iteration_range={"min": 1, "max": 1},
        division_range={"min": 2, "max": 2},
    )
    rng = ScriptedRandomSource(bools=[True])
    tiles = TilePartitioner(Canvas(), params, rng=rng).generate()

    assert [_rect(t) for t in tiles] == [(0.0, 0.0, 0.5, 1.0), (0.5, 0.0, 0.5, 1.0)]
    assert [t.level for t in tiles] == [1, 1]
    assert [t.direction for t in tiles] == [GradientDirection.DOWN, GradientDirection.UP]
    # divisions, strategy, axis coin, shared direction
    assert rng.kinds() == ["int", "pick", "bool", "pick"]


def test_zero_iterations_returns_root():
    params = ParameterSet(iteration_range={"min": 0, "max": 0})
    tiles = generate_tiles(params, canvas=Canvas.from_aspect(2.0), seed=1)
    assert tiles == [Canvas.from_aspect(2.0).root_tile()]


def test_concentric_collapsed_ring():
    params = ParameterSet.only(
        DivisionType.CONCENTRIC,
        iteration_range={"min": 0, "max": 1},
        thinnest_tile_size=0.5,
    )
    tiles = TilePartitioner(Canvas(), params, rng=ScriptedRandomSource()).generate()
    assert [_rect(t) for t in tiles] == [(0.0, 0.0, 1.0, 1.0), (0.5, 0.5, 0.0, 0.0)]
    assert [t.level for t in tiles] == [0, 0]


def test_concentric_group_never_resplit():
    params = ParameterSet.only(
        DivisionType.CONCENTRIC,
        iteration_range={"min": 0, "max": 3},
        concentric_range={"min": 1, "max": 2},
        thinnest_tile_size=0.1,
    )
    partitioner = TilePartitioner(Canvas(), params, rng=SeededRandomSource(0))
    tiles = partitioner.generate()
    assert len(tiles) == 3
    assert all(t.level == 0 for t in tiles)
    assert partitioner.stats.applied[DivisionType.CONCENTRIC] == 1


def test_rings_not_split_below_minimum_size():
    canvas = Canvas(2.0, 1.0)
    params = ParameterSet.only(
        DivisionType.CONCENTRIC,
        weight_regular=1.0,
        iteration_range={"min": 0, "max": 2},
        division_range={"min": 2, "max": 2},
        thinnest_tile_size=0.2,
    )
    rng = ScriptedRandomSource(picks=[DivisionType.CONCENTRIC])
    partitioner = TilePartitioner(canvas, params, rng=rng)
    tiles = partitioner.generate()

    # Outer tile plus one 1.2 x 0.2 ring; level 2 finds no frontier
    assert [_rect(t) for t in tiles] == [(0.0, 0.0, 2.0, 1.0), (0.4, 0.4, pytest.approx(1.2), pytest.approx(0.2))]
    assert partitioner.stats.applied[DivisionType.REGULAR] == 0


def _with_sliver(tile, ctx):
    return [
        Tile(tile.x, tile.y, 0.0, tile.height, level=ctx.level, direction=tile.direction),
        replace(tile, level=ctx.level),
    ]


def test_degenerate_tiles_pass_through():
    registry = get_registry().copy()
    registry.replace(SplitterSpec(division=DivisionType.REGULAR, fn=_with_sliver))
    params = ParameterSet.only(DivisionType.REGULAR, iteration_range={"min": 1, "max": 2})
    partitioner = TilePartitioner(Canvas(), params, rng=ScriptedRandomSource(), registry=registry)
    tiles = partitioner.generate()

    assert [t.level for t in tiles] == [1, 2, 2]
    assert tiles[0].is_degenerate and tiles[1].is_degenerate
    assert partitioner.stats.degenerate == 1
    assert partitioner.stats.applied[DivisionType.REGULAR] == 2


def test_non_structural_excluded_through_min_depth():
    params = ParameterSet.only(DivisionType.NONE, iteration_range={"min": 3, "max": 3})
    partitioner = TilePartitioner(Canvas(), params, rng=SeededRandomSource(21))
    tiles = partitioner.generate()
    assert partitioner.stats.held == 0
    assert {t.level for t in tiles} <= {2, 3}


def test_held_tiles_keep_their_level():
    params = ParameterSet.only(DivisionType.NONE, iteration_range={"min": 2, "max": 3})
    partitioner = TilePartitioner(Canvas(), params, rng=SeededRandomSource(21))
    tiles = partitioner.generate()
    assert {t.level for t in tiles} == {2}
    assert partitioner.stats.held == len(tiles)


def test_concentric_infeasible_repicks_then_freezes():
    params = ParameterSet.only(
        DivisionType.CONCENTRIC,
        weight_regular=1.0,
        iteration_range={"min": 0, "max": 1},
        division_range={"min": 2, "max": 2},
        thinnest_tile_size=0.6,
    )
    rng = ScriptedRandomSource(picks=[DivisionType.CONCENTRIC])
    partitioner = TilePartitioner(Canvas(), params, rng=rng)
    tiles = partitioner.generate()

    assert tiles == [Canvas().root_tile()]
    assert partitioner.stats.fallbacks["concentric_repick"] == 1
    assert partitioner.stats.frozen == 1
    repick = [items for kind, items in rng.calls if kind == "pick"][1]
    assert [d for _, d in repick] == [DivisionType.REGULAR]


def test_concentric_infeasible_repick_can_hold():
    params = ParameterSet.only(
        DivisionType.CONCENTRIC,
        weight_none=1.0,
        iteration_range={"min": 0, "max": 1},
        thinnest_tile_size=0.6,
    )
    rng = ScriptedRandomSource(picks=[DivisionType.CONCENTRIC, DivisionType.NONE])
    partitioner = TilePartitioner(Canvas(), params, rng=rng)
    assert partitioner.generate() == [Canvas().root_tile()]
    assert partitioner.stats.held == 1


def test_failed_unequal_split_falls_back_to_regular():
    registry = get_registry().copy()
    registry.replace(SplitterSpec(division=DivisionType.UNEQUAL_THIRDS, fn=lambda tile, ctx: None))
    params = ParameterSet.only(
        DivisionType.UNEQUAL_THIRDS,
        iteration_range={"min": 1, "max": 1},
        division_range={"min": 3, "max": 3},
    )
    partitioner = TilePartitioner(Canvas(), params, rng=ScriptedRandomSource(), registry=registry)
    tiles = partitioner.generate()

    assert [t.width for t in tiles] == pytest.approx([1 / 3] * 3)
    assert partitioner.stats.fallbacks["unequal_to_regular"] == 1
    assert partitioner.stats.applied[DivisionType.REGULAR] == 1


def test_unsplittable_tiles_freeze_at_previous_level():
    params = ParameterSet.only(
        DivisionType.REGULAR,
        iteration_range={"min": 1, "max": 3},
        division_range={"min": 2, "max": 2},
        thinnest_tile_size=0.3,
    )
    partitioner = TilePartitioner(Canvas(), params, rng=SeededRandomSource(3))
    tiles = partitioner.generate()

    assert len(tiles) == 4
    assert all(t.level == 2 for t in tiles)
    assert all(t.width == pytest.approx(0.5) and t.height == pytest.approx(0.5) for t in tiles)
    assert partitioner.stats.frozen == 4


def test_same_seed_same_tiles():
    params = ParameterSet()
    canvas = Canvas.from_aspect(1.6)
    assert generate_tiles(params, canvas, seed=42) == generate_tiles(params, canvas, seed=42)


def test_replayed_draws_reproduce_partition():
    params = ParameterSet()
    canvas = Canvas.from_aspect(1.6)
    recorder = RecordingRandomSource(SeededRandomSource(7))
    first = TilePartitioner(canvas, params, rng=recorder).generate()

    replay = ReplayRandomSource(recorder.tape)
    second = TilePartitioner(canvas, params, rng=replay).generate()
    assert first == second
    assert replay.exhausted


def test_run_levels_matches_generate():
    params = ParameterSet()
    results = list(TilePartitioner(Canvas(), params, rng=SeededRandomSource(5)).run_levels())
    assert [r.level for r in results] == [1, 2, 3, 4]
    assert all(max(t.level for t in r.tiles) <= r.level for r in results)
    final = TilePartitioner(Canvas(), params, rng=SeededRandomSource(5)).generate()
    assert results[-1].tiles == final


@pytest.mark.parametrize("canvas", CANVASES)
def test_tiles_stay_inside_canvas(canvas):
    params = ParameterSet()
    for seed in range(15):
        tiles = generate_tiles(params, canvas, seed=seed)
        assert tiles
        assert all(is_contained(t, canvas) for t in tiles)
        assert all(0 <= t.level <= params.iteration_range.max for t in tiles)


@pytest.mark.parametrize("canvas", CANVASES)
def test_regular_tiles_respect_minimum_size(canvas):
    params = ParameterSet.only(DivisionType.REGULAR)
    floor = params.thinnest_tile_size * canvas.width
    for seed in range(15):
        for tile in generate_tiles(params, canvas, seed=seed):
            assert min(tile.width, tile.height) >= floor - 1e-12


def _recording_regular(produced):
    regular = get_registry().get(DivisionType.REGULAR).fn

    def split(tile, ctx):
        children = regular(tile, ctx)
        if children is not None:
            produced.extend(children)
        return children

    registry = get_registry().copy()
    registry.replace(SplitterSpec(division=DivisionType.REGULAR, fn=split))
    return registry


@pytest.mark.parametrize("canvas", CANVASES)
def test_regular_children_respect_minimum_size_with_mixed_strategies(canvas):
    params = ParameterSet(weight_concentric=0.3, concentric_range={"min": 1, "max": 3})
    floor = params.thinnest_tile_size * canvas.width
    produced = []
    registry = _recording_regular(produced)
    for seed in range(25):
        TilePartitioner(canvas, params, rng=SeededRandomSource(seed), registry=registry).generate()
    assert produced
    assert all(min(t.width, t.height) >= floor - 1e-12 for t in produced)


@pytest.mark.parametrize("canvas", CANVASES)
def test_area_conserved_without_concentric(canvas):
    params = ParameterSet(weight_concentric=0.0, iteration_range={"min": 1, "max": 3})
    for seed in range(8):
        tiles = generate_tiles(params, canvas, seed=seed)
        assert sum(t.area for t in tiles) == pytest.approx(canvas.area)
        report = analyze_partition(tiles, canvas)
        assert report.coverage == pytest.approx(1.0, abs=1e-6)
        assert report.overlap_ratio == pytest.approx(1.0, abs=1e-6)


def test_concentric_groups_overlap():
    params = ParameterSet.only(
        DivisionType.CONCENTRIC,
        iteration_range={"min": 0, "max": 1},
        concentric_range={"min": 1, "max": 3},
        thinnest_tile_size=0.05,
    )
    tiles = generate_tiles(params, Canvas(), seed=0)
    assert len(tiles) == 4
    assert analyze_partition(tiles, Canvas()).overlap_ratio > 1.0
