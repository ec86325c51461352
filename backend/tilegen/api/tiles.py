"""POST /api/tiles — generate a partition and return it as tiles, SVG or instance buffers."""

from __future__ import annotations

import time

import numpy as np
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from tilegen.config import settings
from tilegen.dependencies import get_parameter_store
from tilegen.engine.analysis import analyze_partition
from tilegen.engine.partitioner import TilePartitioner
from tilegen.engine.random_source import SeededRandomSource
from tilegen.engine.tile import Canvas, Tile
from tilegen.models.parameters import ParameterSet
from tilegen.models.requests import GenerateRequest
from tilegen.models.responses import CanvasOut, InstancesResponse, TileOut, TilesResponse
from tilegen.render.scene import TileScene
from tilegen.render.svg_preview import tiles_to_svg
from tilegen.store.parameters import ParameterStore

router = APIRouter(prefix="/tiles")

_SEED_BOUND = 2**31


def _resolve_seed(req: GenerateRequest) -> int:
    if req.seed is not None:
        return req.seed
    if settings.tilegen_seed is not None:
        return settings.tilegen_seed
    # Draw one so the response can be reproduced
    return int(np.random.default_rng().integers(_SEED_BOUND))


def _resolve(req: GenerateRequest, store: ParameterStore) -> tuple[Canvas, ParameterSet, int]:
    parameters = req.parameters or store.current
    canvas = Canvas.from_aspect(req.aspect_ratio or settings.tilegen_aspect_ratio)
    return canvas, parameters, _resolve_seed(req)


def _partition(req: GenerateRequest, store: ParameterStore) -> tuple[Canvas, int, TilePartitioner, list[Tile]]:
    canvas, parameters, seed = _resolve(req, store)
    partitioner = TilePartitioner(canvas, parameters, rng=SeededRandomSource(seed))
    return canvas, seed, partitioner, partitioner.generate()


def _tile_out(tile: Tile) -> TileOut:
    return TileOut(
        x=tile.x,
        y=tile.y,
        width=tile.width,
        height=tile.height,
        level=tile.level,
        direction=tile.direction.name,
        direction_value=tile.direction.value,
    )


@router.post("", response_model=TilesResponse)
async def generate(
    req: GenerateRequest,
    store: ParameterStore = Depends(get_parameter_store),
) -> TilesResponse:
    start = time.perf_counter()
    canvas, seed, partitioner, tiles = _partition(req, store)
    report = analyze_partition(tiles, canvas)
    elapsed = (time.perf_counter() - start) * 1000

    return TilesResponse(
        canvas=CanvasOut(width=canvas.width, height=canvas.height),
        seed=seed,
        tiles=[_tile_out(t) for t in tiles],
        report=report.to_dict(),
        stats=partitioner.stats.to_dict(),
        processing_time_ms=round(elapsed, 1),
    )


@router.post("/svg")
async def generate_svg(
    req: GenerateRequest,
    store: ParameterStore = Depends(get_parameter_store),
) -> Response:
    canvas, seed, _, tiles = _partition(req, store)
    svg = tiles_to_svg(tiles, canvas, title=f"tiles seed={seed}")
    return Response(content=svg, media_type="image/svg+xml", headers={"X-Tilegen-Seed": str(seed)})


@router.post("/instances", response_model=InstancesResponse)
async def generate_instances(
    req: GenerateRequest,
    store: ParameterStore = Depends(get_parameter_store),
) -> InstancesResponse:
    canvas, parameters, seed = _resolve(req, store)
    scene = TileScene(canvas, parameters, rng_factory=lambda: SeededRandomSource(seed))
    try:
        data = scene.regenerate().to_dict()
    finally:
        scene.dispose()
    return InstancesResponse(canvas=CanvasOut(width=canvas.width, height=canvas.height), **data)
