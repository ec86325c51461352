"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    splitters_registered: int = 0


class TileOut(BaseModel):
    x: float
    y: float
    width: float
    height: float
    level: int
    direction: str
    direction_value: float


class CanvasOut(BaseModel):
    width: float
    height: float


class TilesResponse(BaseModel):
    canvas: CanvasOut
    seed: int | None = None
    tiles: list[TileOut] = Field(default_factory=list)
    report: dict = Field(default_factory=dict)
    stats: dict = Field(default_factory=dict)
    processing_time_ms: float = 0.0


class InstancesResponse(BaseModel):
    canvas: CanvasOut
    count: int = 0
    matrices: list[list[list[float]]] = Field(default_factory=list)
    directions: list[float] = Field(default_factory=list)
