"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from tilegen.engine.registry import get_registry
from tilegen.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        splitters_registered=get_registry().count,
    )


@router.get("/strategies")
async def strategies() -> dict[str, str]:
    return {spec.division.name: spec.description for spec in get_registry().all()}
