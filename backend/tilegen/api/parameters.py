"""GET/PUT/DELETE /api/parameters — the stored parameter set, plus settings export/import."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import Response

from tilegen.dependencies import get_parameter_store
from tilegen.store.parameters import ParameterStore

router = APIRouter(prefix="/parameters")


@router.get("")
async def get_parameters(store: ParameterStore = Depends(get_parameter_store)) -> dict[str, Any]:
    return store.current.to_settings()


@router.put("")
async def update_parameters(
    changes: dict[str, Any] = Body(...),
    store: ParameterStore = Depends(get_parameter_store),
) -> dict[str, Any]:
    try:
        params = store.update(changes)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        raise HTTPException(status_code=422, detail=str(e)) from e
    return params.to_settings()


@router.delete("")
async def reset_parameters(store: ParameterStore = Depends(get_parameter_store)) -> dict[str, Any]:
    return store.reset().to_settings()


@router.get("/export")
async def export_parameters(store: ParameterStore = Depends(get_parameter_store)) -> Response:
    return Response(
        content=store.export_settings(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="settings.json"'},
    )


@router.post("/import")
async def import_parameters(
    document: Any = Body(...),
    store: ParameterStore = Depends(get_parameter_store),
) -> dict[str, Any]:
    try:
        params = store.import_document(document)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return params.to_settings()
