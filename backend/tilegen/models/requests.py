"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tilegen.models.parameters import ParameterSet


class GenerateRequest(BaseModel):
    parameters: ParameterSet | None = Field(
        default=None,
        description="Parameter set to use; the stored set when omitted",
    )
    aspect_ratio: float | None = Field(
        default=None,
        gt=0.0,
        description="Canvas width for a canvas of height 1; configured default when omitted",
    )
    seed: int | None = Field(default=None, description="Seed for a reproducible partition")
