"""ParameterSet — the user-tunable inputs of the partitioner.

Field aliases are the camelCase keys of the settings files exported by the
original GUI, so those files import unchanged. Keys this model does not know
(gradient colours, animation speed, ...) are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tilegen.engine.registry import DivisionType


class IntRange(BaseModel):
    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> IntRange:
        if self.min > self.max:
            raise ValueError(f"range min ({self.min}) must not exceed max ({self.max})")
        return self


class ParameterSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    iteration_range: IntRange = Field(
        default_factory=lambda: IntRange(min=1, max=4), alias="iterationRange"
    )
    division_range: IntRange = Field(
        default_factory=lambda: IntRange(min=2, max=8), alias="divisionRange"
    )
    concentric_range: IntRange = Field(
        default_factory=lambda: IntRange(min=5, max=8), alias="concentricRange"
    )

    weight_none: float = Field(default=0.1, ge=0.0, alias="probTileNone")
    weight_concentric: float = Field(default=0.1, ge=0.0, alias="probTileConcentric")
    weight_unequal_thirds: float = Field(default=0.2, ge=0.0, alias="probTileUnequalThirds")
    weight_unequal_halves: float = Field(default=0.2, ge=0.0, alias="probTileUnequalHalves")
    weight_regular: float = Field(default=0.6, ge=0.0, alias="probTileEven")

    # Fraction of the canvas width
    thinnest_tile_size: float = Field(default=0.02, gt=0.0, le=1.0, alias="thinnestTileSize")

    @model_validator(mode="after")
    def _divisions_positive(self) -> ParameterSet:
        if self.division_range.min < 1:
            raise ValueError("divisionRange.min must be at least 1")
        return self

    def weights(self) -> dict[DivisionType, float]:
        return {
            DivisionType.NONE: self.weight_none,
            DivisionType.CONCENTRIC: self.weight_concentric,
            DivisionType.UNEQUAL_THIRDS: self.weight_unequal_thirds,
            DivisionType.UNEQUAL_HALVES: self.weight_unequal_halves,
            DivisionType.REGULAR: self.weight_regular,
        }

    @classmethod
    def only(cls, division: DivisionType, **overrides) -> ParameterSet:
        """A parameter set with all weight on a single strategy."""
        weights = {
            "weight_none": 0.0,
            "weight_concentric": 0.0,
            "weight_unequal_thirds": 0.0,
            "weight_unequal_halves": 0.0,
            "weight_regular": 0.0,
        }
        weights[f"weight_{division.name.lower()}"] = 1.0
        weights.update(overrides)
        return cls(**weights)

    def to_settings(self) -> dict:
        """camelCase dict, the shape of an exported settings file."""
        return self.model_dump(by_alias=True)
