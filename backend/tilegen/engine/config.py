"""Partitioner configuration — constants of the division rules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PartitionConfig:
    """Fixed knobs of the strategy selection and splitting rules."""

    # Relative weights are scaled before the negligible-weight filter
    weight_scale: float = 10.0
    weight_epsilon: float = 1e-5

    # Unequal splits are only offered at shallow depths
    unequal_max_depth: int = 2
    thirds_divisions: int = 3
    halves_divisions: int = 2

    # Regular split axis coin
    axis_probability: float = 0.5

    # Tolerance used by containment / conservation checks
    tolerance: float = 1e-6
