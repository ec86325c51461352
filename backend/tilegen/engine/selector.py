"""Division strategy selection — weighted pick under depth and division-count rules."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from tilegen.engine.config import PartitionConfig
from tilegen.engine.registry import DivisionType

if TYPE_CHECKING:
    from tilegen.engine.random_source import RandomSource


# Never offered while depth <= iterationRange.min
_NON_STRUCTURAL = {DivisionType.NONE, DivisionType.CONCENTRIC}


class DivisionStrategySelector:
    """Builds the candidate set for one tile and draws from it.

    Candidates are the strategies with a non-negligible weight, minus:
    - None and Concentric while ``depth <= min_iterations``
    - UnequalThirds unless ``depth <= 2`` and the drawn division count is 3
    - UnequalHalves unless ``depth <= 2`` and the drawn division count is 2
    - anything in ``excluded`` (used by the fallback chain)

    An empty candidate set selects Regular.
    """

    def __init__(
        self,
        weights: dict[DivisionType, float],
        min_iterations: int,
        config: PartitionConfig | None = None,
    ) -> None:
        self.config = config or PartitionConfig()
        self.min_iterations = min_iterations
        scaled = ((division, weight * self.config.weight_scale) for division, weight in weights.items())
        # Fixed declaration order keeps the draw reproducible
        self.weights: list[tuple[float, DivisionType]] = sorted(
            ((w, d) for d, w in scaled if w > self.config.weight_epsilon),
            key=lambda item: item[1],
        )

    def candidates(
        self,
        depth: int,
        divisions: int,
        excluded: Iterable[DivisionType] = (),
    ) -> list[tuple[float, DivisionType]]:
        blocked = set(excluded)
        if depth <= self.min_iterations:
            blocked |= _NON_STRUCTURAL

        shallow = depth <= self.config.unequal_max_depth
        if not (shallow and divisions == self.config.thirds_divisions):
            blocked.add(DivisionType.UNEQUAL_THIRDS)
        if not (shallow and divisions == self.config.halves_divisions):
            blocked.add(DivisionType.UNEQUAL_HALVES)

        return [(w, d) for w, d in self.weights if d not in blocked]

    def pick(
        self,
        rng: RandomSource,
        depth: int,
        divisions: int,
        excluded: Iterable[DivisionType] = (),
    ) -> DivisionType:
        pool = self.candidates(depth, divisions, excluded)
        if not pool:
            return DivisionType.REGULAR
        return rng.weighted_pick(pool)


def pick_strategy(
    weights: dict[DivisionType, float],
    depth: int,
    divisions: int,
    rng: RandomSource,
    min_iterations: int,
    excluded: Iterable[DivisionType] = (),
) -> DivisionType:
    """One-shot helper around ``DivisionStrategySelector``."""
    return DivisionStrategySelector(weights, min_iterations).pick(rng, depth, divisions, excluded)
