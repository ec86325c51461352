"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from tilegen.engine.context import SplitContext
from tilegen.engine.random_source import RandomSource
from tilegen.engine.tile import Canvas
from tilegen.models.parameters import ParameterSet

TOL = 1e-6

# Settings file as exported by the original editing GUI (gradient keys included)
ORIGINAL_SETTINGS = {
    "uGradientTexture": [
        {"time": 0.0, "value": {"r": 0, "g": 0, "b": 0, "a": 1}},
        {"time": 1, "value": {"r": 108, "g": 204, "b": 204, "a": 1}},
    ],
    "uGradientDivisions": 1.0,
    "uVignetteSize": 0.1,
    "uSpeed": 0.1,
    "iterationRange": {"min": 2, "max": 5},
    "divisionRange": {"min": 2, "max": 6},
    "concentricRange": {"min": 3, "max": 4},
    "probTileNone": 0.05,
    "probTileConcentric": 0.15,
    "probTileUnequalThirds": 0.3,
    "probTileUnequalHalves": 0.25,
    "probTileEven": 0.5,
    "thinnestTileSize": 0.03,
}


class ScriptedRandomSource(RandomSource):
    """Test double: serves scripted answers per draw kind, then fixed defaults.

    Defaults once a queue runs dry: bool -> True, int -> the lower bound,
    pick -> the first item, shuffle -> the input order. Shuffle scripts are
    index permutations. Every call is logged in ``calls``.
    """

    def __init__(
        self,
        bools: Sequence[bool] = (),
        ints: Sequence[int] = (),
        picks: Sequence[Any] = (),
        shuffles: Sequence[Sequence[int]] = (),
    ) -> None:
        self.bools = list(bools)
        self.ints = list(ints)
        self.picks = list(picks)
        self.shuffles = [list(s) for s in shuffles]
        self.calls: list[tuple[str, Any]] = []

    def uniform_bool(self, p: float = 0.5) -> bool:
        self.calls.append(("bool", p))
        return self.bools.pop(0) if self.bools else True

    def uniform_int(self, min_inclusive: int, max_exclusive: int) -> int:
        self.calls.append(("int", (min_inclusive, max_exclusive)))
        return self.ints.pop(0) if self.ints else min_inclusive

    def weighted_pick(self, items):
        self.calls.append(("pick", list(items)))
        if self.picks:
            return self.picks.pop(0)
        return items[0][1]

    def shuffle(self, items):
        self.calls.append(("shuffle", list(items)))
        if self.shuffles:
            return [items[i] for i in self.shuffles.pop(0)]
        return list(items)

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]


def make_ctx(
    rng: RandomSource,
    parameters: ParameterSet | None = None,
    canvas: Canvas | None = None,
    level: int = 1,
    divisions: int = 2,
) -> SplitContext:
    return SplitContext(
        canvas=canvas or Canvas(),
        parameters=parameters or ParameterSet(),
        rng=rng,
        level=level,
        divisions=divisions,
    )


@pytest.fixture
def unit_canvas() -> Canvas:
    return Canvas(1.0, 1.0)


@pytest.fixture
def wide_canvas() -> Canvas:
    return Canvas.from_aspect(1.6)


@pytest.fixture
def default_params() -> ParameterSet:
    return ParameterSet()
