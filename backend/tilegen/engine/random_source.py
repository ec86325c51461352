"""Random draws consumed by the partitioner.

Every random decision in the engine goes through a ``RandomSource`` so the whole
draw sequence can be seeded, recorded and replayed. Distributions:

- ``uniform_bool(p)``       True with probability ``p``
- ``uniform_int(lo, hi)``   integer in ``[lo, hi)``, all values equally likely
- ``weighted_pick(items)``  value of ``(weight, value)`` with probability
                            ``weight / sum(weights)``
- ``shuffle(items)``        uniformly random permutation (returns a new list)
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource(abc.ABC):
    @abc.abstractmethod
    def uniform_bool(self, p: float = 0.5) -> bool: ...

    @abc.abstractmethod
    def uniform_int(self, min_inclusive: int, max_exclusive: int) -> int: ...

    @abc.abstractmethod
    def weighted_pick(self, items: Sequence[tuple[float, T]]) -> T: ...

    @abc.abstractmethod
    def shuffle(self, items: Sequence[T]) -> list[T]: ...

    def choice(self, items: Sequence[T]) -> T:
        """Uniform pick, expressed as an equal-weight ``weighted_pick``."""
        return self.weighted_pick([(1.0, item) for item in items])


class SeededRandomSource(RandomSource):
    """numpy ``Generator`` backed source. ``seed=None`` draws fresh entropy."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def uniform_bool(self, p: float = 0.5) -> bool:
        return bool(self._rng.random() < p)

    def uniform_int(self, min_inclusive: int, max_exclusive: int) -> int:
        if max_exclusive <= min_inclusive:
            raise ValueError(f"Empty integer range [{min_inclusive}, {max_exclusive})")
        return int(self._rng.integers(min_inclusive, max_exclusive))

    def weighted_pick(self, items: Sequence[tuple[float, T]]) -> T:
        if not items:
            raise ValueError("weighted_pick() needs at least one item")
        weights = np.array([w for w, _ in items], dtype=np.float64)
        total = float(weights.sum())
        if total <= 0.0:
            raise ValueError("weighted_pick() needs a positive total weight")
        target = self._rng.random() * total
        idx = int(np.searchsorted(np.cumsum(weights), target, side="right"))
        # Rounding at the top end of the cumulative sum
        idx = min(idx, len(items) - 1)
        return items[idx][1]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        order = self._rng.permutation(len(items))
        return [items[int(i)] for i in order]


@dataclass
class Draw:
    """One recorded draw: its kind and the value that came out."""

    kind: str
    result: Any


class RecordingRandomSource(RandomSource):
    """Wraps another source and keeps the tape of every draw it served."""

    def __init__(self, inner: RandomSource) -> None:
        self.inner = inner
        self.tape: list[Draw] = []

    def uniform_bool(self, p: float = 0.5) -> bool:
        result = self.inner.uniform_bool(p)
        self.tape.append(Draw("bool", result))
        return result

    def uniform_int(self, min_inclusive: int, max_exclusive: int) -> int:
        result = self.inner.uniform_int(min_inclusive, max_exclusive)
        self.tape.append(Draw("int", result))
        return result

    def weighted_pick(self, items: Sequence[tuple[float, T]]) -> T:
        result = self.inner.weighted_pick(items)
        self.tape.append(Draw("pick", result))
        return result

    def shuffle(self, items: Sequence[T]) -> list[T]:
        result = self.inner.shuffle(items)
        self.tape.append(Draw("shuffle", list(result)))
        return result


class ReplayRandomSource(RandomSource):
    """Serves a recorded tape back in order.

    Raises ``ValueError`` if the caller asks for a different kind of draw than
    the one recorded at that position, or asks for more draws than recorded.
    """

    def __init__(self, tape: Sequence[Draw]) -> None:
        self.tape = list(tape)
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.tape)

    def _next(self, kind: str) -> Any:
        if self.exhausted:
            raise ValueError(f"Replay tape exhausted after {len(self.tape)} draws")
        draw = self.tape[self.position]
        if draw.kind != kind:
            raise ValueError(
                f"Replay diverged at draw {self.position}: expected {draw.kind!r}, got {kind!r}"
            )
        self.position += 1
        return draw.result

    def uniform_bool(self, p: float = 0.5) -> bool:
        return self._next("bool")

    def uniform_int(self, min_inclusive: int, max_exclusive: int) -> int:
        return self._next("int")

    def weighted_pick(self, items: Sequence[tuple[float, T]]) -> T:
        return self._next("pick")

    def shuffle(self, items: Sequence[T]) -> list[T]:
        return list(self._next("shuffle"))
