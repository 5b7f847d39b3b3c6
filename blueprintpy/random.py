from __future__ import annotations
import random as _rand
from typing import Any, Never, Sequence, TypeVar

from .context import Context
from .core import Blueprint, sync
from .services import service

T = TypeVar("T")


class Random:
    """Pseudo-random source; seed it by passing your own ``random.Random``."""
    def __init__(self, rng: _rand.Random | None = None) -> None:
        self._rng = rng or _rand.Random()

    def next_float(self) -> Blueprint[Any, Never, float]:
        return sync(self._rng.random)

    def next_int(self, bound: int) -> Blueprint[Any, Never, int]:
        if bound <= 0:
            raise ValueError("bound must be > 0")
        return sync(lambda: self._rng.randrange(bound))

    def next_int_between(self, low: int, high: int) -> Blueprint[Any, Never, int]:
        """Uniform integer in ``[low, high)``."""
        if high <= low:
            raise ValueError("high must be > low")
        return sync(lambda: self._rng.randrange(low, high))

    def choice(self, seq: Sequence[T]) -> Blueprint[Any, Never, T]:
        if not seq:
            raise ValueError("empty sequence")
        return sync(lambda: self._rng.choice(seq))


def random_int_between(low: int, high: int) -> Blueprint[Context, KeyError, int]:
    return service(Random).flat_map(lambda rnd: rnd.next_int_between(low, high))


def random_float() -> Blueprint[Context, KeyError, float]:
    return service(Random).flat_map(lambda rnd: rnd.next_float())
