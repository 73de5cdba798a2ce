"""Seedable random sources.

Every stochastic routine in the engine receives a ``RandomSource`` argument
instead of touching the global :mod:`random` state, which keeps generation
replayable from a seed and lets parallel workers hold their own source.
"""

from __future__ import annotations

import math
import random as _random
from typing import Callable, List, Sequence, TypeVar

RandomSource = Callable[[], float]

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class Mulberry32:
    """Mulberry32 generator over a 32-bit state.

    Instances are callables returning floats in ``[0, 1)``. Not safe for
    concurrent use; give each worker its own instance.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & _MASK32

    def __call__(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        value = self._state
        t = _imul(value ^ (value >> 15), 1 | value)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296.0


def create_seeded_random(seed: int) -> RandomSource:
    """Return a reproducible source: equal seeds yield equal sequences."""

    return Mulberry32(seed)


def create_unseeded_random() -> RandomSource:
    """Return a fresh source seeded from system entropy."""

    return _random.Random().random


def rand_int(random: RandomSource, lo: int, hi: int) -> int:
    """Uniform integer in ``[lo, hi]`` (both inclusive)."""

    return int(math.floor(random() * (hi - lo + 1))) + lo


def shuffle(items: Sequence[T], random: RandomSource) -> List[T]:
    """Fisher-Yates shuffle of a copy of ``items``."""

    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(math.floor(random() * (i + 1)))
        out[i], out[j] = out[j], out[i]
    return out


def choice(items: Sequence[T], random: RandomSource) -> T:
    return items[rand_int(random, 0, len(items) - 1)]


__all__ = [
    "Mulberry32",
    "RandomSource",
    "choice",
    "create_seeded_random",
    "create_unseeded_random",
    "rand_int",
    "shuffle",
]
