"""Greedy clue removal that keeps the puzzle uniquely solvable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .model import Position, RegionGrid, sort_positions
from .random_source import RandomSource, shuffle
from .solver import count_solutions

DEFAULT_MIN_CLUES = 3


@dataclass(frozen=True)
class MinimizationResult:
    clues: Tuple[Position, ...]
    rejected: Tuple[Position, ...]
    solver_calls: int


def minimize_clues(
    region_grid: RegionGrid,
    solution: Sequence[Position],
    *,
    min_clues: int = DEFAULT_MIN_CLUES,
    random: RandomSource,
) -> MinimizationResult:
    """Strip queens from ``solution`` while the remainder still pins it down.

    A single pass over the queens in shuffled order: a queen is dropped when
    the remaining clues (never fewer than ``min_clues``) admit exactly one
    completion. Earlier removals are never revisited, so another order can
    reach a different clue count. ``rejected`` lists the queens whose removal
    broke uniqueness.
    """

    revealed: List[Position] = list(solution)
    rejected: List[Position] = []
    candidates = shuffle(solution, random)
    calls = 0

    while candidates and len(revealed) > min_clues:
        candidate = candidates.pop()
        tentative = [queen for queen in revealed if queen != candidate]
        if len(tentative) < min_clues:
            continue
        calls += 1
        if count_solutions(region_grid, tentative, max_solutions=2, random=random) == 1:
            revealed = tentative
        else:
            rejected.append(candidate)

    return MinimizationResult(
        clues=sort_positions(revealed),
        rejected=tuple(rejected),
        solver_calls=calls,
    )


__all__ = ["DEFAULT_MIN_CLUES", "MinimizationResult", "minimize_clues"]
