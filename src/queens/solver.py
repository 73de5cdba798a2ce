"""Row-by-row backtracking solver.

The same search answers two questions: "give me a solution" (cap 1) and
"is this configuration uniquely solvable" (count with cap 2). Columns are
tried in a shuffled order drawn from the supplied random source, so repeated
unseeded calls may return different solutions of an ambiguous puzzle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .constraints import validate_partial_queens, validate_region_grid
from .model import BOARD_SIZE, Position, RegionGrid
from .random_source import RandomSource, create_unseeded_random, shuffle

_COLUMNS = tuple(range(BOARD_SIZE))


@dataclass
class _SearchState:
    queens_by_row: List[int]
    used_cols: List[bool]
    used_regions: List[bool]
    prefilled_by_row: List[Optional[int]]


def _initial_state(prefilled: Sequence[Position]) -> Optional[_SearchState]:
    prefilled_by_row: List[Optional[int]] = [None] * BOARD_SIZE
    for queen in prefilled:
        if prefilled_by_row[queen.row] is not None:
            return None
        prefilled_by_row[queen.row] = queen.col
    return _SearchState(
        queens_by_row=[-1] * BOARD_SIZE,
        used_cols=[False] * BOARD_SIZE,
        used_regions=[False] * BOARD_SIZE,
        prefilled_by_row=prefilled_by_row,
    )


def _backtrack(
    region_grid: RegionGrid,
    row: int,
    state: _SearchState,
    solutions: List[List[Position]],
    max_solutions: int,
    random: RandomSource,
) -> None:
    if len(solutions) >= max_solutions:
        return
    if row == BOARD_SIZE:
        solutions.append([Position(r, c) for r, c in enumerate(state.queens_by_row)])
        return

    fixed = state.prefilled_by_row[row]
    candidates = [fixed] if fixed is not None else shuffle(_COLUMNS, random)
    previous = state.queens_by_row[row - 1] if row > 0 else -1

    for col in candidates:
        region = region_grid[row][col]
        if state.used_cols[col] or state.used_regions[region]:
            continue
        # Same-column and same-region neighbours are already excluded above;
        # only the previous row can hold a diagonal neighbour.
        if previous != -1 and abs(previous - col) <= 1:
            continue

        state.queens_by_row[row] = col
        state.used_cols[col] = True
        state.used_regions[region] = True

        _backtrack(region_grid, row + 1, state, solutions, max_solutions, random)

        state.queens_by_row[row] = -1
        state.used_cols[col] = False
        state.used_regions[region] = False

        if len(solutions) >= max_solutions:
            return


def find_solutions(
    region_grid: RegionGrid,
    prefilled: Sequence[Position] = (),
    *,
    max_solutions: int = 2,
    random: Optional[RandomSource] = None,
) -> List[List[Position]]:
    """Return up to ``max_solutions`` complete placements honouring ``prefilled``.

    An invalid grid, an invalid prefilled set, or a prefilled set with two
    columns in one row yields an empty list rather than an error.
    """

    if max_solutions < 1:
        return []
    if not validate_region_grid(region_grid, BOARD_SIZE, BOARD_SIZE).is_valid:
        return []
    prefilled = list(prefilled)
    if not validate_partial_queens(prefilled, region_grid).is_valid:
        return []
    state = _initial_state(prefilled)
    if state is None:
        return []

    solutions: List[List[Position]] = []
    _backtrack(
        region_grid,
        0,
        state,
        solutions,
        max_solutions,
        random if random is not None else create_unseeded_random(),
    )
    return solutions


def solve_puzzle(
    region_grid: RegionGrid,
    prefilled: Sequence[Position] = (),
    *,
    random: Optional[RandomSource] = None,
) -> Optional[List[Position]]:
    """Return one complete placement, or ``None`` when there is none."""

    solutions = find_solutions(region_grid, prefilled, max_solutions=1, random=random)
    return solutions[0] if solutions else None


def count_solutions(
    region_grid: RegionGrid,
    prefilled: Sequence[Position] = (),
    *,
    max_solutions: int = 2,
    random: Optional[RandomSource] = None,
) -> int:
    """Count solutions, stopping at ``max_solutions``."""

    return len(find_solutions(region_grid, prefilled, max_solutions=max_solutions, random=random))


def has_unique_solution(
    region_grid: RegionGrid,
    prefilled: Sequence[Position] = (),
    *,
    random: Optional[RandomSource] = None,
) -> bool:
    return count_solutions(region_grid, prefilled, max_solutions=2, random=random) == 1


__all__ = ["count_solutions", "find_solutions", "has_unique_solution", "solve_puzzle"]
