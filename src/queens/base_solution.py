"""Random seed placements for region growth."""

from __future__ import annotations

from typing import List, Optional

from .model import BOARD_SIZE, Position
from .random_source import RandomSource, shuffle


def generate_base_solution(random: RandomSource) -> Optional[List[Position]]:
    """Place one queen per row and column with no touching queens.

    Consecutive rows never use neighbouring columns, so the placement is
    king-move free. Returns the queens in row order, or ``None`` if the search
    space is exhausted.
    """

    cols_by_row = [-1] * BOARD_SIZE
    used_cols = [False] * BOARD_SIZE

    def backtrack(row: int) -> bool:
        if row == BOARD_SIZE:
            return True
        for col in shuffle(range(BOARD_SIZE), random):
            if used_cols[col]:
                continue
            if row > 0 and abs(cols_by_row[row - 1] - col) <= 1:
                continue
            cols_by_row[row] = col
            used_cols[col] = True
            if backtrack(row + 1):
                return True
            cols_by_row[row] = -1
            used_cols[col] = False
        return False

    if not backtrack(0):
        return None
    return [Position(row, col) for row, col in enumerate(cols_by_row)]


__all__ = ["generate_base_solution"]
