from __future__ import annotations

from typing import List

import pytest

from queens.model import Position, Puzzle

# Nine 3x3 blocks; region id grows left to right, top to bottom.
BLOCK_GRID: List[List[int]] = [[(row // 3) * 3 + col // 3 for col in range(9)] for row in range(9)]

BLOCK_SOLUTION_COLS = (0, 3, 6, 1, 4, 7, 2, 5, 8)
MIRRORED_SOLUTION_COLS = tuple(8 - col for col in BLOCK_SOLUTION_COLS)


@pytest.fixture
def block_grid() -> List[List[int]]:
    return [list(row) for row in BLOCK_GRID]


@pytest.fixture
def block_solution() -> List[Position]:
    return [Position(row, col) for row, col in enumerate(BLOCK_SOLUTION_COLS)]


@pytest.fixture
def mirrored_solution() -> List[Position]:
    return [Position(row, col) for row, col in enumerate(MIRRORED_SOLUTION_COLS)]


@pytest.fixture
def block_puzzle(block_grid, block_solution) -> Puzzle:
    return Puzzle.build(block_grid, block_solution[:3], block_solution)
