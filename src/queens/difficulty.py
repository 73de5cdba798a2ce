# difficulty.py
# Label puzzles EASY / MEDIUM / HARD from the shape of the region grid and
# how many legal choices each row offers along the solution.

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import List, Sequence

from project_config import get_section

from .model import BOARD_SIZE, Position, RegionGrid

DIFFICULTY_CONFIG = get_section("difficulty", default={})
EASY_MAX_SCORE = int(DIFFICULTY_CONFIG.get("easy_max", 38))
MEDIUM_MAX_SCORE = int(DIFFICULTY_CONFIG.get("medium_max", 64))

MIN_SCORE = 5
MAX_SCORE = 95


class DifficultyLevel(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


@dataclass(frozen=True)
class DifficultyHeuristic:
    score: int
    average_choices_per_row: float
    forced_rows: int
    size_variance: float
    boundary_complexity: float

    def to_dict(self) -> dict:
        return asdict(self)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _round2(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def choices_by_row(region_grid: RegionGrid, solution: Sequence[Position]) -> List[int]:
    """Legal columns per row when the rows above hold their solution queens."""

    by_row = sorted(solution)
    used_cols = set()
    used_regions = set()
    choices: List[int] = []

    for row in range(BOARD_SIZE):
        previous_col = by_row[row - 1].col if 0 < row <= len(by_row) else -1
        valid = 0
        for col in range(BOARD_SIZE):
            if col in used_cols or region_grid[row][col] in used_regions:
                continue
            if previous_col != -1 and abs(previous_col - col) <= 1:
                continue
            valid += 1
        choices.append(valid)

        if row < len(by_row):
            queen = by_row[row]
            used_cols.add(queen.col)
            used_regions.add(region_grid[queen.row][queen.col])

    return choices


def compute_difficulty(region_grid: RegionGrid, solution: Sequence[Position]) -> DifficultyHeuristic:
    sizes = [0] * BOARD_SIZE
    boundary_edges = 0
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            region = region_grid[row][col]
            sizes[region] += 1
            if row > 0 and region_grid[row - 1][col] != region:
                boundary_edges += 1
            if col > 0 and region_grid[row][col - 1] != region:
                boundary_edges += 1

    mean_size = BOARD_SIZE
    variance = sum((size - mean_size) ** 2 for size in sizes) / len(sizes)
    size_variance = min(variance / 10, 10.0)
    boundary_complexity = min(boundary_edges / 36, 10.0)

    choices = choices_by_row(region_grid, solution)
    average_choices = sum(choices) / len(choices)
    forced_rows = sum(1 for value in choices if value <= 2)

    raw = (
        20
        + average_choices * 10
        + boundary_complexity * 2.2
        + size_variance * 1.6
        - forced_rows * 3.2
    )
    score = min(MAX_SCORE, max(MIN_SCORE, _round_half_up(raw)))

    return DifficultyHeuristic(
        score=score,
        average_choices_per_row=_round2(average_choices),
        forced_rows=forced_rows,
        size_variance=_round2(size_variance),
        boundary_complexity=_round2(boundary_complexity),
    )


def infer_difficulty(score: int) -> DifficultyLevel:
    if score <= EASY_MAX_SCORE:
        return DifficultyLevel.EASY
    if score <= MEDIUM_MAX_SCORE:
        return DifficultyLevel.MEDIUM
    return DifficultyLevel.HARD


__all__ = [
    "DifficultyHeuristic",
    "DifficultyLevel",
    "choices_by_row",
    "compute_difficulty",
    "infer_difficulty",
]
