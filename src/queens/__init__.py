"""Queens puzzle engine: generation, validation and solving on a 9x9 board."""

from __future__ import annotations

from .constraints import (
    are_adjacent,
    is_inside_board,
    is_valid_placement,
    validate_complete_queens,
    validate_partial_queens,
    validate_region_grid,
)
from .generator import (
    GenerationOutcome,
    GenerationStatus,
    PuzzleGenerationError,
    generate_puzzle,
    run_generation,
)
from .model import BOARD_SIZE, REGION_COUNT, Position, Puzzle
from .random_source import create_seeded_random, create_unseeded_random
from .solver import count_solutions, solve_puzzle

__all__ = [
    "BOARD_SIZE",
    "GenerationOutcome",
    "GenerationStatus",
    "Position",
    "Puzzle",
    "PuzzleGenerationError",
    "REGION_COUNT",
    "are_adjacent",
    "count_solutions",
    "create_seeded_random",
    "create_unseeded_random",
    "generate_puzzle",
    "is_inside_board",
    "is_valid_placement",
    "run_generation",
    "solve_puzzle",
    "validate_complete_queens",
    "validate_partial_queens",
    "validate_region_grid",
]
