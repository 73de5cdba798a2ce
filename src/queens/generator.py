"""Puzzle assembly: base placement -> regions -> clue minimization -> check.

Each attempt runs on its own random source. With a seed, attempt sources are
derived from a master Mulberry32 stream, so a whole run (and any single
attempt, via :func:`replay_attempt`) can be replayed exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from project_config import get_section

from .base_solution import generate_base_solution
from .difficulty import DifficultyHeuristic, DifficultyLevel, compute_difficulty, infer_difficulty
from .minimizer import DEFAULT_MIN_CLUES as _FALLBACK_MIN_CLUES
from .minimizer import minimize_clues
from .model import BOARD_SIZE, Puzzle
from .random_source import RandomSource, create_seeded_random, create_unseeded_random, rand_int
from .region_generator import generate_region_grid
from .settings import DEFAULT_MAX_ATTEMPTS as _FALLBACK_MAX_ATTEMPTS
from .solver import count_solutions

_LOGGER = logging.getLogger(__name__)

GENERATOR_CONFIG = get_section("generator", default={})
DEFAULT_MIN_CLUES = int(GENERATOR_CONFIG.get("min_clues", _FALLBACK_MIN_CLUES))
DEFAULT_MAX_ATTEMPTS = int(GENERATOR_CONFIG.get("max_attempts", _FALLBACK_MAX_ATTEMPTS))
UNIQUENESS_CAP = int(get_section("solver", default={}).get("uniqueness_cap", 2))

_SEED_MASK = 0xFFFFFFFF


class GenerationStatus(str, Enum):
    OK = "ok"
    # Every attempt failed; another seed or looser parameters may succeed.
    EXHAUSTED = "exhausted"
    # The request itself is unusable; retrying cannot help.
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class GenerationOutcome:
    status: GenerationStatus
    attempts_used: int
    seed: Optional[int] = None
    attempt_seed: Optional[int] = None
    puzzle: Optional[Puzzle] = None
    difficulty: Optional[DifficultyLevel] = None
    heuristic: Optional[DifficultyHeuristic] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is GenerationStatus.OK

    @property
    def retryable(self) -> bool:
        return self.status is GenerationStatus.EXHAUSTED


class PuzzleGenerationError(RuntimeError):
    """Raised by :func:`generate_puzzle` when every attempt failed."""

    def __init__(self, outcome: GenerationOutcome) -> None:
        super().__init__(
            f"Unable to generate unique puzzle after {outcome.attempts_used} attempts."
        )
        self.outcome = outcome
        self.attempts = outcome.attempts_used
        self.status = outcome.status
        self.seed = outcome.seed


def _check_parameters(min_clues: int, max_attempts: int) -> str:
    if isinstance(min_clues, bool) or not isinstance(min_clues, int):
        return "min_clues must be an integer"
    if not 0 <= min_clues <= BOARD_SIZE:
        return f"min_clues must be within [0, {BOARD_SIZE}]"
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        return "max_attempts must be an integer"
    if max_attempts < 1:
        return "max_attempts must be at least 1"
    return ""


def _attempt(random: RandomSource, min_clues: int) -> Tuple[Optional[Puzzle], str]:
    solution = generate_base_solution(random)
    if solution is None:
        return None, "base_solution"

    region_grid = generate_region_grid(solution, random)
    if region_grid is None:
        return None, "region_grid"

    minimized = minimize_clues(region_grid, solution, min_clues=min_clues, random=random)
    count = count_solutions(
        region_grid, minimized.clues, max_solutions=UNIQUENESS_CAP, random=random
    )
    if count != 1:
        return None, "uniqueness"

    return Puzzle.build(region_grid, minimized.clues, solution), ""


def replay_attempt(attempt_seed: int, *, min_clues: int = DEFAULT_MIN_CLUES) -> Optional[Puzzle]:
    """Re-run the single attempt identified by ``attempt_seed``."""

    puzzle, _ = _attempt(create_seeded_random(attempt_seed), min_clues)
    return puzzle


def run_generation(
    seed: Optional[int] = None,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_clues: int = DEFAULT_MIN_CLUES,
) -> GenerationOutcome:
    """Generate a puzzle and report how it went instead of raising."""

    problem = _check_parameters(min_clues, max_attempts)
    if problem:
        return GenerationOutcome(
            status=GenerationStatus.INVALID_INPUT, attempts_used=0, seed=seed, reason=problem
        )

    master = create_seeded_random(seed) if seed is not None else None
    failures = {"base_solution": 0, "region_grid": 0, "uniqueness": 0}

    for attempt in range(1, max_attempts + 1):
        if master is not None:
            attempt_seed: Optional[int] = rand_int(master, 0, _SEED_MASK)
            random = create_seeded_random(attempt_seed)
        else:
            attempt_seed = None
            random = create_unseeded_random()

        puzzle, stage = _attempt(random, min_clues)
        if puzzle is None:
            failures[stage] += 1
            _LOGGER.debug("attempt %d failed at %s (seed=%s)", attempt, stage, attempt_seed)
            continue

        heuristic = compute_difficulty(puzzle.region_grid, puzzle.solution)
        return GenerationOutcome(
            status=GenerationStatus.OK,
            attempts_used=attempt,
            seed=seed,
            attempt_seed=attempt_seed,
            puzzle=puzzle,
            difficulty=infer_difficulty(heuristic.score),
            heuristic=heuristic,
        )

    summary = ", ".join(f"{stage}={count}" for stage, count in failures.items())
    _LOGGER.warning(
        "puzzle generation exhausted after %d attempts (seed=%s; %s)", max_attempts, seed, summary
    )
    return GenerationOutcome(
        status=GenerationStatus.EXHAUSTED,
        attempts_used=max_attempts,
        seed=seed,
        reason=summary,
    )


def generate_puzzle(
    seed: Optional[int] = None,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_clues: int = DEFAULT_MIN_CLUES,
) -> Puzzle:
    """Return a uniquely solvable puzzle, raising on failure.

    Invalid parameters raise :class:`ValueError`; running out of attempts
    raises :class:`PuzzleGenerationError` with the attempt count.
    """

    outcome = run_generation(seed, max_attempts=max_attempts, min_clues=min_clues)
    if outcome.status is GenerationStatus.INVALID_INPUT:
        raise ValueError(outcome.reason)
    if outcome.status is GenerationStatus.EXHAUSTED:
        raise PuzzleGenerationError(outcome)
    assert outcome.puzzle is not None
    return outcome.puzzle


__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MIN_CLUES",
    "GenerationOutcome",
    "GenerationStatus",
    "PuzzleGenerationError",
    "generate_puzzle",
    "replay_attempt",
    "run_generation",
]
