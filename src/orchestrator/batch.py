"""Generate several distinct puzzles from consecutive seeds."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from contracts.signature import puzzle_signature, solution_hash
from project_config import get_section
from queens.difficulty import DifficultyHeuristic, DifficultyLevel
from queens.generator import DEFAULT_MIN_CLUES, GenerationStatus, run_generation
from queens.model import Puzzle

from . import log as event_log

_LOGGER = logging.getLogger(__name__)

BATCH_CONFIG = get_section("batch", default={})
DEFAULT_MAX_ATTEMPTS_PER_PUZZLE = int(BATCH_CONFIG.get("max_attempts_per_puzzle", 1800))
OUTER_ATTEMPTS_PER_PUZZLE = int(BATCH_CONFIG.get("outer_attempts_per_puzzle", 1200))


@dataclass(frozen=True)
class BatchPuzzle:
    seed: int
    attempts_used: int
    solution_hash: str
    signature: str
    difficulty: DifficultyLevel
    heuristic: DifficultyHeuristic
    puzzle: Puzzle


@dataclass
class BatchStats:
    seeds_tried: int = 0
    skipped_attempt_failures: int = 0
    skipped_duplicate_hashes: int = 0
    max_attempts_per_puzzle: int = DEFAULT_MAX_ATTEMPTS_PER_PUZZLE
    max_outer_attempts: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "seedsTried": self.seeds_tried,
            "skippedAttemptFailures": self.skipped_attempt_failures,
            "skippedDuplicateHashes": self.skipped_duplicate_hashes,
            "maxAttemptsPerPuzzle": self.max_attempts_per_puzzle,
            "maxOuterAttempts": self.max_outer_attempts,
        }


@dataclass
class BatchResult:
    requested: int
    puzzles: List[BatchPuzzle] = field(default_factory=list)
    stats: BatchStats = field(default_factory=BatchStats)

    @property
    def created(self) -> int:
        return len(self.puzzles)


class BatchGenerationError(RuntimeError):
    """Raised when a batch ends with fewer puzzles than requested."""

    def __init__(self, message: str, details: BatchResult) -> None:
        super().__init__(message)
        self.details = details


def _emit(enabled: bool, event: Dict[str, Any]) -> None:
    if enabled:
        event_log.append_event(event)


def generate_batch(
    count: int,
    *,
    seed_start: Optional[int] = None,
    max_attempts_per_puzzle: int = DEFAULT_MAX_ATTEMPTS_PER_PUZZLE,
    max_outer_attempts: Optional[int] = None,
    min_clues: int = DEFAULT_MIN_CLUES,
    known_hashes: Iterable[str] = (),
    log_events: bool = False,
) -> BatchResult:
    """Generate ``count`` puzzles whose solutions are pairwise distinct.

    Seeds run ``seed_start, seed_start + 1, ...``. A seed whose generation is
    exhausted, or whose solution hash is already in ``known_hashes`` or in
    this batch, is skipped. At most ``max_outer_attempts`` seeds are tried;
    a shortfall raises :class:`BatchGenerationError` with the partial result.
    Invalid generation parameters raise :class:`ValueError` immediately.
    """

    desired = max(1, count)
    start = seed_start if seed_start is not None else int(time.time())
    outer_limit = (
        max_outer_attempts if max_outer_attempts is not None else desired * OUTER_ATTEMPTS_PER_PUZZLE
    )
    seen_hashes = set(known_hashes)
    result = BatchResult(
        requested=desired,
        stats=BatchStats(
            max_attempts_per_puzzle=max_attempts_per_puzzle,
            max_outer_attempts=outer_limit,
        ),
    )
    stats = result.stats

    while result.created < desired and stats.seeds_tried < outer_limit:
        seed = start + stats.seeds_tried
        stats.seeds_tried += 1

        outcome = run_generation(seed, max_attempts=max_attempts_per_puzzle, min_clues=min_clues)
        if outcome.status is GenerationStatus.INVALID_INPUT:
            raise ValueError(outcome.reason)
        if outcome.status is GenerationStatus.EXHAUSTED:
            stats.skipped_attempt_failures += 1
            _emit(log_events, {"event": "generation.skipped", "seed": seed, "reason": "exhausted"})
            continue

        puzzle = outcome.puzzle
        assert puzzle is not None and outcome.heuristic is not None and outcome.difficulty is not None
        digest = solution_hash(puzzle.solution)
        if digest in seen_hashes:
            stats.skipped_duplicate_hashes += 1
            _emit(log_events, {"event": "generation.skipped", "seed": seed, "reason": "duplicate"})
            continue
        seen_hashes.add(digest)

        entry = BatchPuzzle(
            seed=seed,
            attempts_used=outcome.attempts_used,
            solution_hash=digest,
            signature=puzzle_signature(puzzle),
            difficulty=outcome.difficulty,
            heuristic=outcome.heuristic,
            puzzle=puzzle,
        )
        result.puzzles.append(entry)
        _emit(
            log_events,
            {
                "event": "generation.created",
                "seed": seed,
                "attempts_used": outcome.attempts_used,
                "solution_hash": digest,
                "difficulty": entry.difficulty.value,
                "clues": len(puzzle.revealed_queens),
            },
        )

    _emit(
        log_events,
        {"event": "generation.batch_completed", "created": result.created, **stats.to_dict()},
    )

    if result.created < desired:
        _LOGGER.warning(
            "batch produced %d of %d puzzles after %d seeds", result.created, desired, stats.seeds_tried
        )
        raise BatchGenerationError(
            f"Generated {result.created} of {desired} requested puzzles.", result
        )
    return result


__all__ = [
    "BatchGenerationError",
    "BatchPuzzle",
    "BatchResult",
    "BatchStats",
    "generate_batch",
]
