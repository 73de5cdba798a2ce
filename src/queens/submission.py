"""Check a player's finished board against a stored puzzle."""

from __future__ import annotations

from typing import List, Sequence

from contracts.errors import ValidationIssue, ValidationResult, make_issue, make_result

from .constraints import validate_complete_queens
from .model import Position, Puzzle


def check_submission(puzzle: Puzzle, queens: Sequence[Position]) -> ValidationResult:
    """Validate ``queens`` as a final answer to ``puzzle``.

    The placement must obey every rule, keep all revealed clues, and match the
    stored solution.
    """

    result = validate_complete_queens(queens, puzzle.region_grid, puzzle.size)
    issues: List[ValidationIssue] = list(result.issues)

    placed = set(queens)
    for clue in puzzle.revealed_queens:
        if clue not in placed:
            issues.append(
                make_issue(
                    "submission.missing_clue",
                    f"Revealed queen at ({clue.row}, {clue.col}) must stay on the board.",
                )
            )

    if not issues and placed != set(puzzle.solution):
        issues.append(
            make_issue("submission.mismatch", "Placement does not match the puzzle solution.")
        )

    return make_result(issues)


__all__ = ["check_submission"]
