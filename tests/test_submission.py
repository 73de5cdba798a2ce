from __future__ import annotations

from queens.model import Puzzle
from queens.submission import check_submission


def test_solution_is_accepted(block_puzzle, block_solution):
    assert check_submission(block_puzzle, block_solution).is_valid


def test_dropped_clue_is_flagged(block_puzzle, mirrored_solution):
    result = check_submission(block_puzzle, mirrored_solution)
    assert result.codes == ["submission.missing_clue"] * 3


def test_other_valid_placement_is_a_mismatch(block_grid, block_solution, mirrored_solution):
    puzzle = Puzzle.build(block_grid, (), block_solution)
    assert check_submission(puzzle, mirrored_solution).codes == ["submission.mismatch"]


def test_rule_breaks_are_reported(block_puzzle, block_solution):
    result = check_submission(block_puzzle, block_solution[:8])
    assert result.has_code("queens.count")
    assert not result.has_code("submission.mismatch")
