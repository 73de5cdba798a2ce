from __future__ import annotations

import hashlib

import pytest

from contracts.signature import canonical_dump, puzzle_signature, solution_hash
from queens.model import Position, Puzzle


def test_canonical_dump_sorts_keys():
    assert canonical_dump({"b": 1, "a": [Position(0, 1)]}) == b'{"a":[{"col":1,"row":0}],"b":1}'


def test_canonical_dump_rejects_floats():
    with pytest.raises(TypeError):
        canonical_dump({"value": 0.5})


def test_solution_hash_ignores_order(block_solution):
    expected = hashlib.sha256(
        "|".join(f"{q.row}:{q.col}" for q in block_solution).encode("utf-8")
    ).hexdigest()
    assert solution_hash(block_solution) == expected
    assert solution_hash(reversed(block_solution)) == expected


def test_signature_tracks_grid_and_solution(block_grid, block_solution, block_puzzle):
    assert puzzle_signature(block_puzzle) == puzzle_signature(
        Puzzle.build(block_grid, block_solution[:5], block_solution)
    )
    block_grid[0][0], block_grid[8][8] = 8, 0
    assert puzzle_signature(block_puzzle) != puzzle_signature(
        Puzzle.build(block_grid, (), block_solution)
    )
