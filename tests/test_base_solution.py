from __future__ import annotations

from queens.base_solution import generate_base_solution
from queens.random_source import create_seeded_random


def test_base_solutions_are_king_free_permutations():
    for seed in range(25):
        solution = generate_base_solution(create_seeded_random(seed))
        assert solution is not None
        assert [queen.row for queen in solution] == list(range(9))
        assert sorted(queen.col for queen in solution) == list(range(9))
        for upper, lower in zip(solution, solution[1:]):
            assert abs(upper.col - lower.col) > 1


def test_base_solution_is_seed_deterministic():
    assert generate_base_solution(create_seeded_random(77)) == generate_base_solution(
        create_seeded_random(77)
    )
