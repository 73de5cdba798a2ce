from __future__ import annotations

import queens.region_generator as region_generator
from queens.base_solution import generate_base_solution
from queens.constraints import validate_complete_queens, validate_region_grid
from queens.random_source import create_seeded_random
from queens.region_generator import build_region_targets, generate_region_grid


def test_targets_sum_to_board_within_bounds():
    for seed in range(20):
        targets = build_region_targets(9, 81, 6, 12, create_seeded_random(seed))
        assert len(targets) == 9
        assert sum(targets) == 81
        assert all(6 <= size <= 12 for size in targets)


def test_targets_fall_back_to_uncapped_deal():
    targets = build_region_targets(3, 30, 2, 4, create_seeded_random(1))
    assert sum(targets) == 30
    assert max(targets) > 4


def test_generated_grids_are_valid_over_many_seeds():
    produced = 0
    for seed in range(40):
        rng = create_seeded_random(seed)
        solution = generate_base_solution(rng)
        grid = generate_region_grid(solution, rng)
        if grid is None:
            continue
        produced += 1
        assert validate_region_grid(grid).is_valid
        assert validate_complete_queens(solution, grid).is_valid
        for region_id, queen in enumerate(solution):
            assert grid[queen.row][queen.col] == region_id
    assert produced > 0


def test_region_grid_is_seed_deterministic():
    def build(seed):
        rng = create_seeded_random(seed)
        return generate_region_grid(generate_base_solution(rng), rng)

    assert build(123) == build(123)


def test_missing_queen_yields_no_grid():
    rng = create_seeded_random(4)
    solution = generate_base_solution(rng)
    assert generate_region_grid(solution[:8], rng) is None


def test_stalled_growth_is_finished_by_board_wide_fallback(monkeypatch):
    # Every region starts at its target, so each round stalls and only the
    # board-wide claim can fill the board.
    monkeypatch.setattr(region_generator, "build_region_targets", lambda *args: [1] * 9)
    claims = []
    real_claim = region_generator._claim_fallback_cell

    def counting_claim(grid, random):
        claims.append(1)
        return real_claim(grid, random)

    monkeypatch.setattr(region_generator, "_claim_fallback_cell", counting_claim)

    rng = create_seeded_random(17)
    solution = generate_base_solution(rng)
    grid = generate_region_grid(solution, rng)
    assert grid is not None
    assert len(claims) == 81 - 9
    assert validate_region_grid(grid).is_valid
    for region_id, queen in enumerate(solution):
        assert grid[queen.row][queen.col] == region_id


def test_fallback_without_claimable_cell_gives_no_grid(monkeypatch):
    monkeypatch.setattr(region_generator, "build_region_targets", lambda *args: [1] * 9)
    monkeypatch.setattr(region_generator, "_claim_fallback_cell", lambda grid, random: None)
    rng = create_seeded_random(17)
    assert generate_region_grid(generate_base_solution(rng), rng) is None


def test_fallback_cell_joins_an_adjacent_region():
    grid = [[0] * 9 for _ in range(9)]
    grid[4][4] = -1
    grid[3][4] = 5
    cell, region_id = region_generator._claim_fallback_cell(grid, create_seeded_random(2))
    assert cell == (4, 4)
    assert region_id in {0, 5}


def test_fallback_needs_a_claimed_neighbour():
    grid = [[-1] * 9 for _ in range(9)]
    assert region_generator._claim_fallback_cell(grid, create_seeded_random(2)) is None
