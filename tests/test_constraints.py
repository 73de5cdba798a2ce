from __future__ import annotations

from queens.constraints import (
    are_adjacent,
    is_inside_board,
    is_valid_placement,
    validate_complete_queens,
    validate_partial_queens,
    validate_region_grid,
)
from queens.model import Position


def test_block_grid_is_valid(block_grid):
    result = validate_region_grid(block_grid)
    assert result.is_valid
    assert result.errors == []


def test_board_bounds():
    assert is_inside_board(0, 0)
    assert is_inside_board(8, 8)
    assert not is_inside_board(9, 0)
    assert not is_inside_board(0, -1)


def test_adjacency_is_king_move():
    centre = Position(4, 4)
    assert are_adjacent(centre, Position(3, 3))
    assert are_adjacent(centre, Position(4, 5))
    assert not are_adjacent(centre, Position(4, 4))
    assert not are_adjacent(centre, Position(6, 4))


def test_diagonal_neighbour_is_rejected(block_grid):
    placed = [Position(2, 2)]
    assert not is_valid_placement(3, 3, placed, block_grid)
    assert is_valid_placement(5, 5, placed, block_grid)


def test_placement_rejects_column_and_region(block_grid):
    placed = [Position(0, 0)]
    assert not is_valid_placement(5, 0, placed, block_grid)
    assert not is_valid_placement(2, 2, placed, block_grid)
    assert not is_valid_placement(9, 4, placed, block_grid)


def test_placement_does_not_check_rows(block_grid):
    assert is_valid_placement(0, 4, [Position(0, 0)], block_grid)


def test_short_grid_reports_shape_only():
    result = validate_region_grid([[0] * 9 for _ in range(8)])
    assert result.codes == ["grid.shape"]


def test_ragged_rows_are_all_reported(block_grid):
    block_grid[2] = block_grid[2][:8]
    block_grid[5] = block_grid[5] + [5]
    result = validate_region_grid(block_grid)
    assert result.codes == ["grid.shape", "grid.shape"]


def test_out_of_range_ids_are_collected(block_grid):
    block_grid[0][0] = 9
    block_grid[8][8] = -1
    result = validate_region_grid(block_grid)
    assert result.codes == ["grid.region_range", "grid.region_range"]


def test_region_count_mismatch():
    result = validate_region_grid([[0] * 9 for _ in range(9)])
    assert result.codes == ["grid.region_count"]


def test_disconnected_regions(block_grid):
    block_grid[0][0], block_grid[8][8] = 8, 0
    result = validate_region_grid(block_grid)
    assert result.codes == ["grid.disconnected", "grid.disconnected"]


def test_validation_is_idempotent(block_grid):
    block_grid[0][0] = 42
    assert validate_region_grid(block_grid) == validate_region_grid(block_grid)


def test_partial_duplicate_row(block_grid):
    result = validate_partial_queens([Position(0, 0), Position(0, 4)], block_grid)
    assert result.codes == ["queens.duplicate_row"]


def test_partial_duplicate_column(block_grid):
    result = validate_partial_queens([Position(0, 0), Position(4, 0)], block_grid)
    assert result.codes == ["queens.duplicate_column"]


def test_partial_duplicate_region(block_grid):
    result = validate_partial_queens([Position(0, 0), Position(2, 2)], block_grid)
    assert result.codes == ["queens.duplicate_region"]


def test_partial_adjacent(block_grid):
    result = validate_partial_queens([Position(2, 2), Position(3, 3)], block_grid)
    assert result.codes == ["queens.adjacent"]


def test_partial_out_of_bounds(block_grid):
    result = validate_partial_queens([Position(9, 0)], block_grid)
    assert result.codes == ["queens.out_of_bounds"]


def test_complete_solution_is_valid(block_grid, block_solution):
    assert validate_complete_queens(block_solution, block_grid).is_valid


def test_incomplete_placement_reports_coverage(block_grid, block_solution):
    result = validate_complete_queens(block_solution[:8], block_grid)
    assert not result.is_valid
    for code in (
        "queens.count",
        "queens.row_coverage",
        "queens.column_coverage",
        "queens.region_coverage",
    ):
        assert result.has_code(code)


def test_result_serialises_to_camel_case(block_grid):
    payload = validate_partial_queens([Position(9, 0)], block_grid).to_dict()
    assert payload == {"isValid": False, "errors": ["Queen at (9, 0) is outside board."]}


def test_short_rows_report_missing_cells_instead_of_raising():
    ragged = [[0] * 8 for _ in range(9)]
    result = validate_partial_queens([Position(0, 8), Position(2, 7)], ragged)
    assert result.codes == ["queens.out_of_bounds"]

    complete = validate_complete_queens([Position(row, 8) for row in range(9)], ragged)
    assert complete.has_code("queens.out_of_bounds")
    assert complete.has_code("queens.region_coverage")


def test_placement_on_short_row_is_rejected():
    ragged = [[0] * 8 for _ in range(9)]
    assert not is_valid_placement(0, 8, [], ragged)
    assert is_valid_placement(4, 0, [Position(0, 8)], ragged)


def test_non_sequence_rows_are_shape_errors():
    assert validate_region_grid([None] * 9).codes == ["grid.shape"] * 9
    assert validate_region_grid(None).codes == ["grid.shape"]
    assert validate_region_grid("012345678").codes == ["grid.shape"]
