"""Region-grid and queen-placement rules.

Every function here is pure. Malformed input is reported through
:class:`~contracts.errors.ValidationResult`, never raised.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from contracts.errors import ValidationIssue, ValidationResult, make_issue, make_result

from .model import BOARD_SIZE, REGION_COUNT, Position, RegionGrid

_ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))


def is_inside_board(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    return 0 <= row < size and 0 <= col < size


def _is_row_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _cell_region(region_grid: RegionGrid, row: int, col: int) -> Optional[int]:
    """Region id stored at ``(row, col)``, or ``None`` when the grid has no such cell."""

    if row < 0 or col < 0 or not _is_row_sequence(region_grid) or row >= len(region_grid):
        return None
    line = region_grid[row]
    if not _is_row_sequence(line) or col >= len(line):
        return None
    return line[col]


def are_adjacent(a: Position, b: Position) -> bool:
    """King-move adjacency; a cell is not adjacent to itself."""

    if a.row == b.row and a.col == b.col:
        return False
    return abs(a.row - b.row) <= 1 and abs(a.col - b.col) <= 1


def is_valid_placement(
    row: int,
    col: int,
    placed_queens: Iterable[Position],
    region_grid: RegionGrid,
) -> bool:
    """Return ``True`` if a queen may go on ``(row, col)``.

    Row sharing is deliberately not checked: the row-by-row search owns that.
    """

    if not is_inside_board(row, col):
        return False
    region = _cell_region(region_grid, row, col)
    if region is None:
        return False
    candidate = Position(row, col)
    for queen in placed_queens:
        if queen.col == col:
            return False
        if _cell_region(region_grid, queen.row, queen.col) == region:
            return False
        if are_adjacent(queen, candidate):
            return False
    return True


def _is_region_id(value: object, region_count: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < region_count


def _is_region_connected(
    region_grid: RegionGrid,
    region_id: int,
    cells: Sequence[Tuple[int, int]],
    size: int,
) -> bool:
    start = cells[0]
    seen: Set[Tuple[int, int]] = {start}
    queue = deque([start])
    while queue:
        row, col = queue.popleft()
        for d_row, d_col in _ORTHOGONAL:
            n_row, n_col = row + d_row, col + d_col
            if not is_inside_board(n_row, n_col, size):
                continue
            if (n_row, n_col) in seen or region_grid[n_row][n_col] != region_id:
                continue
            seen.add((n_row, n_col))
            queue.append((n_row, n_col))
    return len(seen) == len(cells)


def validate_region_grid(
    grid: RegionGrid,
    size: int = BOARD_SIZE,
    region_count: int = REGION_COUNT,
) -> ValidationResult:
    """Check shape, id range, region count and 4-connectivity of ``grid``."""

    issues: List[ValidationIssue] = []
    if not _is_row_sequence(grid) or len(grid) != size:
        issues.append(make_issue("grid.shape", f"Region grid must have {size} rows.", "$"))
        return make_result(issues)

    for row_index, row in enumerate(grid):
        if not _is_row_sequence(row) or len(row) != size:
            issues.append(
                make_issue("grid.shape", f"Row {row_index} must have {size} columns.", f"$[{row_index}]")
            )
    if issues:
        return make_result(issues)

    region_cells: Dict[int, List[Tuple[int, int]]] = {}
    for row in range(size):
        for col in range(size):
            region_id = grid[row][col]
            if not _is_region_id(region_id, region_count):
                issues.append(
                    make_issue(
                        "grid.region_range",
                        f"Invalid region id {region_id} at ({row}, {col}).",
                        f"$[{row}][{col}]",
                    )
                )
                continue
            region_cells.setdefault(region_id, []).append((row, col))

    if len(region_cells) != region_count:
        issues.append(
            make_issue(
                "grid.region_count",
                f"Expected {region_count} regions, found {len(region_cells)}.",
                "$",
            )
        )

    for region_id in sorted(region_cells):
        if not _is_region_connected(grid, region_id, region_cells[region_id], size):
            issues.append(
                make_issue("grid.disconnected", f"Region {region_id} is not connected.", "$")
            )

    return make_result(issues)


def validate_partial_queens(
    queens: Sequence[Position],
    region_grid: RegionGrid,
) -> ValidationResult:
    """Report every local rule a (possibly incomplete) placement breaks."""

    issues: List[ValidationIssue] = []
    rows: Set[int] = set()
    cols: Set[int] = set()
    regions: Set[int] = set()

    for index, queen in enumerate(queens):
        path = f"$[{index}]"
        region = _cell_region(region_grid, queen.row, queen.col)
        if region is None:
            issues.append(
                make_issue(
                    "queens.out_of_bounds",
                    f"Queen at ({queen.row}, {queen.col}) is outside board.",
                    path,
                )
            )
            continue

        if queen.row in rows:
            issues.append(make_issue("queens.duplicate_row", f"Duplicate row {queen.row}.", path))
        rows.add(queen.row)

        if queen.col in cols:
            issues.append(make_issue("queens.duplicate_column", f"Duplicate column {queen.col}.", path))
        cols.add(queen.col)

        if region in regions:
            issues.append(make_issue("queens.duplicate_region", f"Duplicate region {region}.", path))
        regions.add(region)

    for i in range(len(queens)):
        for j in range(i + 1, len(queens)):
            a, b = queens[i], queens[j]
            if are_adjacent(a, b):
                issues.append(
                    make_issue(
                        "queens.adjacent",
                        f"Adjacent queens at ({a.row}, {a.col}) and ({b.row}, {b.col}).",
                        f"$[{i}]",
                    )
                )

    return make_result(issues)


def validate_complete_queens(
    queens: Sequence[Position],
    region_grid: RegionGrid,
    size: int = BOARD_SIZE,
) -> ValidationResult:
    """Partial checks plus exact count and full row/column/region coverage."""

    partial = validate_partial_queens(queens, region_grid)
    issues: List[ValidationIssue] = list(partial.issues)

    if len(queens) != size:
        issues.append(
            make_issue("queens.count", f"Expected exactly {size} queens, found {len(queens)}.")
        )

    if len({queen.row for queen in queens}) != size:
        issues.append(make_issue("queens.row_coverage", "Each row must contain exactly one queen."))

    if len({queen.col for queen in queens}) != size:
        issues.append(
            make_issue("queens.column_coverage", "Each column must contain exactly one queen.")
        )

    cells = [_cell_region(region_grid, queen.row, queen.col) for queen in queens]
    covered_regions = {region for region in cells if region is not None}
    if len(covered_regions) != size:
        issues.append(
            make_issue("queens.region_coverage", "Each region must contain exactly one queen.")
        )

    return make_result(issues)


__all__ = [
    "are_adjacent",
    "is_inside_board",
    "is_valid_placement",
    "validate_complete_queens",
    "validate_partial_queens",
    "validate_region_grid",
]
