"""Grow nine connected regions around a seed placement."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from project_config import get_section

from .constraints import is_inside_board, validate_region_grid
from .model import BOARD_SIZE, REGION_COUNT, Position
from .random_source import RandomSource, choice, rand_int, shuffle

_LOGGER = logging.getLogger(__name__)

REGION_CONFIG = get_section("generator.regions", default={})
DEFAULT_MIN_REGION_SIZE = int(REGION_CONFIG.get("min_size", 6))
DEFAULT_MAX_REGION_SIZE = int(REGION_CONFIG.get("max_size", 12))

_UNCLAIMED = -1
_ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))

Cell = Tuple[int, int]


def build_region_targets(
    region_count: int,
    total_cells: int,
    min_size: int,
    max_size: int,
    random: RandomSource,
) -> List[int]:
    """Split ``total_cells`` into ``region_count`` sizes within ``[min_size, max_size]``.

    If the caps cannot absorb every cell, the leftovers are dealt without caps.
    """

    targets = [min_size] * region_count
    capacities = [max_size - min_size] * region_count
    remaining = total_cells - min_size * region_count

    while remaining > 0:
        eligible = [index for index, capacity in enumerate(capacities) if capacity > 0]
        if not eligible:
            break
        pick = choice(eligible, random)
        targets[pick] += 1
        capacities[pick] -= 1
        remaining -= 1

    while remaining > 0:
        pick = rand_int(random, 0, region_count - 1)
        targets[pick] += 1
        remaining -= 1

    return targets


def _neighbors(row: int, col: int):
    for d_row, d_col in _ORTHOGONAL:
        n_row, n_col = row + d_row, col + d_col
        if is_inside_board(n_row, n_col):
            yield n_row, n_col


def _frontier(grid: List[List[int]], cells: Sequence[Cell]) -> List[Cell]:
    seen: Set[Cell] = set()
    out: List[Cell] = []
    for row, col in cells:
        for neighbor in _neighbors(row, col):
            if grid[neighbor[0]][neighbor[1]] != _UNCLAIMED or neighbor in seen:
                continue
            seen.add(neighbor)
            out.append(neighbor)
    return out


def _adjacent_regions(grid: List[List[int]], row: int, col: int) -> List[int]:
    ids: List[int] = []
    for n_row, n_col in _neighbors(row, col):
        region = grid[n_row][n_col]
        if region != _UNCLAIMED and region not in ids:
            ids.append(region)
    return ids


def _claim_fallback_cell(grid: List[List[int]], random: RandomSource) -> Optional[Tuple[Cell, int]]:
    options: List[Tuple[Cell, List[int]]] = []
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if grid[row][col] != _UNCLAIMED:
                continue
            region_ids = _adjacent_regions(grid, row, col)
            if region_ids:
                options.append(((row, col), region_ids))
    if not options:
        return None
    cell, region_ids = choice(options, random)
    return cell, choice(region_ids, random)


def generate_region_grid(
    solution: Sequence[Position],
    random: RandomSource,
    *,
    min_size: int = DEFAULT_MIN_REGION_SIZE,
    max_size: int = DEFAULT_MAX_REGION_SIZE,
) -> Optional[List[List[int]]]:
    """Grow one region per queen until every cell is claimed.

    Queen ``i`` of ``solution`` seeds region ``i``. Returns ``None`` when the
    growth gets stuck or the result fails :func:`validate_region_grid`; the
    caller is expected to retry with another placement or seed.
    """

    targets = build_region_targets(
        REGION_COUNT, BOARD_SIZE * BOARD_SIZE, min_size, max_size, random
    )
    grid = [[_UNCLAIMED] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    region_cells: Dict[int, List[Cell]] = {region_id: [] for region_id in range(REGION_COUNT)}

    if len(solution) < REGION_COUNT:
        return None
    for region_id in range(REGION_COUNT):
        queen = solution[region_id]
        grid[queen.row][queen.col] = region_id
        region_cells[region_id].append((queen.row, queen.col))

    unclaimed = BOARD_SIZE * BOARD_SIZE - REGION_COUNT
    while unclaimed > 0:
        progress = False
        for region_id in shuffle(range(REGION_COUNT), random):
            if len(region_cells[region_id]) >= targets[region_id]:
                continue
            candidates = _frontier(grid, region_cells[region_id])
            if not candidates:
                continue
            row, col = choice(candidates, random)
            grid[row][col] = region_id
            region_cells[region_id].append((row, col))
            unclaimed -= 1
            progress = True

        if not progress:
            fallback = _claim_fallback_cell(grid, random)
            if fallback is None:
                _LOGGER.debug("region growth stalled with %d unclaimed cells", unclaimed)
                return None
            (row, col), region_id = fallback
            grid[row][col] = region_id
            region_cells[region_id].append((row, col))
            unclaimed -= 1

    validity = validate_region_grid(grid)
    if not validity.is_valid:
        _LOGGER.debug("discarding region grid: %s", "; ".join(validity.errors))
        return None
    return grid


__all__ = [
    "DEFAULT_MAX_REGION_SIZE",
    "DEFAULT_MIN_REGION_SIZE",
    "build_region_targets",
    "generate_region_grid",
]
