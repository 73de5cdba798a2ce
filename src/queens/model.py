"""Core value types shared by every engine component."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

BOARD_SIZE = 9
REGION_COUNT = 9

# Any rectangular sequence of sequences of region ids; generated grids are
# stored as tuples of tuples.
RegionGrid = Sequence[Sequence[int]]
FrozenGrid = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True, order=True)
class Position:
    """A board cell. Ordering is by ``row`` then ``col``."""

    row: int
    col: int

    def to_dict(self) -> dict:
        return {"row": self.row, "col": self.col}

    def __repr__(self) -> str:
        return f"Position({self.row}, {self.col})"


def as_positions(cells: Iterable) -> List[Position]:
    """Coerce ``(row, col)`` pairs, mappings or positions into positions."""

    out: List[Position] = []
    for cell in cells:
        if isinstance(cell, Position):
            out.append(cell)
        elif isinstance(cell, dict):
            out.append(Position(cell["row"], cell["col"]))
        else:
            row, col = cell
            out.append(Position(row, col))
    return out


def freeze_grid(grid: RegionGrid) -> FrozenGrid:
    return tuple(tuple(row) for row in grid)


def grid_to_lists(grid: RegionGrid) -> List[List[int]]:
    return [list(row) for row in grid]


def sort_positions(positions: Iterable[Position]) -> Tuple[Position, ...]:
    return tuple(sorted(positions))


@dataclass(frozen=True)
class Puzzle:
    """A generated puzzle.

    Only ``region_grid`` and ``revealed_queens`` are meant for the solving
    party; ``solution`` stays with the generator's owner.
    """

    region_grid: FrozenGrid
    revealed_queens: Tuple[Position, ...]
    solution: Tuple[Position, ...]
    size: int = field(default=BOARD_SIZE)

    @classmethod
    def build(
        cls,
        region_grid: RegionGrid,
        revealed_queens: Iterable[Position],
        solution: Iterable[Position],
    ) -> "Puzzle":
        return cls(
            region_grid=freeze_grid(region_grid),
            revealed_queens=sort_positions(revealed_queens),
            solution=sort_positions(solution),
            size=BOARD_SIZE,
        )


__all__ = [
    "BOARD_SIZE",
    "FrozenGrid",
    "Position",
    "Puzzle",
    "REGION_COUNT",
    "RegionGrid",
    "as_positions",
    "freeze_grid",
    "grid_to_lists",
    "sort_positions",
]
