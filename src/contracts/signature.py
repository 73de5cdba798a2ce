"""Canonical hashes used to deduplicate generated puzzles.

Payloads are serialised with sorted keys, no insignificant whitespace and
UTF-8 output before hashing, so equal puzzles always hash equally regardless
of how their containers were built.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Iterable

from queens.model import Position, Puzzle, grid_to_lists

__all__ = ["canonical_dump", "puzzle_signature", "solution_hash"]


def _canonicalize(obj: Any) -> Any:
    if isinstance(obj, Position):
        return obj.to_dict()
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        raise TypeError("Floats are not part of puzzle signatures")
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj.keys(), key=str)}
    raise TypeError(f"Unsupported type for canonicalisation: {type(obj)!r}")


def canonical_dump(obj: Any) -> bytes:
    """Return canonical JSON bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def solution_hash(solution: Iterable[Position]) -> str:
    """Hex SHA-256 of the sorted ``row:col|row:col`` form of ``solution``."""

    canonical = "|".join(f"{cell.row}:{cell.col}" for cell in sorted(solution))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def puzzle_signature(puzzle: Puzzle) -> str:
    """Hex SHA-256 over the size, region grid and solution of ``puzzle``."""

    payload = {
        "size": puzzle.size,
        "regionGrid": grid_to_lists(puzzle.region_grid),
        "solution": sorted(puzzle.solution),
    }
    return hashlib.sha256(canonical_dump(payload)).hexdigest()
