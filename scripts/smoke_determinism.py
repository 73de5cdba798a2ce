#!/usr/bin/env python3
"""Smoke-test deterministic behaviour of seeded puzzle generation."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from contracts.payload import payload_to_puzzle, puzzle_to_payload
from contracts.signature import puzzle_signature
from queens.generator import generate_puzzle
from queens.solver import count_solutions


def _run_with_seed(seed: int) -> str:
    puzzle = generate_puzzle(seed)
    payload = puzzle_to_payload(puzzle)
    restored = payload_to_puzzle(payload)
    if count_solutions(restored.region_grid, restored.revealed_queens, max_solutions=2) != 1:
        raise AssertionError(f"seed {seed} produced a puzzle without a unique solution")
    return puzzle_signature(restored)


def main() -> int:
    first = _run_with_seed(12345)
    second = _run_with_seed(12345)
    if first != second:
        print(f"determinism failed: {first} vs {second}")
        return 1

    third = _run_with_seed(54321)
    if first == third:
        print(f"different seed produced identical signature: {first}")
        return 1

    print("Determinism smoke-test passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
