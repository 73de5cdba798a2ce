"""JSON payloads for puzzles.

The wire shape uses camelCase keys::

    {"size": 9, "regionGrid": [[...], ...], "revealedQueens": [{"row": 0, "col": 4}],
     "solution": [...], "generatedAt": "2024-01-01T00:00:00.000Z"}

The public variant omits ``solution``. Loading checks the JSON Schema first and
then the engine rules, and reports every problem found.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Tuple

import jsonschema

from queens.constraints import validate_complete_queens, validate_region_grid
from queens.model import BOARD_SIZE, Position, Puzzle, grid_to_lists

from .errors import PayloadError, ValidationIssue, make_issue, make_result

_POSITION_SCHEMA = {
    "type": "object",
    "properties": {
        "row": {"type": "integer", "minimum": 0, "maximum": BOARD_SIZE - 1},
        "col": {"type": "integer", "minimum": 0, "maximum": BOARD_SIZE - 1},
    },
    "required": ["row", "col"],
}

PUZZLE_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "queens/puzzle.schema.json",
    "type": "object",
    "properties": {
        "size": {"const": BOARD_SIZE},
        "regionGrid": {
            "type": "array",
            "minItems": BOARD_SIZE,
            "maxItems": BOARD_SIZE,
            "items": {
                "type": "array",
                "minItems": BOARD_SIZE,
                "maxItems": BOARD_SIZE,
                "items": {"type": "integer"},
            },
        },
        "revealedQueens": {"type": "array", "maxItems": BOARD_SIZE, "items": _POSITION_SCHEMA},
        "solution": {
            "type": "array",
            "minItems": BOARD_SIZE,
            "maxItems": BOARD_SIZE,
            "items": _POSITION_SCHEMA,
        },
        "generatedAt": {"type": "string"},
    },
    "required": ["size", "regionGrid", "revealedQueens", "solution"],
}


PUBLIC_PUZZLE_SCHEMA: Dict[str, Any] = {
    **PUZZLE_SCHEMA,
    "$id": "queens/public-puzzle.schema.json",
    "required": ["size", "regionGrid", "revealedQueens"],
}


@lru_cache(maxsize=None)
def _validator(public: bool = False) -> Any:
    return jsonschema.Draft202012Validator(PUBLIC_PUZZLE_SCHEMA if public else PUZZLE_SCHEMA)


def _schema_issues(payload: Mapping[str, Any], *, public: bool) -> List[ValidationIssue]:
    return [
        make_issue("payload.schema", error.message, _jsonschema_path(error))
        for error in sorted(_validator(public).iter_errors(payload), key=_jsonschema_path)
    ]


def _jsonschema_path(error: Any) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _positions(items: Any) -> List[Position]:
    return [Position(item["row"], item["col"]) for item in items]


def puzzle_to_payload(
    puzzle: Puzzle,
    *,
    include_solution: bool = True,
    generated_at: Optional[str] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "size": puzzle.size,
        "regionGrid": grid_to_lists(puzzle.region_grid),
        "revealedQueens": [queen.to_dict() for queen in puzzle.revealed_queens],
    }
    if include_solution:
        payload["solution"] = [queen.to_dict() for queen in puzzle.solution]
    payload["generatedAt"] = generated_at if generated_at is not None else _timestamp()
    return payload


def public_payload(puzzle: Puzzle, *, generated_at: Optional[str] = None) -> Dict[str, Any]:
    """Payload safe to hand to the solving party (no ``solution``)."""

    return puzzle_to_payload(puzzle, include_solution=False, generated_at=generated_at)


def payload_to_puzzle(payload: Mapping[str, Any]) -> Puzzle:
    """Build a :class:`Puzzle` from ``payload`` or raise :class:`PayloadError`."""

    schema_issues = _schema_issues(payload, public=False)
    if schema_issues:
        raise PayloadError("Puzzle payload does not match the schema", make_result(schema_issues))

    grid = payload["regionGrid"]
    solution = _positions(payload["solution"])
    revealed = _positions(payload["revealedQueens"])

    issues: List[ValidationIssue] = list(validate_region_grid(grid).issues)
    if not issues:
        issues.extend(validate_complete_queens(solution, grid).issues)
    solution_set = set(solution)
    for clue in revealed:
        if clue not in solution_set:
            issues.append(
                make_issue(
                    "payload.clue_outside_solution",
                    f"Revealed queen at ({clue.row}, {clue.col}) is not part of the solution.",
                    "$.revealedQueens",
                )
            )
    if issues:
        raise PayloadError("Puzzle payload breaks the puzzle rules", make_result(issues))

    return Puzzle.build(grid, revealed, solution)


def read_public_payload(payload: Mapping[str, Any]) -> Tuple[List[List[int]], List[Position]]:
    """Return ``(region_grid, revealed_queens)`` from a public payload.

    Only the schema is enforced here; rule violations are left to the solver,
    which answers them with "no solution".
    """

    schema_issues = _schema_issues(payload, public=True)
    if schema_issues:
        raise PayloadError("Puzzle payload does not match the schema", make_result(schema_issues))
    grid = [list(row) for row in payload["regionGrid"]]
    return grid, _positions(payload["revealedQueens"])


__all__ = [
    "PUBLIC_PUZZLE_SCHEMA",
    "PUZZLE_SCHEMA",
    "payload_to_puzzle",
    "public_payload",
    "puzzle_to_payload",
    "read_public_payload",
]
