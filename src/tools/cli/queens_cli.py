"""Command line entry point for generating, solving and printing puzzles."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from contracts.errors import PayloadError, make_issue, make_result
from contracts.payload import payload_to_puzzle, puzzle_to_payload, public_payload, read_public_payload
from contracts.signature import solution_hash
from orchestrator import log as event_log
from orchestrator.batch import (
    DEFAULT_MAX_ATTEMPTS_PER_PUZZLE,
    BatchGenerationError,
    BatchResult,
    generate_batch,
)
from queens.generator import GenerationOutcome, GenerationStatus, run_generation
from queens.model import Position, as_positions
from queens.random_source import create_seeded_random
from queens.settings import resolve_generator_settings
from queens.solver import count_solutions, solve_puzzle
from queens.submission import check_submission

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def _dump(payload: Any, out: Optional[str]) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    if out:
        Path(out).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text("utf-8"))


def _outcome_to_dict(outcome: GenerationOutcome, *, public: bool) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "status": outcome.status.value,
        "attemptsUsed": outcome.attempts_used,
        "seed": outcome.seed,
        "attemptSeed": outcome.attempt_seed,
    }
    if outcome.reason:
        payload["reason"] = outcome.reason
    if outcome.puzzle is not None:
        payload["puzzle"] = (
            public_payload(outcome.puzzle) if public else puzzle_to_payload(outcome.puzzle)
        )
        payload["solutionHash"] = solution_hash(outcome.puzzle.solution)
    if outcome.difficulty is not None and outcome.heuristic is not None:
        payload["difficulty"] = outcome.difficulty.value
        payload["difficultyHeuristic"] = outcome.heuristic.to_dict()
    return payload


def _explicit(value: Optional[int], fallback: int) -> int:
    # Flags reach the generator unfiltered so bad values surface as invalid input.
    return fallback if value is None else value


def cmd_generate(args: argparse.Namespace) -> int:
    settings = resolve_generator_settings(seed=args.seed)
    outcome = run_generation(
        settings.seed,
        max_attempts=_explicit(args.max_attempts, settings.max_attempts),
        min_clues=_explicit(args.min_clues, settings.min_clues),
    )
    _dump(_outcome_to_dict(outcome, public=args.public), args.out)
    if outcome.status is GenerationStatus.INVALID_INPUT:
        print(outcome.reason, file=sys.stderr)
        return EXIT_INVALID
    return EXIT_OK if outcome.ok else EXIT_FAILED


def _batch_to_dict(result: BatchResult) -> Dict[str, Any]:
    return {
        "requested": result.requested,
        "created": result.created,
        "stats": result.stats.to_dict(),
        "puzzles": [
            {
                "seed": entry.seed,
                "attemptsUsed": entry.attempts_used,
                "solutionHash": entry.solution_hash,
                "signature": entry.signature,
                "difficulty": entry.difficulty.value,
                "difficultyHeuristic": entry.heuristic.to_dict(),
                "puzzle": puzzle_to_payload(entry.puzzle),
            }
            for entry in result.puzzles
        ],
    }


def cmd_batch(args: argparse.Namespace) -> int:
    settings = resolve_generator_settings()
    if args.log_dir:
        event_log.configure(args.log_dir)
    try:
        result = generate_batch(
            args.count,
            seed_start=args.seed_start,
            max_attempts_per_puzzle=args.max_attempts_per_puzzle,
            max_outer_attempts=args.max_outer_attempts,
            min_clues=_explicit(args.min_clues, settings.min_clues),
            log_events=bool(args.log_dir),
        )
    except BatchGenerationError as exc:
        print(str(exc), file=sys.stderr)
        _dump(_batch_to_dict(exc.details), args.out)
        return EXIT_FAILED
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INVALID
    _dump(_batch_to_dict(result), args.out)
    return EXIT_OK


def cmd_solve(args: argparse.Namespace) -> int:
    try:
        grid, clues = read_public_payload(_read_json(args.file))
    except PayloadError as exc:
        _dump({"error": str(exc), "errors": exc.result.errors}, None)
        return EXIT_INVALID
    random = create_seeded_random(args.seed) if args.seed is not None else None
    solution = solve_puzzle(grid, clues, random=random)
    count = count_solutions(grid, clues, max_solutions=args.max_solutions, random=random)
    _dump(
        {
            "solution": [queen.to_dict() for queen in solution] if solution else None,
            "solutionCount": count,
            "unique": count == 1,
        },
        args.out,
    )
    return EXIT_OK if solution else EXIT_FAILED


def _submission_queens(raw: Any) -> List[Position]:
    """Accept ``[{"row": r, "col": c}, ...]`` or ``{"queens": [...]}``."""

    queens = raw.get("queens") if isinstance(raw, dict) else raw
    problem = "Submission must be a list of queens or an object with a 'queens' list."
    if isinstance(queens, list):
        try:
            positions = as_positions(queens)
        except (KeyError, TypeError, ValueError):
            positions = []
        if len(positions) == len(queens) and all(
            type(value) is int for queen in positions for value in (queen.row, queen.col)
        ):
            return positions
        problem = "Every submitted queen needs integer 'row' and 'col' values."
    raise PayloadError(
        "Submission payload is malformed",
        make_result([make_issue("submission.format", problem)]),
    )


def cmd_validate(args: argparse.Namespace) -> int:
    try:
        puzzle = payload_to_puzzle(_read_json(args.file))
    except PayloadError as exc:
        _dump({"isValid": False, "errors": exc.result.errors}, None)
        return EXIT_FAILED

    report: Dict[str, Any] = {"isValid": True, "errors": []}
    unique = count_solutions(puzzle.region_grid, puzzle.revealed_queens, max_solutions=2) == 1
    report["unique"] = unique
    if not unique:
        report["isValid"] = False
        report["errors"].append("Revealed queens do not determine a unique solution.")

    accepted = report["isValid"]
    if args.submission:
        try:
            submission = check_submission(puzzle, _submission_queens(_read_json(args.submission)))
        except PayloadError as exc:
            submission = exc.result
        report["submission"] = submission.to_dict()
        accepted = accepted and submission.is_valid

    _dump(report, None)
    return EXIT_OK if accepted else EXIT_FAILED


def cmd_print(args: argparse.Namespace) -> int:
    from printer.pdf import render_pdf

    puzzles = []
    for path in args.files:
        raw = _read_json(path)
        items: List[Any] = raw if isinstance(raw, list) else [raw]
        for item in items:
            payload = item.get("puzzle", item) if isinstance(item, dict) else item
            try:
                puzzles.append(payload_to_puzzle(payload))
            except PayloadError as exc:
                print(f"{path}: {exc}: {'; '.join(exc.result.errors)}", file=sys.stderr)
                return EXIT_INVALID
    if not puzzles:
        print("no puzzles to print", file=sys.stderr)
        return EXIT_INVALID
    target = render_pdf(puzzles, args.out, with_solutions=args.solutions)
    print(f"PDF with {len(puzzles)} puzzles saved to: {target.resolve()}")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Queens puzzle engine")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a single puzzle")
    gen.add_argument("--seed", type=int, default=None)
    gen.add_argument("--min-clues", type=int, default=None)
    gen.add_argument("--max-attempts", type=int, default=None)
    gen.add_argument("--public", action="store_true", help="Omit the solution from the output")
    gen.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    gen.set_defaults(func=cmd_generate)

    batch = sub.add_parser("batch", help="Generate several distinct puzzles from consecutive seeds")
    batch.add_argument("--count", type=int, required=True)
    batch.add_argument("--seed-start", type=int, default=None)
    batch.add_argument("--min-clues", type=int, default=None)
    batch.add_argument(
        "--max-attempts-per-puzzle", type=int, default=DEFAULT_MAX_ATTEMPTS_PER_PUZZLE
    )
    batch.add_argument("--max-outer-attempts", type=int, default=None)
    batch.add_argument("--log-dir", default=None, help="Write JSONL generation events here")
    batch.add_argument("--out", default=None)
    batch.set_defaults(func=cmd_batch)

    solve = sub.add_parser("solve", help="Solve a puzzle payload (solution not required)")
    solve.add_argument("file")
    solve.add_argument("--seed", type=int, default=None)
    solve.add_argument("--max-solutions", type=int, default=2)
    solve.add_argument("--out", default=None)
    solve.set_defaults(func=cmd_solve)

    validate = sub.add_parser("validate", help="Validate a full puzzle payload")
    validate.add_argument("file")
    validate.add_argument("--submission", default=None, help="JSON file with the player's queens")
    validate.set_defaults(func=cmd_validate)

    printer = sub.add_parser("print", help="Render puzzle payloads into a PDF")
    printer.add_argument("files", nargs="+")
    printer.add_argument("--out", default=None)
    printer.add_argument("--solutions", action="store_true", help="Append answer-key pages")
    printer.set_defaults(func=cmd_print)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
