from __future__ import annotations

import json

from contracts.payload import public_payload, puzzle_to_payload
from tools.cli.queens_cli import main


def test_generate_writes_payload(tmp_path):
    out = tmp_path / "puzzle.json"
    assert main(["generate", "--seed", "7", "--out", str(out)]) == 0

    data = json.loads(out.read_text("utf-8"))
    assert data["status"] == "ok"
    assert data["seed"] == 7
    assert "solution" in data["puzzle"]
    assert data["difficulty"] in {"EASY", "MEDIUM", "HARD"}


def test_generate_public_omits_solution(capsys):
    assert main(["generate", "--seed", "7", "--public"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert "solution" not in data["puzzle"]


def test_solve_public_payload(tmp_path, capsys, block_puzzle):
    source = tmp_path / "public.json"
    source.write_text(json.dumps(public_payload(block_puzzle)), "utf-8")

    assert main(["solve", str(source), "--seed", "1"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data["solution"]) == 9
    assert data["solutionCount"] >= 1


def test_validate_reports_submission(tmp_path, capsys, block_grid, block_solution):
    from queens.model import Puzzle

    puzzle = Puzzle.build(block_grid, block_solution, block_solution)
    source = tmp_path / "puzzle.json"
    source.write_text(json.dumps(puzzle_to_payload(puzzle)), "utf-8")
    answer = tmp_path / "answer.json"
    answer.write_text(json.dumps({"queens": [q.to_dict() for q in block_solution]}), "utf-8")

    assert main(["validate", str(source), "--submission", str(answer)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["unique"] is True
    assert data["submission"] == {"isValid": True, "errors": []}


def test_validate_rejects_broken_payload(tmp_path, capsys):
    source = tmp_path / "broken.json"
    source.write_text(json.dumps({"size": 9}), "utf-8")
    assert main(["validate", str(source)]) == 1
    assert json.loads(capsys.readouterr().out)["isValid"] is False


def test_batch_command(tmp_path):
    out = tmp_path / "batch.json"
    logs = tmp_path / "logs"
    assert main(["batch", "--count", "2", "--seed-start", "300", "--log-dir", str(logs), "--out", str(out)]) == 0
    data = json.loads(out.read_text("utf-8"))
    assert data["created"] == 2
    assert len({entry["solutionHash"] for entry in data["puzzles"]}) == 2
    assert list(logs.rglob("*.jsonl"))


def test_out_of_range_flags_are_invalid_input(capsys):
    assert main(["generate", "--seed", "7", "--min-clues", "12"]) == 2
    data = json.loads(capsys.readouterr().out)
    assert data["status"] == "invalid_input"
    assert "puzzle" not in data

    assert main(["generate", "--seed", "7", "--max-attempts", "0"]) == 2
    assert main(["batch", "--count", "1", "--seed-start", "1", "--min-clues", "12"]) == 2


def test_environment_overrides_still_fall_back(monkeypatch, capsys):
    monkeypatch.setenv("QUEENS_MIN_CLUES", "12")
    assert main(["generate", "--seed", "7"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data["puzzle"]["revealedQueens"]) >= 3


def test_malformed_submission_is_reported(tmp_path, capsys, block_grid, block_solution):
    from queens.model import Puzzle

    puzzle = Puzzle.build(block_grid, block_solution, block_solution)
    source = tmp_path / "puzzle.json"
    source.write_text(json.dumps(puzzle_to_payload(puzzle)), "utf-8")
    for broken in ({"answer": []}, [{"row": 0}], [{"row": "a", "col": 0}], 5):
        answer = tmp_path / "answer.json"
        answer.write_text(json.dumps(broken), "utf-8")
        assert main(["validate", str(source), "--submission", str(answer)]) == 1
        report = json.loads(capsys.readouterr().out)
        assert report["isValid"] is True
        submission = report["submission"]
        assert submission["isValid"] is False
        assert len(submission["errors"]) == 1
