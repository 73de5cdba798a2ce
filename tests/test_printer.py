from __future__ import annotations

import json

import pytest

pytest.importorskip("matplotlib")

import matplotlib

matplotlib.use("Agg")

from contracts.payload import puzzle_to_payload
from printer.pdf import render_pdf
from tools.cli.queens_cli import main


def test_render_pdf_writes_document(tmp_path, block_puzzle):
    target = render_pdf([block_puzzle] * 5, tmp_path / "pack.pdf", footer="test", with_solutions=True)
    assert target.exists()
    assert target.read_bytes()[:4] == b"%PDF"


def test_render_pdf_requires_puzzles(tmp_path):
    with pytest.raises(ValueError):
        render_pdf([], tmp_path / "empty.pdf")


def test_print_command(tmp_path, block_puzzle):
    source = tmp_path / "puzzles.json"
    source.write_text(json.dumps([puzzle_to_payload(block_puzzle)]), "utf-8")
    target = tmp_path / "out.pdf"
    assert main(["print", str(source), "--out", str(target)]) == 0
    assert target.read_bytes()[:4] == b"%PDF"
