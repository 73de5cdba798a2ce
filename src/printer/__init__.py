"""Printable output for generated puzzles."""

from .pdf import render_pdf

__all__ = ["render_pdf"]
