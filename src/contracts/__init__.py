"""Validation results, puzzle payloads and signatures for the Queens engine."""

from __future__ import annotations

from .errors import PayloadError, ValidationIssue, ValidationResult

__all__ = [
    "PayloadError",
    "ValidationIssue",
    "ValidationResult",
]
