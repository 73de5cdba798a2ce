"""Shared validation and error types for the Queens engine."""

from __future__ import annotations


from dataclasses import dataclass, field
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced by a grid or placement check."""

    code: str
    msg: str
    path: str


@dataclass(frozen=True)
class ValidationResult:
    """Aggregate result of a validator call.

    ``errors`` holds the human-readable messages in discovery order; the
    structured ``issues`` carry a stable ``code`` so callers can branch on the
    kind of problem without parsing text.
    """

    issues: Tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> List[str]:
        return [issue.msg for issue in self.issues]

    @property
    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]

    def has_code(self, code: str) -> bool:
        return any(issue.code == code for issue in self.issues)

    def to_dict(self) -> dict:
        return {"isValid": self.is_valid, "errors": self.errors}


def make_issue(code: str, msg: str, path: str = "$") -> ValidationIssue:
    """Construct a :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path)


def make_result(issues: Sequence[ValidationIssue]) -> ValidationResult:
    return ValidationResult(issues=tuple(issues))


class PayloadError(ValueError):
    """Raised when a serialized puzzle payload cannot be turned into a puzzle."""

    def __init__(self, message: str, result: ValidationResult) -> None:
        super().__init__(message)
        self.result = result


__all__ = [
    "PayloadError",
    "ValidationIssue",
    "ValidationResult",
    "make_issue",
    "make_result",
]
