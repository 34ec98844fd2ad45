"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any


class SolutionKind(IntEnum):
    """Classification of ax^2 + bx + c = 0. Ordinals match fixture file codes."""

    ZERO_ROOTS = 0
    ONE_ROOT = 1
    TWO_ROOTS = 2
    INF_ROOTS = 3
    BAD_INPUT = 4


# Symbolic names accepted in fixture files, in addition to integer ordinals
KIND_TOKENS: dict[str, SolutionKind] = {
    "ZERO_ROOTS": SolutionKind.ZERO_ROOTS,
    "ZeroRoots": SolutionKind.ZERO_ROOTS,
    "ONE_ROOT": SolutionKind.ONE_ROOT,
    "OneRoot": SolutionKind.ONE_ROOT,
    "TWO_ROOTS": SolutionKind.TWO_ROOTS,
    "TwoRoots": SolutionKind.TWO_ROOTS,
    "INF_ROOTS": SolutionKind.INF_ROOTS,
    "InfiniteRoots": SolutionKind.INF_ROOTS,
    "BAD_INPUT": SolutionKind.BAD_INPUT,
    "InvalidInput": SolutionKind.BAD_INPUT,
}


class Ordering(IntEnum):
    """Result of an epsilon-banded comparison."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class Outcome(Enum):
    """Operational status of a collaborator flow (self-test run, CLI step)."""

    SUCCESS = "success"
    FAILURE = "failure"
    FATAL = "fatal"


@dataclass(frozen=True)
class Solution:
    """Result of solving a quadratic equation.

    ``x1`` and ``x2`` are only meaningful for ONE_ROOT (x1) and TWO_ROOTS
    (both); otherwise they are NaN. For TWO_ROOTS, x1 is the minus branch
    of the quadratic formula and x2 the plus branch, so the pair is not
    necessarily ascending when a < 0.
    """

    kind: SolutionKind
    x1: float = math.nan
    x2: float = math.nan

    @property
    def roots(self) -> tuple[float, ...]:
        """Meaningful roots in produced order."""
        if self.kind == SolutionKind.ONE_ROOT:
            return (self.x1,)
        if self.kind == SolutionKind.TWO_ROOTS:
            return (self.x1, self.x2)
        return ()

    def sorted_roots(self) -> tuple[float, ...]:
        return tuple(sorted(self.roots))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "ok": self.kind != SolutionKind.BAD_INPUT,
            "kind": self.kind.name,
            "roots": list(self.roots),
        }

    def __repr__(self) -> str:
        if not self.roots:
            return f"Solution(kind={self.kind.name})"
        roots = ", ".join(repr(x) for x in self.roots)
        return f"Solution(kind={self.kind.name}, roots=({roots}))"


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(ValidationError):
    """Raised when a coefficient or solution-kind token cannot be parsed."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        super().__init__(message, code)


class FixtureError(ValidationError):
    """Raised when a self-test fixture file cannot be read."""

    def __init__(self, message: str, code: str = "FIXTURE_ERROR"):
        super().__init__(message, code)


class InvariantError(AssertionError):
    """Raised when the solver produces a result that breaks its own contract.

    This signals a defect in the classification logic, never bad input.
    """

    def __init__(self, message: str, solution: Solution | None = None):
        self.message = message
        self.solution = solution
        super().__init__(self.message)
