"""Human-readable and JSON rendering of equations and solutions."""

from __future__ import annotations

import json
import math
import sys
from typing import Any, TextIO

from .numeric import compare, is_zero
from .parser import format_number
from .types import Ordering, Solution, SolutionKind

ANSWER_MESSAGES = {
    SolutionKind.ZERO_ROOTS: "No real roots",
    SolutionKind.INF_ROOTS: "x is any real number",
    SolutionKind.BAD_INPUT: "Invalid input: coefficients must be finite numbers",
}


def _is_unit(x: float) -> bool:
    return compare(abs(x), 1.0) == Ordering.EQUAL


def format_equation(a: float, b: float, c: float) -> str:
    """Render ax^2 + bx + c = 0 with zero terms and unit coefficients dropped.

    Examples:
        >>> format_equation(1, 0, -16)
        'x^2 - 16 = 0'
        >>> format_equation(0, -1, 2)
        '-x + 2 = 0'
        >>> format_equation(0, 0, 0)
        '0 = 0'
    """
    parts: list[str] = []

    if not is_zero(a):
        sign = "-" if a < 0 else ""
        magnitude = "" if _is_unit(a) else format_number(abs(a))
        parts.append(f"{sign}{magnitude}x^2")

    if not is_zero(b):
        magnitude = "" if _is_unit(b) else format_number(abs(b))
        if parts:
            parts.append("-" if b < 0 else "+")
            parts.append(f"{magnitude}x")
        else:
            sign = "-" if b < 0 else ""
            parts.append(f"{sign}{magnitude}x")

    if not (parts and is_zero(c)):
        if parts:
            parts.append("-" if c < 0 else "+")
            parts.append(format_number(abs(c)))
        else:
            parts.append(format_number(c))

    return " ".join(parts) + " = 0"


def format_answer(solution: Solution) -> list[str]:
    """Return the answer lines for a solution."""
    if solution.kind == SolutionKind.ONE_ROOT:
        return [f"x = {format_number(solution.x1)}"]
    if solution.kind == SolutionKind.TWO_ROOTS:
        return [
            f"x1 = {format_number(solution.x1)}",
            f"x2 = {format_number(solution.x2)}",
        ]
    return [ANSWER_MESSAGES[solution.kind]]


def result_to_dict(
    solution: Solution, coefficients: tuple[float, float, float] | None = None
) -> dict[str, Any]:
    data = solution.to_dict()
    if coefficients is not None:
        data["equation"] = format_equation(*coefficients)
        data["coefficients"] = [
            x if math.isfinite(x) else repr(x) for x in coefficients
        ]
    return data


def print_result(
    solution: Solution,
    coefficients: tuple[float, float, float] | None = None,
    output_format: str = "human",
    silent: bool = False,
    out: TextIO | None = None,
) -> None:
    """Print a solution in the requested format.

    Args:
        solution: Solver result
        coefficients: Original (a, b, c), used to echo the equation
        output_format: "json" for JSON output, "human" for human-readable
        silent: In human format, suppress the equation line
        out: Destination stream (defaults to sys.stdout)
    """
    out = out if out is not None else sys.stdout
    if output_format == "json":
        data = result_to_dict(solution, coefficients)
        print(json.dumps(data, allow_nan=False), file=out)
        return
    if coefficients is not None and not silent:
        print(format_equation(*coefficients), file=out)
    for line in format_answer(solution):
        print(line, file=out)
