"""Core quadratic equation solving module.

This module provides:
- Input validation (non-finite coefficients are reported, never solved)
- Degenerate (linear and constant) equation handling
- Quadratic equation handling via the discriminant
- Signed-zero cleanup and postcondition checks on every result

All decisions about "is this zero" go through numeric.is_zero and
numeric.compare, never through exact float equality. The functions here
perform no I/O; callers format or compare the returned Solution.
"""

from __future__ import annotations

import math

from .logging_config import get_logger
from .numeric import compare, is_finite, is_zero, normalize_signed_zero
from .types import InvariantError, Ordering, Solution, SolutionKind

logger = get_logger("solver")


def _solve_linear_equation(b: float, c: float) -> Solution:
    """Solve bx + c = 0 (the quadratic term has vanished)."""
    if is_zero(b):
        if is_zero(c):
            logger.debug("b and c vanish: identity 0 = 0")
            return Solution(SolutionKind.INF_ROOTS)
        logger.debug("b vanishes, c=%r: contradiction", c)
        return Solution(SolutionKind.ZERO_ROOTS)
    return Solution(SolutionKind.ONE_ROOT, -c / b)


def _solve_quadratic_equation(a: float, b: float, c: float) -> Solution:
    """Solve ax^2 + bx + c = 0 for a outside the zero band.

    If the discriminant or 2a overflows, all three coefficients are divided
    by the largest magnitude among them first. The roots are unchanged, but
    the zero band for the discriminant then applies to the scaled equation.
    """
    discriminant = b * b - 4 * a * c
    if not (is_finite(discriminant) and is_finite(2 * a)):
        scale = max(abs(a), abs(b), abs(c))
        a, b, c = a / scale, b / scale, c / scale
        discriminant = b * b - 4 * a * c
        logger.debug("rescaled coefficients by %r", scale)
    logger.debug("discriminant=%r", discriminant)

    if is_zero(discriminant):
        return Solution(SolutionKind.ONE_ROOT, -b / (2 * a))
    if compare(discriminant, 0.0) == Ordering.LESS:
        return Solution(SolutionKind.ZERO_ROOTS)

    sqrt_d = math.sqrt(discriminant)
    # x1 takes the minus branch; ascending only when a > 0
    x1 = (-b - sqrt_d) / (2 * a)
    x2 = (-b + sqrt_d) / (2 * a)
    return Solution(SolutionKind.TWO_ROOTS, x1, x2)


def _check_postconditions(solution: Solution) -> None:
    if solution.kind in (SolutionKind.ONE_ROOT, SolutionKind.TWO_ROOTS):
        if not is_finite(solution.x1):
            raise InvariantError(f"x1 is not finite in {solution!r}", solution)
    if solution.kind == SolutionKind.TWO_ROOTS:
        if not is_finite(solution.x2):
            raise InvariantError(f"x2 is not finite in {solution!r}", solution)


def solve(a: float, b: float, c: float) -> Solution:
    """Classify and solve ax^2 + bx + c = 0 over the reals.

    Args:
        a: Quadratic coefficient
        b: Linear coefficient
        c: Constant term

    Returns:
        Solution whose kind is one of ZERO_ROOTS, ONE_ROOT, TWO_ROOTS,
        INF_ROOTS or BAD_INPUT. Root fields never hold -0.0.

    Raises:
        InvariantError: If a produced root is not finite. This is a defect
            in the solver, not a property of the input.

    Example:
        >>> solve(1, 0, -16)
        Solution(kind=TWO_ROOTS, roots=(-4.0, 4.0))
        >>> solve(0, 0, 0)
        Solution(kind=INF_ROOTS)
    """
    if not (is_finite(a) and is_finite(b) and is_finite(c)):
        logger.debug("non-finite coefficients a=%r b=%r c=%r", a, b, c)
        return Solution(SolutionKind.BAD_INPUT)

    if is_zero(a):
        solution = _solve_linear_equation(b, c)
    else:
        solution = _solve_quadratic_equation(a, b, c)

    solution = Solution(
        solution.kind,
        normalize_signed_zero(solution.x1),
        normalize_signed_zero(solution.x2),
    )
    _check_postconditions(solution)
    logger.debug("solve(%r, %r, %r) -> %r", a, b, c, solution)
    return solution
