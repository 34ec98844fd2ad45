"""Independent checks of solver output using exact SymPy arithmetic.

Floats are converted to their exact rational values, so residuals and
reference roots are free of the rounding that the solver itself is subject
to. Used by the health check and the test suite; solve() never depends on
this module.
"""

from __future__ import annotations

import sympy as sp

from .config import RESIDUAL_TOLERANCE
from .numeric import compare, is_finite, is_zero
from .solver import solve
from .types import Ordering, SolutionKind

_X = sp.Symbol("x")


def exact_residual(a: float, b: float, c: float, x: float) -> sp.Rational:
    """Evaluate a*x^2 + b*x + c exactly for the given binary floats."""
    A, B, C, X = (sp.Rational(v) for v in (a, b, c, x))
    return A * X**2 + B * X + C


def satisfies(
    a: float, b: float, c: float, x: float, tolerance: float | None = None
) -> bool:
    """Check that ``x`` is a root of ax^2 + bx + c = 0 up to a scaled tolerance.

    The threshold is ``tolerance * max(1, |a|x^2, |b||x|, |c|)``, so large
    coefficients do not make a correctly rounded root look wrong. The
    comparison is done in rationals, so terms beyond the float range count.
    """
    tol = sp.Rational(RESIDUAL_TOLERANCE if tolerance is None else tolerance)
    A, B, C, X = (sp.Rational(v) for v in (a, b, c, x))
    scale = max(sp.Integer(1), abs(A) * X**2, abs(B * X), abs(C))
    return bool(abs(exact_residual(a, b, c, x)) <= tol * scale)


def reference_roots(a: float, b: float, c: float) -> list[float]:
    """Distinct real roots computed by SymPy, ascending.

    Returns an empty list for constant polynomials (including 0).
    """
    poly = sp.Poly(
        sp.Rational(a) * _X**2 + sp.Rational(b) * _X + sp.Rational(c), _X
    )
    if poly.is_zero or poly.degree() < 1:
        return []
    return sorted(float(r) for r in set(poly.real_roots()))


def cross_check(a: float, b: float, c: float) -> bool:
    """Return True if solve() agrees with SymPy for these coefficients.

    Only meaningful when the discriminant lies clearly outside the epsilon
    band; near a double root the two may legitimately disagree on the root
    count.
    """
    solution = solve(a, b, c)
    if not (is_finite(a) and is_finite(b) and is_finite(c)):
        return solution.kind == SolutionKind.BAD_INPUT
    if solution.kind == SolutionKind.INF_ROOTS:
        return is_zero(a) and is_zero(b) and is_zero(c)

    expected = reference_roots(a, b, c)
    actual = solution.sorted_roots()
    if len(actual) != len(expected):
        return False
    return all(compare(x, y) == Ordering.EQUAL for x, y in zip(actual, expected))
