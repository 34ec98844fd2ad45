"""Approximate real-number primitives.

Exact floating-point equality is unsafe when deciding whether a coefficient
or a discriminant vanishes, so every such decision goes through the
epsilon band defined in config.EPSILON.
"""

from __future__ import annotations

import math

from .config import EPSILON
from .types import Ordering


def is_zero(x: float) -> bool:
    """Return True if ``|x| < EPSILON``. NaN is never zero."""
    return abs(x) < EPSILON


def compare(x: float, y: float) -> Ordering:
    """Compare two floats within the epsilon band.

    Two infinities (of any sign) compare EQUAL, as do two NaNs. This lets
    the self-test harness match "both degenerate" results without caring
    about sign or payload. A NaN against a number orders as GREATER.

    Args:
        x: First value
        y: Second value

    Returns:
        Ordering.LESS, Ordering.EQUAL or Ordering.GREATER
    """
    if math.isinf(x) and math.isinf(y):
        return Ordering.EQUAL
    if math.isnan(x) and math.isnan(y):
        return Ordering.EQUAL
    if abs(x - y) < EPSILON:
        return Ordering.EQUAL
    return Ordering.LESS if x < y else Ordering.GREATER


def normalize_signed_zero(x: float) -> float:
    """Return +0.0 for anything inside the zero band, otherwise ``x``."""
    return 0.0 if is_zero(x) else x


def is_finite(x: float) -> bool:
    return math.isfinite(x)


def sort_pair(x: float, y: float) -> tuple[float, float]:
    """Return ``(x, y)`` in ascending order."""
    return (y, x) if x > y else (x, y)
