"""Self-test harness replaying coefficient/expected-root fixtures.

Fixtures come either from the built-in INTERNAL_FIXTURES table or from a
text file. The file format is a leading integer count followed by that many
records ``a b c kind x1 x2``; tokens may be separated by any whitespace,
including newlines. ``kind`` is a SolutionKind ordinal or symbolic name.

Roots are compared with numeric.compare; two-root pairs are sorted
ascending on both sides first, since solve() does not order them when
a < 0.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import FAIL_FAST
from .logging_config import get_logger
from .numeric import compare, sort_pair
from .parser import parse_coefficient, parse_solution_kind
from .printer import format_equation
from .solver import solve
from .types import (
    FixtureError,
    Ordering,
    Outcome,
    ParseError,
    Solution,
    SolutionKind,
)

logger = get_logger("fixtures")

NAN = math.nan
INF = math.inf


@dataclass(frozen=True)
class Fixture:
    """Coefficients plus the solution they are expected to produce."""

    a: float
    b: float
    c: float
    expected: Solution

    @property
    def coefficients(self) -> tuple[float, float, float]:
        return self.a, self.b, self.c


@dataclass(frozen=True)
class FixtureResult:
    index: int  # 1-based position in the run
    fixture: Fixture
    actual: Solution
    passed: bool
    message: str = ""


@dataclass
class FixtureReport:
    """Aggregate outcome of a fixture run."""

    results: list[FixtureResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def failures(self) -> list[FixtureResult]:
        return [r for r in self.results if not r.passed]

    @property
    def outcome(self) -> Outcome:
        return Outcome.SUCCESS if self.failed == 0 else Outcome.FAILURE


INTERNAL_FIXTURES: tuple[Fixture, ...] = (
    Fixture(0, 0, 0, Solution(SolutionKind.INF_ROOTS)),
    Fixture(0, 0, 2.43, Solution(SolutionKind.ZERO_ROOTS)),
    Fixture(1, 0, 3, Solution(SolutionKind.ZERO_ROOTS)),
    Fixture(1, 0, -16, Solution(SolutionKind.TWO_ROOTS, -4, 4)),
    Fixture(0, 2, 5, Solution(SolutionKind.ONE_ROOT, -2.5)),
    Fixture(0, 54.234, 0, Solution(SolutionKind.ONE_ROOT, 0)),
    Fixture(4, 2, 0, Solution(SolutionKind.TWO_ROOTS, -0.5, 0)),
    Fixture(NAN, NAN, INF, Solution(SolutionKind.BAD_INPUT)),
)


def parse_fixture_tokens(tokens: Sequence[str]) -> Fixture:
    """Build a Fixture from the six tokens of one record.

    Raises:
        ParseError: If any token is malformed
    """
    if len(tokens) != 6:
        raise ParseError(
            f"Expected 6 fields, got {len(tokens)}", code="BAD_RECORD"
        )
    a, b, c = (parse_coefficient(t) for t in tokens[:3])
    kind = parse_solution_kind(tokens[3])
    x1 = parse_coefficient(tokens[4])
    x2 = parse_coefficient(tokens[5])
    return Fixture(a, b, c, Solution(kind, x1, x2))


def load_fixtures(path: str | Path) -> list[Fixture]:
    """Read fixtures from a file.

    Args:
        path: Fixture file path

    Returns:
        Fixtures in file order

    Raises:
        FixtureError: FILE_NOT_FOUND, BAD_COUNT or BAD_RECORD
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise FixtureError(
            f"Can't read file \"{path}\": {e.strerror or e}", code="FILE_NOT_FOUND"
        ) from e

    tokens = text.split()
    if not tokens:
        raise FixtureError("Can't read number of tests", code="BAD_COUNT")
    try:
        count = int(tokens[0])
    except ValueError:
        raise FixtureError(
            f"Can't read number of tests: {tokens[0]!r}", code="BAD_COUNT"
        ) from None
    if count < 0:
        raise FixtureError(
            f"Number of tests must not be negative: {count}", code="BAD_COUNT"
        )

    fixtures = []
    body = tokens[1:]
    for index in range(count):
        record = body[index * 6 : index * 6 + 6]
        try:
            fixtures.append(parse_fixture_tokens(record))
        except ParseError as e:
            raise FixtureError(
                f"Can't read test #{index + 1}: {e.message}", code="BAD_RECORD"
            ) from e
    logger.debug("Loaded %d fixtures from %s", len(fixtures), path)
    return fixtures


def _roots_match(actual: Sequence[float], expected: Sequence[float]) -> bool:
    return all(compare(x, y) == Ordering.EQUAL for x, y in zip(actual, expected))


def check_fixture(fixture: Fixture, index: int = 1) -> FixtureResult:
    """Solve one fixture and compare against its expectation."""
    actual = solve(fixture.a, fixture.b, fixture.c)
    expected = fixture.expected
    equation = format_equation(*fixture.coefficients)

    if actual.kind != expected.kind:
        message = (
            f"{equation}: kind doesn't match: "
            f"expected {expected.kind.name}, got {actual.kind.name}"
        )
        return FixtureResult(index, fixture, actual, False, message)

    if actual.kind == SolutionKind.ONE_ROOT:
        if not _roots_match((actual.x1,), (expected.x1,)):
            message = (
                f"{equation}: roots don't match: "
                f"expected x = {expected.x1!r}, got x = {actual.x1!r}"
            )
            return FixtureResult(index, fixture, actual, False, message)
    elif actual.kind == SolutionKind.TWO_ROOTS:
        got = sort_pair(actual.x1, actual.x2)
        want = sort_pair(expected.x1, expected.x2)
        if not _roots_match(got, want):
            message = (
                f"{equation}: roots don't match: "
                f"expected x1 = {want[0]!r}, x2 = {want[1]!r}; "
                f"got x1 = {got[0]!r}, x2 = {got[1]!r}"
            )
            return FixtureResult(index, fixture, actual, False, message)

    return FixtureResult(index, fixture, actual, True)


def run_fixtures(
    fixtures: Iterable[Fixture],
    fail_fast: bool = FAIL_FAST,
    report: Callable[[FixtureResult], None] | None = None,
) -> FixtureReport:
    """Run fixtures in order.

    Args:
        fixtures: Fixtures to run
        fail_fast: Stop at the first failing fixture
        report: Optional callback invoked with every result

    Returns:
        FixtureReport with one result per fixture that was run
    """
    summary = FixtureReport()
    for index, fixture in enumerate(fixtures, start=1):
        result = check_fixture(fixture, index)
        summary.results.append(result)
        if report is not None:
            report(result)
        if result.passed:
            logger.info("Test #%d passed", index)
            continue
        logger.error("Test #%d failed: %s", index, result.message)
        if fail_fast:
            break
    return summary


def run_internal(
    fail_fast: bool = FAIL_FAST,
    report: Callable[[FixtureResult], None] | None = None,
) -> FixtureReport:
    return run_fixtures(INTERNAL_FIXTURES, fail_fast=fail_fast, report=report)


def run_file(
    path: str | Path,
    fail_fast: bool = FAIL_FAST,
    report: Callable[[FixtureResult], None] | None = None,
) -> FixtureReport:
    """Load fixtures from ``path`` and run them. FixtureError propagates."""
    return run_fixtures(load_fixtures(path), fail_fast=fail_fast, report=report)
