"""Tests for the self-test harness."""

import math
from pathlib import Path

import pytest

from kuadrat_pkg.fixtures import (
    INTERNAL_FIXTURES,
    Fixture,
    check_fixture,
    load_fixtures,
    run_file,
    run_fixtures,
    run_internal,
)
from kuadrat_pkg.types import FixtureError, Outcome, Solution, SolutionKind

DATA_DIR = Path(__file__).parent / "data"


class TestInternalFixtures:
    """The built-in fixtures must pass against the current solver."""

    def test_all_pass(self):
        summary = run_internal()
        assert summary.outcome is Outcome.SUCCESS
        assert summary.passed == len(INTERNAL_FIXTURES) == 8
        assert summary.failed == 0

    def test_report_callback_sees_every_result(self):
        seen = []
        run_internal(report=seen.append)
        assert [r.index for r in seen] == list(range(1, 9))
        assert all(r.passed for r in seen)


class TestCheckFixture:
    """Test comparison rules."""

    def test_two_roots_compared_sorted(self):
        # solve(-1, 0, 16) yields (4, -4); expectation given ascending
        fixture = Fixture(-1, 0, 16, Solution(SolutionKind.TWO_ROOTS, -4, 4))
        assert check_fixture(fixture).passed

    def test_two_roots_expectation_order_irrelevant(self):
        fixture = Fixture(1, 0, -16, Solution(SolutionKind.TWO_ROOTS, 4, -4))
        assert check_fixture(fixture).passed

    def test_kind_mismatch(self):
        fixture = Fixture(1, 0, 3, Solution(SolutionKind.TWO_ROOTS, 0, 0))
        result = check_fixture(fixture)
        assert not result.passed
        assert "expected TWO_ROOTS, got ZERO_ROOTS" in result.message

    def test_root_mismatch(self):
        fixture = Fixture(0, 2, 5, Solution(SolutionKind.ONE_ROOT, 2.5))
        result = check_fixture(fixture)
        assert not result.passed
        assert "2x + 5 = 0" in result.message

    def test_roots_within_epsilon_match(self):
        fixture = Fixture(0, 2, 5, Solution(SolutionKind.ONE_ROOT, -2.5 + 1e-12))
        assert check_fixture(fixture).passed

    def test_rootless_kinds_ignore_root_fields(self):
        fixture = Fixture(0, 0, 0, Solution(SolutionKind.INF_ROOTS, 123.0, -7.0))
        assert check_fixture(fixture).passed


class TestRunFixtures:
    """Test fail-fast and keep-going behaviour."""

    def _fixtures(self):
        return [
            Fixture(1, 0, 3, Solution(SolutionKind.ONE_ROOT, 0)),
            Fixture(0, 2, 5, Solution(SolutionKind.ONE_ROOT, -2.5)),
            Fixture(0, 0, 0, Solution(SolutionKind.ZERO_ROOTS)),
        ]

    def test_fail_fast_stops(self):
        summary = run_fixtures(self._fixtures(), fail_fast=True)
        assert len(summary.results) == 1
        assert summary.outcome is Outcome.FAILURE

    def test_keep_going_collects_all(self):
        summary = run_fixtures(self._fixtures(), fail_fast=False)
        assert len(summary.results) == 3
        assert summary.passed == 1
        assert summary.failed == 2
        assert [f.index for f in summary.failures] == [1, 3]


class TestLoadFixtures:
    """Test the fixture file format."""

    def test_load_ok_file(self):
        fixtures = load_fixtures(DATA_DIR / "fixtures_ok.txt")
        assert len(fixtures) == 6
        assert fixtures[0].expected.kind is SolutionKind.INF_ROOTS
        assert fixtures[2].expected.kind is SolutionKind.TWO_ROOTS
        assert fixtures[3].expected.kind is SolutionKind.ONE_ROOT
        assert math.isnan(fixtures[5].a)
        assert fixtures[5].c == math.inf

    def test_run_ok_file(self):
        summary = run_file(DATA_DIR / "fixtures_ok.txt")
        assert summary.outcome is Outcome.SUCCESS
        assert summary.passed == 6

    def test_run_bad_file_fails_fast(self):
        summary = run_file(DATA_DIR / "fixtures_bad.txt")
        assert summary.outcome is Outcome.FAILURE
        assert len(summary.results) == 1

    def test_run_bad_file_keep_going(self):
        summary = run_file(DATA_DIR / "fixtures_bad.txt", fail_fast=False)
        assert summary.failed == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FixtureError) as exc_info:
            load_fixtures(tmp_path / "nope.txt")
        assert exc_info.value.code == "FILE_NOT_FOUND"

    def test_bad_count(self, tmp_path):
        path = tmp_path / "count.txt"
        path.write_text("many\n1 2 3 0 0 0\n")
        with pytest.raises(FixtureError) as exc_info:
            load_fixtures(path)
        assert exc_info.value.code == "BAD_COUNT"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        with pytest.raises(FixtureError) as exc_info:
            load_fixtures(path)
        assert exc_info.value.code == "BAD_COUNT"

    def test_bad_kind_token(self):
        with pytest.raises(FixtureError) as exc_info:
            load_fixtures(DATA_DIR / "fixtures_malformed.txt")
        assert exc_info.value.code == "BAD_RECORD"
        assert "#2" in str(exc_info.value)

    def test_short_record(self, tmp_path):
        path = tmp_path / "short.txt"
        path.write_text("2\n1 0 -16 2 -4 4\n1 2\n")
        with pytest.raises(FixtureError) as exc_info:
            load_fixtures(path)
        assert exc_info.value.code == "BAD_RECORD"

    def test_extra_tokens_after_count_are_ignored(self, tmp_path):
        path = tmp_path / "extra.txt"
        path.write_text("1\n0 0 0 3 0 0\ntrailing garbage\n")
        assert len(load_fixtures(path)) == 1
