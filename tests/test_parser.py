"""Unit tests for coefficient and token parsing."""

import io
import math
import unittest

import pytest

from kuadrat_pkg.parser import (
    TokenReader,
    format_number,
    parse_coefficient,
    parse_coefficients,
    parse_solution_kind,
    read_coefficients,
)
from kuadrat_pkg.types import ParseError, SolutionKind, ValidationError


class TestParseCoefficient(unittest.TestCase):
    """Test single coefficient parsing."""

    def test_plain_numbers(self):
        self.assertEqual(parse_coefficient("2"), 2.0)
        self.assertEqual(parse_coefficient("-16"), -16.0)
        self.assertEqual(parse_coefficient(" 54.234 "), 54.234)
        self.assertEqual(parse_coefficient("1e-3"), 0.001)

    def test_non_finite_tokens_are_numbers(self):
        self.assertTrue(math.isnan(parse_coefficient("nan")))
        self.assertEqual(parse_coefficient("inf"), math.inf)
        self.assertEqual(parse_coefficient("-Infinity"), -math.inf)

    def test_garbage(self):
        with self.assertRaises(ParseError) as ctx:
            parse_coefficient("abc")
        self.assertEqual(ctx.exception.code, "BAD_COEFFICIENT")

    def test_empty(self):
        with self.assertRaises(ParseError) as ctx:
            parse_coefficient("   ")
        self.assertEqual(ctx.exception.code, "BAD_COEFFICIENT")

    def test_parse_error_is_validation_error(self):
        with self.assertRaises(ValidationError):
            parse_coefficient("1,5")


class TestParseCoefficients:
    """Test coefficient triples."""

    def test_three_tokens(self):
        assert parse_coefficients(["1", "0", "-16"]) == (1.0, 0.0, -16.0)

    @pytest.mark.parametrize("tokens", [[], ["1"], ["1", "2"], ["1", "2", "3", "4"]])
    def test_wrong_count(self, tokens):
        with pytest.raises(ParseError) as exc_info:
            parse_coefficients(tokens)
        assert exc_info.value.code == "WRONG_COEFFICIENT_COUNT"

    def test_names_failing_coefficient(self):
        with pytest.raises(ParseError) as exc_info:
            parse_coefficients(["1", "x", "3"])
        assert exc_info.value.code == "BAD_COEFFICIENT"
        assert "#2" in str(exc_info.value)


class TestParseSolutionKind:
    """Test fixture kind tokens."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("0", SolutionKind.ZERO_ROOTS),
            ("2", SolutionKind.TWO_ROOTS),
            ("4", SolutionKind.BAD_INPUT),
            ("ONE_ROOT", SolutionKind.ONE_ROOT),
            ("INF_ROOTS", SolutionKind.INF_ROOTS),
            ("InfiniteRoots", SolutionKind.INF_ROOTS),
            ("InvalidInput", SolutionKind.BAD_INPUT),
            ("TwoRoots", SolutionKind.TWO_ROOTS),
        ],
    )
    def test_valid_tokens(self, token, expected):
        assert parse_solution_kind(token) is expected

    @pytest.mark.parametrize("token", ["5", "-1", "BLANK_ROOT", "two_roots", ""])
    def test_invalid_tokens(self, token):
        with pytest.raises(ParseError) as exc_info:
            parse_solution_kind(token)
        assert exc_info.value.code == "BAD_KIND"


class TestFormatNumber(unittest.TestCase):
    def test_g_style(self):
        self.assertEqual(format_number(-4.0), "-4")
        self.assertEqual(format_number(2.5), "2.5")
        self.assertEqual(format_number(1 / 3), "0.333333")
        self.assertEqual(format_number(1e-12), "1e-12")

    def test_precision(self):
        self.assertEqual(format_number(1 / 3, precision=3), "0.333")


class TestTokenReader(unittest.TestCase):
    """Test lazy token reading from streams."""

    def test_tokens_across_lines(self):
        reader = TokenReader(io.StringIO("1 2\n\n  3\n"))
        self.assertEqual(reader.next_token(), "1")
        self.assertEqual(reader.next_token(), "2")
        self.assertEqual(reader.next_token(), "3")
        self.assertIsNone(reader.next_token())

    def test_discard_line(self):
        reader = TokenReader(io.StringIO("1 2 3 extra junk\ny\n"))
        for _ in range(3):
            reader.next_token()
        reader.discard_line()
        self.assertEqual(reader.read_line(), "y\n")
        self.assertIsNone(reader.read_line())

    def test_eof_characters(self):
        reader = TokenReader(io.StringIO("1 2\x04 3\n"))
        self.assertEqual(reader.next_token(), "1")
        self.assertEqual(reader.next_token(), "2")
        self.assertIsNone(reader.next_token())

    def test_ctrl_z_alone(self):
        reader = TokenReader(io.StringIO("\x1a\n1 2 3\n"))
        self.assertIsNone(reader.next_token())


class TestReadCoefficients(unittest.TestCase):
    """Test interactive coefficient reading."""

    def test_reads_and_echoes(self):
        out = io.StringIO()
        result = read_coefficients(TokenReader(io.StringIO("1\n0 -16\n")), out)
        self.assertEqual(result, (1.0, 0.0, -16.0))
        self.assertEqual(out.getvalue(), "a = 1\nb = 0\nc = -16\n")

    def test_retries_on_bad_token(self):
        out = io.StringIO()
        result = read_coefficients(TokenReader(io.StringIO("1 oops 2 3\n")), out)
        self.assertEqual(result, (1.0, 2.0, 3.0))
        self.assertIn("Wrong input format.", out.getvalue())
        self.assertIn("b = 2", out.getvalue())

    def test_no_echo(self):
        out = io.StringIO()
        read_coefficients(TokenReader(io.StringIO("1 2 3")), out, echo=False)
        self.assertEqual(out.getvalue(), "")

    def test_eof_before_three(self):
        out = io.StringIO()
        self.assertIsNone(read_coefficients(TokenReader(io.StringIO("1 2")), out))


if __name__ == "__main__":
    unittest.main()
