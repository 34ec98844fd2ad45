"""Input parsing for coefficients, console streams and fixture tokens.

Parsing failures are resolved here, before solver.solve is ever called:
solve only accepts three floats and has no way to signal "could not parse".
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from .config import OUTPUT_PRECISION
from .logging_config import get_logger
from .types import KIND_TOKENS, ParseError, SolutionKind

logger = get_logger("parser")

COEFFICIENT_NAMES = ("a", "b", "c")

# Ctrl+D and Ctrl+Z arriving as literal characters end console input too
_EOF_CHARS = ("\x04", "\x1a")


def parse_coefficient(token: str) -> float:
    """Parse a single coefficient.

    Accepts anything Python's float() accepts, including "nan", "inf" and
    "-infinity"; non-finite values are left for solve() to reject.

    Raises:
        ParseError: With code BAD_COEFFICIENT if the token is not a number
    """
    text = token.strip()
    if not text:
        raise ParseError("Empty coefficient", code="BAD_COEFFICIENT")
    try:
        return float(text)
    except ValueError:
        raise ParseError(
            f"Not a number: {text!r}", code="BAD_COEFFICIENT"
        ) from None


def parse_coefficients(tokens: Iterable[str]) -> tuple[float, float, float]:
    """Parse exactly three coefficient tokens into (a, b, c).

    Raises:
        ParseError: WRONG_COEFFICIENT_COUNT or BAD_COEFFICIENT
    """
    tokens = list(tokens)
    if len(tokens) != len(COEFFICIENT_NAMES):
        raise ParseError(
            f"Expected 3 coefficients, got {len(tokens)}",
            code="WRONG_COEFFICIENT_COUNT",
        )
    values = []
    for index, token in enumerate(tokens, start=1):
        try:
            values.append(parse_coefficient(token))
        except ParseError as e:
            raise ParseError(
                f"Can't read #{index} coefficient: {e.message}", code=e.code
            ) from e
    a, b, c = values
    return a, b, c


def parse_solution_kind(token: str) -> SolutionKind:
    """Parse a solution kind given as an ordinal (0-4) or a symbolic name.

    Raises:
        ParseError: With code BAD_KIND for unknown tokens
    """
    text = token.strip()
    try:
        return SolutionKind(int(text))
    except ValueError:
        pass
    try:
        return KIND_TOKENS[text]
    except KeyError:
        raise ParseError(
            f"Unknown solution kind: {text!r}", code="BAD_KIND"
        ) from None


def format_number(val: float, precision: int = OUTPUT_PRECISION) -> str:
    """Format a number like C's %g with the given significant digits."""
    fmt = "{:." + str(int(precision)) + "g}"
    return fmt.format(val)


class TokenReader:
    """Whitespace-separated token reader over a text stream.

    Lines are pulled from the stream lazily, so interactive input is read
    only as far as needed.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._pending: list[str] = []
        self._eof = False

    def _fill(self) -> bool:
        while not self._pending:
            line = self.read_line()
            if line is None:
                return False
            self._pending = line.split()
        return True

    def next_token(self) -> str | None:
        """Return the next token, or None at end of input."""
        if not self._fill():
            return None
        return self._pending.pop(0)

    def discard_line(self) -> None:
        """Drop whatever is left of the current line."""
        self._pending.clear()

    def read_line(self) -> str | None:
        """Return the next raw line, or None at end of input."""
        if self._eof:
            return None
        line = self._stream.readline()
        if not line:
            self._eof = True
            return None
        for eof_char in _EOF_CHARS:
            if eof_char in line:
                self._eof = True
                line = line.split(eof_char, 1)[0]
                # Input typed before the EOF character still counts
                return line if line.strip() else None
        return line


def read_coefficients(
    reader: TokenReader, out: TextIO, echo: bool = True
) -> tuple[float, float, float] | None:
    """Read a, b and c from a token stream, retrying on malformed tokens.

    Args:
        reader: Source of tokens
        out: Stream for "Wrong input format." notices and echoes
        echo: Echo each accepted coefficient as ``a = <value>``

    Returns:
        The (a, b, c) triple, or None if input ended first
    """
    values: list[float] = []
    while len(values) < len(COEFFICIENT_NAMES):
        token = reader.next_token()
        if token is None:
            return None
        try:
            value = parse_coefficient(token)
        except ParseError as e:
            logger.warning("Rejected console token: %s", e)
            print("Wrong input format.", file=out)
            continue
        if echo:
            name = COEFFICIENT_NAMES[len(values)]
            print(f"{name} = {format_number(value)}", file=out)
        values.append(value)
    a, b, c = values
    return a, b, c
