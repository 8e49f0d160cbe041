"""Top-level entry point: run a parser over a complete input.

parse() builds the initial stream, runs the parser, forces the reply
and converts it into a plain result:

    Ok(value)                 the parser succeeded; the final stream is dropped
    Err(message, atoms)       the parser failed; atoms are kept for line:column

Failures are returned, not raised. Err.unwrap() is the one place where
a parse failure becomes an exception (ParseFailedError).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, NoReturn

from glyphparse.constants import DEFAULT_CONTEXT_LINES, LINE_BREAKS, MAX_SOURCE_SIZE
from glyphparse.core.parser import Parser
from glyphparse.core.reply import Failure, Message, Success
from glyphparse.core.stream import LineOffsetCache, Stream
from glyphparse.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    InputTooLargeError,
    NestingTooDeepError,
    ParseFailedError,
    SourceSpan,
)

__all__ = ["Err", "Ok", "ParseResult", "check_size", "parse"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Ok[V]:
    """Successful parse.

    Attributes:
        value: Value produced by the top-level parser
    """

    value: V

    @property
    def is_ok(self) -> Literal[True]:
        return True

    def unwrap(self) -> V:
        """Return the parsed value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Failed parse.

    Attributes:
        message: Where and why the parse failed
        atoms: The complete input, used to compute line:column
    """

    message: Message
    atoms: tuple[str, ...]

    @property
    def is_ok(self) -> Literal[False]:
        return False

    @property
    def position(self) -> int:
        """Zero-based atom offset of the failure."""
        return self.message.position

    @property
    def line_col(self) -> tuple[int, int]:
        """1-indexed (line, column) of the failure, columns counted in atoms."""
        return LineOffsetCache(self.atoms).get_line_col(self.message.position)

    def unwrap(self) -> NoReturn:
        """Raise ParseFailedError describing the failure.

        Raises:
            ParseFailedError: Always
        """
        raise ParseFailedError(self.to_diagnostic(), failure=self.message)

    def to_diagnostic(self) -> Diagnostic:
        """Convert the failure into a structured Diagnostic."""
        line, column = self.line_col
        position = self.message.position
        end = position if self.message.eof else min(position + 1, len(self.atoms))
        span = SourceSpan(start=position, end=end, line=line, column=column)
        expected = self.message.expected
        if self.message.eof:
            return ErrorTemplate.unexpected_eof(expected, span)
        if self.message.found is not None:
            return ErrorTemplate.unexpected_atom(self.message.found, expected, span)
        return ErrorTemplate.parse_failed(expected, span)

    def format_error(self) -> str:
        """Format the failure with line:column.

        Example:
            >>> result = parse_text("azex", grammar)
            >>> result.format_error()
            "1:2: unexpected 'z' (expected: 'l or k')"
        """
        line, column = self.line_col
        return f"{line}:{column}: {self.message.describe()}"

    def format_with_context(self, context_lines: int = DEFAULT_CONTEXT_LINES) -> str:
        """Format the failure with surrounding source lines and a caret.

        Example:
            1:8: unexpected '/' (expected: 'placeholder', 'id')
            <BLANKLINE>
               1 | one {{ / }} three
                 |        ^
        """
        line, column = self.line_col
        cache = LineOffsetCache(self.atoms)

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(cache.line_count, line + context_lines)

        for number in range(start_line, end_line + 1):
            prefix = f"{number:4} | "
            result_lines.append(prefix + self._line_text(cache, number))
            if number == line:
                result_lines.append("     | " + " " * (column - 1) + "^")

        return "\n".join(result_lines)

    def _line_text(self, cache: LineOffsetCache, number: int) -> str:
        start = cache.line_start(number)
        end = cache.line_start(number + 1) if number < cache.line_count else len(self.atoms)
        return "".join(atom for atom in self.atoms[start:end] if atom not in LINE_BREAKS)


type ParseResult[V] = Ok[V] | Err


def check_size(size: int, max_source_size: int | None) -> None:
    """Reject input larger than the configured limit.

    Args:
        size: Size of the input (atoms for parse(), characters for parse_text())
        max_source_size: Limit; None means MAX_SOURCE_SIZE, 0 disables the check

    Raises:
        InputTooLargeError: If size exceeds the limit
    """
    limit = max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
    if limit and size > limit:
        logger.warning("Rejecting input of size %d (limit %d)", size, limit)
        raise InputTooLargeError(ErrorTemplate.input_too_large(size, limit), size=size, limit=limit)


def parse[V](
    atoms: Sequence[str],
    parser: Parser[V],
    *,
    max_source_size: int | None = None,
) -> ParseResult[V]:
    """Run ``parser`` over the complete atom sequence.

    The parser is not required to reach the end of input; compose with
    end() to demand it.

    Args:
        atoms: Input atoms (grapheme clusters for text, see parse_text())
        parser: Top-level parser
        max_source_size: Maximum atom count (default: MAX_SOURCE_SIZE,
            0 disables the limit)

    Returns:
        Ok(value) on success, Err(message, atoms) on failure

    Raises:
        InputTooLargeError: If the input exceeds max_source_size
        NestingTooDeepError: If nested attempt() or not_followed_by() calls
            exhaust the Python call stack
    """
    check_size(len(atoms), max_source_size)
    stream = Stream.of(atoms)
    logger.debug("Parsing %d atoms with %r", len(stream.atoms), parser)

    try:
        reply = parser(stream).force()
    except RecursionError as e:
        limit = sys.getrecursionlimit()
        logger.warning(
            "Parse of %d atoms exceeded the recursion limit of %d", len(stream.atoms), limit
        )
        raise NestingTooDeepError(ErrorTemplate.nesting_too_deep(limit), limit=limit) from e

    match reply:
        case Success(value, _):
            return Ok(value)
        case Failure(message):
            logger.debug(
                "Parse failed at position %d: %s", message.position, message.describe()
            )
            return Err(message, stream.atoms)
