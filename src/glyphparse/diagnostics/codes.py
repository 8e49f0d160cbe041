"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        3000-3999: Syntax errors (parse failures surfaced by the runner)
    """

    # Syntax errors (3000-3999)
    # 3001: UNEXPECTED_EOF - a parser needed an atom at the end of the stream
    # 3002: UNEXPECTED_ATOM - a parser rejected the atom at the failure position
    # 3003: PARSE_FAILED - failure with no offending atom (fail(), lookahead)
    # 3007: NESTING_TOO_DEEP - attempt()/not_followed_by() nesting hit the recursion limit
    UNEXPECTED_EOF = 3001
    UNEXPECTED_ATOM = 3002
    PARSE_FAILED = 3003
    INPUT_TOO_LARGE = 3006
    NESTING_TOO_DEEP = 3007


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source location for error reporting.

    Note:
        Offsets count atoms (grapheme clusters for text input), not code
        points or bytes. A cluster such as "e" + U+0301 is one atom.

    Attributes:
        start: Starting atom offset (0-indexed)
        end: Ending atom offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed, in atoms)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, line is
                less than 1 (lines are 1-indexed), or column is less than 1
                (columns are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None when no position applies)
        hint: Suggestion for fixing the error
        found: Offending atom or description, as reported by the parser
        expected: Labels of the alternatives tried at the failure position
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    found: str | None = None
    expected: tuple[str, ...] = ()
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[UNEXPECTED_ATOM]: unexpected 'z'
              --> line 1, column 2
              = expected: 'l or k'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
