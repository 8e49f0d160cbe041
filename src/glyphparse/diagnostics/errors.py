"""glyphparse exception hierarchy with structured diagnostics.

Parse failures are values (``Err``), not exceptions. The classes here
cover the places where an exception is the right signal: a caller
explicitly unwrapping a failed result, input rejected before parsing
starts, and a grammar whose nesting exhausts the Python call stack.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from glyphparse.core.reply import Message

__all__ = ["GlyphParseError", "InputTooLargeError", "NestingTooDeepError", "ParseFailedError"]


class GlyphParseError(Exception):
    """Base exception for all glyphparse errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize GlyphParseError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ParseFailedError(GlyphParseError):
    """A parse result was unwrapped although the parse failed.

    Raised by ``Err.unwrap()``. The failure itself is still available as
    data through ``failure``.

    Attributes:
        failure: The Message carried by the failed result
    """

    def __init__(self, message: str | Diagnostic, *, failure: Message) -> None:
        """Initialize ParseFailedError.

        Args:
            message: Error message string OR Diagnostic object
            failure: Message describing where and why the parse failed
        """
        super().__init__(message)
        self.failure = failure


class InputTooLargeError(GlyphParseError):
    """Input exceeds the configured maximum size.

    Attributes:
        size: Size of the rejected input
        limit: Configured maximum size
    """

    def __init__(self, message: str | Diagnostic, *, size: int, limit: int) -> None:
        """Initialize InputTooLargeError.

        Args:
            message: Error message string OR Diagnostic object
            size: Size of the rejected input
            limit: Configured maximum size
        """
        super().__init__(message)
        self.size = size
        self.limit = limit


class NestingTooDeepError(GlyphParseError):
    """Parsing ran out of Python stack.

    attempt() and not_followed_by() evaluate their argument completely
    before returning, so a recursive grammar that re-enters them on every
    nesting level uses call stack in proportion to the nesting of the
    input. parse() reports exhaustion of that stack with this error.

    Attributes:
        limit: Recursion limit in effect when parsing stopped
    """

    def __init__(self, message: str | Diagnostic, *, limit: int) -> None:
        """Initialize NestingTooDeepError.

        Args:
            message: Error message string OR Diagnostic object
            limit: Recursion limit in effect when parsing stopped
        """
        super().__init__(message)
        self.limit = limit
