"""Shared constants for glyphparse.

Centralized configuration constants used across the core, the runner
and the text layer. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Input limits: DoS prevention via size constraints
- Error reporting: Descriptions and formatting defaults

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    # Error reporting
    "END_OF_INPUT",
    "DEFAULT_CONTEXT_LINES",
    "LINE_BREAKS",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum number of characters accepted by parse_text() (10 MiB of text).
# Atom sequences passed to parse() are measured in atoms.
# Pass max_source_size=0 to disable the check.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# ERROR REPORTING
# ============================================================================

# Description used as Message.found when a parser hits the end of the stream.
END_OF_INPUT: str = "end of input"

# Lines shown above and below the failing line by Err.format_with_context().
DEFAULT_CONTEXT_LINES: int = 2

# Atoms that terminate a line. "\r\n" is a single extended grapheme cluster.
LINE_BREAKS: frozenset[str] = frozenset({"\n", "\r\n", "\r"})
