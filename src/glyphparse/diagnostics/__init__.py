"""Diagnostic system for glyphparse errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    GlyphParseError,
    InputTooLargeError,
    NestingTooDeepError,
    ParseFailedError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "GlyphParseError",
    "InputTooLargeError",
    "NestingTooDeepError",
    "OutputFormat",
    "ParseFailedError",
    "SourceSpan",
]
