"""glyphparse - backtracking parser combinators over grapheme streams.

Build recursive-descent parsers by composing small parsers. Input is a
sequence of atoms; for text, each atom is one extended grapheme cluster.

Backtracking follows the Parsec model: a choice commits to the first
branch that reads input, attempt() undoes that commitment, and sibling
alternatives that fail without reading input merge their expectations
into one error message.

Public API:
    Constructors - succeed, fail, satisfy, defer
    Composition - bind (keep), fmap, drop, skip, sequence
    Control - choice, one_of, attempt, option, label
    Repetition/lookahead - many, some, not_followed_by, end, any_atom
    Execution - parse, parse_text, Ok, Err, ParseResult

Exceptions:
    GlyphParseError - Base exception class
    ParseFailedError - Err.unwrap() on a failed parse
    InputTooLargeError - Input exceeds max_source_size
    NestingTooDeepError - Nested attempt()/not_followed_by() exhausted the stack

Submodules:
    glyphparse.core - Stream, reply algebra, Parser and primitives
    glyphparse.combinators - Choice, repetition, lookahead, labels
    glyphparse.text - Grapheme segmentation, literals, character classes
    glyphparse.diagnostics - Diagnostic codes, templates and formatting
"""

from .combinators import (
    any_atom,
    attempt,
    choice,
    drop,
    end,
    fmap,
    label,
    many,
    not_followed_by,
    one_of,
    option,
    sequence,
    skip,
    some,
)
from .core import Message, Parser, Stream, bind, defer, fail, keep, satisfy, succeed
from .diagnostics import (
    GlyphParseError,
    InputTooLargeError,
    NestingTooDeepError,
    ParseFailedError,
)
from .runner import Err, Ok, ParseResult, parse
from .text import parse_text

# Version information - Auto-populated from package metadata
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("glyphparse")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Err",
    "GlyphParseError",
    "InputTooLargeError",
    "Message",
    "NestingTooDeepError",
    "Ok",
    "ParseFailedError",
    "ParseResult",
    "Parser",
    "Stream",
    "__version__",
    "any_atom",
    "attempt",
    "bind",
    "choice",
    "defer",
    "drop",
    "end",
    "fail",
    "fmap",
    "keep",
    "label",
    "many",
    "not_followed_by",
    "one_of",
    "option",
    "parse",
    "parse_text",
    "satisfy",
    "sequence",
    "skip",
    "some",
    "succeed",
]
