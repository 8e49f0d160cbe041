"""Text support: grapheme streams, literal matchers and derived parsers.

Submodules:
    graphemes   graphemes(), parse_text()
    matchers    grapheme(), literal(), any_grapheme()
    library     character classes, whitespace, bracketing, separators
"""

from .graphemes import graphemes, parse_text
from .library import (
    alphanumeric,
    digit,
    letter,
    lexeme,
    none_of_graphemes,
    one_of_graphemes,
    sep_by,
    sep_by1,
    spaces,
    spaces1,
    surrounded_by,
    text_of,
    whitespace,
)
from .matchers import any_grapheme, grapheme, literal

__all__ = [
    "alphanumeric",
    "any_grapheme",
    "digit",
    "grapheme",
    "graphemes",
    "letter",
    "lexeme",
    "literal",
    "none_of_graphemes",
    "one_of_graphemes",
    "parse_text",
    "sep_by",
    "sep_by1",
    "spaces",
    "spaces1",
    "surrounded_by",
    "text_of",
    "whitespace",
]
