"""Derived parsers for text grammars.

Character classes, whitespace handling and bracketing helpers, all
built from the public core and combinator operations.

Character classes look at the Unicode general category of a cluster's
base code point, so "e" + U+0301 is a letter and "1" + U+20E3 (keycap
one) is a digit.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from typing import Any

from glyphparse.combinators import choice, drop, fmap, many, skip, some
from glyphparse.core.parser import Parser, bind, satisfy, succeed
from glyphparse.text.graphemes import graphemes

__all__ = [
    "alphanumeric",
    "digit",
    "letter",
    "lexeme",
    "none_of_graphemes",
    "one_of_graphemes",
    "sep_by",
    "sep_by1",
    "spaces",
    "spaces1",
    "surrounded_by",
    "text_of",
    "whitespace",
]


def _base_category(atom: str) -> str:
    return unicodedata.category(atom[0])


def _grapheme_set(chars: str | Iterable[str]) -> frozenset[str]:
    if isinstance(chars, str):
        return frozenset(graphemes(chars))
    return frozenset(chars)


# ============================================================================
# CHARACTER CLASSES
# ============================================================================


def one_of_graphemes(chars: str | Iterable[str]) -> Parser[str]:
    """Match one grapheme from ``chars`` (a string is split into graphemes)."""
    allowed = _grapheme_set(chars)
    return satisfy(lambda atom: atom in allowed)


def none_of_graphemes(chars: str | Iterable[str]) -> Parser[str]:
    """Match one grapheme NOT in ``chars``."""
    rejected = _grapheme_set(chars)
    return satisfy(lambda atom: atom not in rejected)


def letter() -> Parser[str]:
    """Match a grapheme whose base is a Unicode letter (category L*)."""
    return satisfy(lambda atom: _base_category(atom).startswith("L"))


def digit() -> Parser[str]:
    """Match a grapheme whose base is a decimal digit (category Nd)."""
    return satisfy(lambda atom: _base_category(atom) == "Nd")


def alphanumeric() -> Parser[str]:
    """Match a letter or decimal digit grapheme."""
    return satisfy(lambda atom: _base_category(atom)[0] == "L" or _base_category(atom) == "Nd")


def whitespace() -> Parser[str]:
    """Match one whitespace grapheme, including "\\r\\n"."""
    return satisfy(str.isspace)


# ============================================================================
# WHITESPACE AND TOKENS
# ============================================================================


def spaces() -> Parser[None]:
    """Skip zero or more whitespace graphemes."""
    return fmap(many(whitespace()), lambda _: None)


def spaces1() -> Parser[None]:
    """Skip one or more whitespace graphemes."""
    return fmap(some(whitespace()), lambda _: None)


def lexeme[V](parser: Parser[V]) -> Parser[V]:
    """``parser`` followed by optional whitespace."""
    return skip(parser, spaces())


def text_of(parser: Parser[list[str]]) -> Parser[str]:
    """Join the graphemes collected by ``parser`` into one string."""
    return fmap(parser, "".join)


# ============================================================================
# BRACKETING AND SEPARATORS
# ============================================================================


def surrounded_by[V](open_: Parser[Any], parser: Parser[V], close: Parser[Any]) -> Parser[V]:
    """``open_``, then ``parser``, then ``close``; keeps the value of ``parser``."""
    return drop(open_, skip(parser, close))


def sep_by1[V](parser: Parser[V], separator: Parser[Any]) -> Parser[list[V]]:
    """One or more ``parser`` separated by ``separator``."""
    return bind(
        parser,
        lambda first: fmap(many(drop(separator, parser)), lambda rest: [first, *rest]),
    )


def sep_by[V](parser: Parser[V], separator: Parser[Any]) -> Parser[list[V]]:
    """Zero or more ``parser`` separated by ``separator``."""
    return choice(sep_by1(parser, separator), succeed([]))
