"""Literal matchers over a grapheme stream.

Matchers report only what they found; they attach no expectation
labels. Wrap them in label() to name them in error messages, so the
expected list contains exactly the names the grammar chose.
"""

from __future__ import annotations

from glyphparse.combinators import any_atom, fmap, sequence
from glyphparse.core.parser import Parser, satisfy, succeed
from glyphparse.text.graphemes import graphemes

__all__ = ["any_grapheme", "grapheme", "literal"]


def grapheme(expected: str) -> Parser[str]:
    """Match one grapheme equal to ``expected``.

    Raises:
        ValueError: If ``expected`` is not exactly one grapheme cluster
    """
    if len(graphemes(expected)) != 1:
        msg = f"Expected a single grapheme, got {expected!r}"
        raise ValueError(msg)
    return satisfy(lambda atom: atom == expected)


def literal(text: str) -> Parser[str]:
    """Match ``text`` grapheme by grapheme; the value is ``text``.

    Not atomic: a partial match has read input and is a consumed
    failure. Wrap in attempt() where a sibling alternative shares a
    prefix.
    """
    if not text:
        return succeed(text)
    return fmap(sequence([grapheme(g) for g in graphemes(text)]), lambda _: text)


def any_grapheme() -> Parser[str]:
    """Match any single grapheme."""
    return any_atom()
