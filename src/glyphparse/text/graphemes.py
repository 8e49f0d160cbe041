"""Text to grapheme stream adaptation.

Parsers in glyphparse read atoms. For text, an atom is one extended
grapheme cluster (what a reader perceives as one character), so a
flag emoji, a letter with combining accents, or a CRLF pair each count
as one position in error messages.

Segmentation uses the ``regex`` package's ``\\X`` (Unicode UAX #29).
"""

from __future__ import annotations

import logging

import regex

from glyphparse.core.parser import Parser
from glyphparse.runner import ParseResult, check_size, parse

__all__ = ["graphemes", "parse_text"]

logger = logging.getLogger(__name__)

_GRAPHEME_CLUSTER = regex.compile(r"\X", regex.DOTALL)


def graphemes(text: str) -> tuple[str, ...]:
    """Split text into extended grapheme clusters.

    Example:
        >>> graphemes("ne\\u0301e")
        ('n', 'é', 'e')
        >>> graphemes("a\\r\\nb")
        ('a', '\\r\\n', 'b')
    """
    return tuple(_GRAPHEME_CLUSTER.findall(text))


def parse_text[V](
    text: str,
    parser: Parser[V],
    *,
    max_source_size: int | None = None,
) -> ParseResult[V]:
    """Segment ``text`` into graphemes and run ``parser`` over them.

    Args:
        text: Complete input text
        parser: Top-level parser
        max_source_size: Maximum text length in characters (default:
            MAX_SOURCE_SIZE, 0 disables the limit)

    Returns:
        Ok(value) on success, Err(message, atoms) on failure; positions
        in the message count graphemes

    Raises:
        InputTooLargeError: If the text exceeds max_source_size
    """
    check_size(len(text), max_source_size)
    atoms = graphemes(text)
    logger.debug("Segmented %d characters into %d graphemes", len(text), len(atoms))
    # Size already checked in characters; atoms can only be fewer.
    return parse(atoms, parser, max_source_size=0)
