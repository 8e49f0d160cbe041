"""Tests for the immutable atom stream and line offset cache."""

from __future__ import annotations

import pytest

from glyphparse.core.stream import LineOffsetCache, Stream

# ============================================================================
# STREAM BASICS
# ============================================================================


class TestStreamBasic:
    """Test stream construction and invariants."""

    def test_of_starts_at_zero(self) -> None:
        """Stream.of() positions at the first atom."""
        stream = Stream.of(["a", "b"])

        assert stream.atoms == ("a", "b")
        assert stream.pos == 0
        assert stream.position == 0

    def test_of_accepts_any_sequence(self) -> None:
        """A str is a sequence of one-character atoms."""
        assert Stream.of("ab").atoms == ("a", "b")

    def test_stream_immutability(self) -> None:
        """Stream is immutable (frozen dataclass)."""
        stream = Stream.of("abc")

        with pytest.raises(AttributeError):
            stream.pos = 2  # type: ignore[misc]

    def test_negative_position_rejected(self) -> None:
        """Offsets below zero are invalid."""
        with pytest.raises(ValueError, match="within 0..3"):
            Stream(("a", "b", "c"), -1)

    def test_position_beyond_end_rejected(self) -> None:
        """Offsets past the atom count are invalid."""
        with pytest.raises(ValueError, match="got 4"):
            Stream(("a", "b", "c"), 4)

    def test_position_at_end_allowed(self) -> None:
        """Offset equal to the length is the end-of-input state."""
        stream = Stream(("a",), 1)

        assert stream.is_eof


# ============================================================================
# ADVANCING
# ============================================================================


class TestStreamAdvance:
    """Test reading atoms."""

    def test_advance_returns_atom_and_new_stream(self) -> None:
        """advance() yields the current atom and a stream one further."""
        stream = Stream.of(["x", "y"])

        atom, rest = stream.advance()

        assert atom == "x"
        assert rest.pos == 1
        assert stream.pos == 0

    def test_advance_shares_atoms(self) -> None:
        """Advanced streams reference the same atom tuple."""
        stream = Stream.of(["x", "y"])

        _, rest = stream.advance()

        assert rest.atoms is stream.atoms

    def test_advance_at_end_raises(self) -> None:
        """advance() at end of input raises EOFError."""
        with pytest.raises(EOFError, match="Unexpected end of input at position 0"):
            Stream.of([]).advance()

    def test_current_at_end_raises(self) -> None:
        """current at end of input raises EOFError."""
        with pytest.raises(EOFError):
            _ = Stream(("a",), 1).current

    def test_advance_to_end(self) -> None:
        """Advancing once per atom reaches end of input."""
        stream = Stream.of("abc")
        seen = []
        while not stream.is_eof:
            atom, stream = stream.advance()
            seen.append(atom)

        assert seen == ["a", "b", "c"]
        assert stream.pos == 3

    def test_equal_streams_compare_equal(self) -> None:
        """Streams are values: same atoms and offset are equal."""
        assert Stream.of("ab").advance()[1] == Stream(("a", "b"), 1)


# ============================================================================
# LINE OFFSET CACHE
# ============================================================================


class TestLineOffsetCache:
    """Test line:column lookups over atoms."""

    def test_single_line(self) -> None:
        """Columns are 1-indexed atom counts."""
        cache = LineOffsetCache(tuple("hello"))

        assert cache.get_line_col(0) == (1, 1)
        assert cache.get_line_col(4) == (1, 5)
        assert cache.line_count == 1

    def test_lf_line_breaks(self) -> None:
        """LF starts a new line."""
        cache = LineOffsetCache(("a", "\n", "b", "c"))

        assert cache.get_line_col(2) == (2, 1)
        assert cache.get_line_col(3) == (2, 2)
        assert cache.line_start(2) == 2

    def test_crlf_cluster_is_one_break(self) -> None:
        """"\\r\\n" as one atom counts as one line break."""
        cache = LineOffsetCache(("a", "\r\n", "b"))

        assert cache.line_count == 2
        assert cache.get_line_col(2) == (2, 1)

    def test_bare_cr_breaks_line(self) -> None:
        """A lone CR atom also ends a line."""
        cache = LineOffsetCache(("a", "\r", "b"))

        assert cache.get_line_col(2) == (2, 1)

    def test_trailing_break_opens_empty_line(self) -> None:
        """The end-of-input offset after a trailing break is on a new line."""
        cache = LineOffsetCache(("a", "\n"))

        assert cache.line_count == 2
        assert cache.get_line_col(2) == (2, 1)

    def test_out_of_range_positions_clamped(self) -> None:
        """Offsets outside the sequence are clamped."""
        cache = LineOffsetCache(("a", "b"))

        assert cache.get_line_col(-5) == (1, 1)
        assert cache.get_line_col(99) == (1, 3)

    def test_empty_sequence(self) -> None:
        """Empty input has one empty line."""
        cache = LineOffsetCache(())

        assert cache.get_line_col(0) == (1, 1)
        assert cache.line_count == 1
