"""Immutable atom stream for backtracking parsers.

Implements the immutable cursor pattern over a sequence of atoms.
For text input an atom is one extended grapheme cluster; the core
never looks inside an atom.

Design Philosophy:
    - Stream is immutable (frozen dataclass)
    - Every advance() returns NEW stream, the original is untouched
    - EOF is a state (is_eof), not a return value
    - Offset is a plain integer (Position), O(1) to read
    - Line:column computed on-demand, only for error reporting

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from glyphparse.constants import LINE_BREAKS

__all__ = ["LineOffsetCache", "Position", "Stream"]

type Position = int


@dataclass(frozen=True, slots=True)
class Stream:
    """Immutable position in a finite sequence of atoms.

    Invariants:
        1. 0 <= pos <= len(atoms)
        2. advance() moves pos forward by exactly one atom
        3. atoms is shared, never copied, between advanced streams

    Example:
        >>> stream = Stream.of(["a", "b"])
        >>> atom, rest = stream.advance()
        >>> atom, rest.pos
        ('a', 1)
        >>> stream.pos  # Original unchanged (immutability)
        0
        >>> Stream.of([]).advance()
        Traceback (most recent call last):
        ...
        EOFError: Unexpected end of input at position 0
    """

    atoms: tuple[str, ...]
    pos: Position = 0

    def __post_init__(self) -> None:
        """Validate the offset against the atom count.

        Raises:
            ValueError: If pos is negative or beyond the end of atoms
        """
        if not 0 <= self.pos <= len(self.atoms):
            msg = f"Stream position must be within 0..{len(self.atoms)}, got {self.pos}"
            raise ValueError(msg)

    @classmethod
    def of(cls, atoms: Sequence[str]) -> "Stream":
        """Create a stream positioned at the first atom."""
        return cls(tuple(atoms), 0)

    @property
    def position(self) -> Position:
        """Current zero-based offset."""
        return self.pos

    @property
    def is_eof(self) -> bool:
        """True when every atom has been consumed."""
        return self.pos >= len(self.atoms)

    @property
    def current(self) -> str:
        """Atom at the current offset.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected end of input at position {self.pos}"
            raise EOFError(msg)
        return self.atoms[self.pos]

    def advance(self) -> tuple[str, "Stream"]:
        """Read one atom.

        Returns:
            The atom at the current offset and a NEW stream one atom further

        Raises:
            EOFError: If at end of input
        """
        atom = self.current
        return atom, Stream(self.atoms, self.pos + 1)


class LineOffsetCache:
    """Cached line offset computation over an atom sequence.

    Precomputes line start offsets in a single O(n) pass, then answers
    line:column lookups in O(log n) with binary search. Columns count
    atoms, so a multi-code-point grapheme advances the column by one.

    Example:
        >>> cache = LineOffsetCache(("a", "b", "\\n", "c"))
        >>> cache.get_line_col(0)
        (1, 1)
        >>> cache.get_line_col(3)
        (2, 1)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_atom_count", "_offsets")

    def __init__(self, atoms: Sequence[str]) -> None:
        offsets = [0]
        for i, atom in enumerate(atoms):
            if atom in LINE_BREAKS:
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._atom_count = len(atoms)

    @property
    def line_count(self) -> int:
        """Number of lines (a trailing line break opens an empty last line)."""
        return len(self._offsets)

    def line_start(self, line: int) -> int:
        """Atom offset where 1-indexed ``line`` begins."""
        return self._offsets[line - 1]

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get 1-indexed (line, column) for an atom offset.

        Out-of-range offsets are clamped to the sequence.
        """
        pos = max(0, min(pos, self._atom_count))

        # Line index = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)
