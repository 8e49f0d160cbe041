"""Combinators built on the core parser operations.

Backtracking model:
    choice() tries its second branch only when the first failed WITHOUT
    reading input. A branch that has read even one atom is committed:
    its failure is the failure of the whole choice. attempt() removes
    that commitment from a failure so an enclosing choice may still try
    a sibling.

Error model:
    Empty failures of sibling alternatives at the same position are
    merged: their expected labels are concatenated in trial order.
    label() names what a parser was looking for, but only when it failed
    without reading input; past the first atom the inner message is more
    precise than any label.

Repetition hazard:
    some()/many() over a parser that can succeed without reading input
    never terminate. This is a grammar error on the caller's side and
    is not detected.

Stack hazard:
    Repetition and recursion through defer() run in constant Python
    stack depth. attempt() and not_followed_by() do not: each must
    see the complete reply of its argument before it can return, so it
    evaluates that argument on the call stack. A recursive grammar that
    re-enters attempt() on every nesting level therefore uses stack in
    proportion to the nesting of the input, roughly ten frames per level.
    At the default recursion limit of 1000 that allows about a hundred
    levels; beyond it parse() raises NestingTooDeepError. Keep attempt()
    around short, non-recursive prefixes (a keyword, an opening token) and
    let the recursive part run outside it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from glyphparse.core.parser import Parser, bind, defer, satisfy, succeed
from glyphparse.core.reply import (
    Consumed,
    Empty,
    Failure,
    Message,
    Outcome,
    Ready,
    Success,
    force,
)
from glyphparse.core.stream import Stream

__all__ = [
    "any_atom",
    "attempt",
    "choice",
    "drop",
    "end",
    "fmap",
    "label",
    "many",
    "not_followed_by",
    "one_of",
    "option",
    "sequence",
    "skip",
    "some",
]

# Persistent list used while repeating: (head, tail) pairs ending in None.
# Prepending is O(1), so repetition stays linear; converted once at the end.
type _Cells[V] = tuple[V, _Cells[V]] | None


def _to_list[V](cells: _Cells[V]) -> list[V]:
    items: list[V] = []
    while cells is not None:
        head, cells = cells
        items.append(head)
    return items


def _cons[V](head: Parser[V], tail: Parser[_Cells[V]]) -> Parser[_Cells[V]]:
    return bind(head, lambda first: bind(tail, lambda rest: succeed((first, rest))))


# ============================================================================
# CHOICE AND BACKTRACKING
# ============================================================================


def choice[V](first: Parser[V], second: Parser[V]) -> Parser[V]:
    """Try ``first``; fall back to ``second`` only if ``first`` read nothing.

    - first Consumed (success or failure): returned as-is, second never runs
    - first Empty success: second runs; a Consumed second wins, otherwise
      first's success is kept
    - first Empty failure: second's outcome, with messages merged when
      second also fails without reading
    """

    def run(stream: Stream) -> Outcome[V]:
        outcome = first(stream)
        match outcome:
            case Consumed():
                return outcome
            case Empty(Success()):
                alternative = second(stream)
                return alternative if alternative.consumed else outcome
            case Empty(Failure(message)):
                alternative = second(stream)
                match alternative:
                    case Empty(Failure(other)):
                        return Empty(Failure(message.merge(other)))
                    case _:
                        return alternative

    return Parser(run, "choice")


def one_of[V](alternatives: Iterable[Parser[V]]) -> Parser[V]:
    """Choice over a list, with the semantics of a right fold of choice().

    Alternatives are tried left to right:
    - the first Consumed outcome (success or failure) is returned at once
    - otherwise the leftmost empty success is returned
    - otherwise all empty failures are merged in trial order

    Every alternative runs until one consumes, even after an empty
    success, exactly as nested choice() calls would. An empty list
    behaves like fail().
    """
    parsers = tuple(alternatives)

    def run(stream: Stream) -> Outcome[V]:
        success: Outcome[V] | None = None
        merged: Message | None = None
        for parser in parsers:
            outcome = parser(stream)
            match outcome:
                case Consumed():
                    return outcome
                case Empty(Success()):
                    if success is None:
                        success = outcome
                case Empty(Failure(message)):
                    merged = message if merged is None else merged.merge(message)
        if success is not None:
            return success
        return Empty(Failure(merged if merged is not None else Message(stream.pos)))

    return Parser(run, "one_of")


def attempt[V](parser: Parser[V]) -> Parser[V]:
    """Run ``parser``; turn a consumed failure into an empty one.

    The message is kept unchanged. Successes, consumed or not, pass
    through. Deciding requires the reply, so a Consumed outcome is
    forced here rather than at the top. That forcing happens on the
    Python call stack; recursion through defer() underneath attempt()
    is limited in depth, see "Stack hazard" above.
    """

    def run(stream: Stream) -> Outcome[V]:
        outcome = parser(stream)
        match outcome:
            case Empty():
                return outcome
            case Consumed(deferred):
                reply = force(deferred)
                match reply:
                    case Failure():
                        return Empty(reply)
                    case Success():
                        return Consumed(Ready(reply))

    return Parser(run, "attempt")


def label[V](parser: Parser[V], description: str) -> Parser[V]:
    """Name what ``parser`` expects.

    On an empty failure ``description`` is prepended to the expected
    labels; consumed failures and all successes pass through untouched.
    """

    def run(stream: Stream) -> Outcome[V]:
        outcome = parser(stream)
        match outcome:
            case Empty(Failure(message)):
                return Empty(Failure(message.with_label(description)))
            case _:
                return outcome

    return Parser(run, f"label({description!r})")


def option[V, D](parser: Parser[V], default: D) -> Parser[V | D]:
    """``parser``, or ``default`` when it fails without reading input."""
    return choice(parser, succeed(default))


# ============================================================================
# SEQUENCING HELPERS
# ============================================================================


def fmap[A, B](parser: Parser[A], function: Callable[[A], B]) -> Parser[B]:
    """Apply ``function`` to the value of ``parser``."""
    return bind(parser, lambda value: succeed(function(value)))


def drop[V](parser: Parser[Any], then: Parser[V]) -> Parser[V]:
    """Run ``parser`` then ``then``, keeping only the value of ``then``."""
    return bind(parser, lambda _: then)


def skip[V](parser: Parser[V], after: Parser[Any]) -> Parser[V]:
    """Run ``parser`` then ``after``, keeping only the value of ``parser``."""
    return bind(parser, lambda value: bind(after, lambda _: succeed(value)))


def sequence[V](parsers: Iterable[Parser[V]]) -> Parser[list[V]]:
    """Run ``parsers`` in order and collect their values."""
    collected: Parser[_Cells[V]] = succeed(None)
    for parser in reversed(tuple(parsers)):
        collected = _cons(parser, collected)
    return fmap(collected, _to_list)


# ============================================================================
# REPETITION AND LOOKAHEAD
# ============================================================================


def some[V](parser: Parser[V]) -> Parser[list[V]]:
    """One or more repetitions of ``parser``.

    Equivalent to ``bind(p, first -> bind(many(p), rest -> [first, *rest]))``.
    The repetition refers to itself through defer(), so the grammar is
    built once regardless of how many items are parsed.

    ``parser`` must read at least one atom whenever it succeeds.
    """
    repeated: Parser[_Cells[V]]
    rest = choice(defer(lambda: repeated), succeed(None))
    repeated = _cons(parser, rest)
    return fmap(repeated, _to_list)


def many[V](parser: Parser[V]) -> Parser[list[V]]:
    """Zero or more repetitions of ``parser``.

    Same termination requirement as some().
    """
    return choice(some(parser), succeed([]))


def not_followed_by(parser: Parser[Any]) -> Parser[None]:
    """Succeed without reading input iff ``parser`` fails here.

    ``parser`` runs under attempt(), so a partial match never commits.
    When it succeeds, the failure reports the atom at the starting
    position and no expectations; wrap in label() to name them.
    Like attempt(), it evaluates ``parser`` on the call stack.
    """
    probe = attempt(parser)

    def run(stream: Stream) -> Outcome[None]:
        match probe(stream).force():
            case Success():
                if stream.is_eof:
                    return Empty(Failure(Message.end_of_input(stream.pos)))
                return Empty(Failure(Message(stream.pos, stream.current)))
            case Failure():
                return Empty(Success(None, stream))

    return Parser(run, "not_followed_by")


def any_atom() -> Parser[str]:
    """Read any single atom; fails only at end of input."""
    return satisfy(lambda _: True)


def end() -> Parser[None]:
    """Succeed only at the end of input."""
    return not_followed_by(any_atom())

