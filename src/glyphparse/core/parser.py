"""Parser type, primitive constructors and sequencing.

A Parser is a pure value wrapping a function from Stream to Outcome.
Parsers hold no mutable state, so one parser value can be stored,
shared between grammars and run against any number of streams.

Primitives:
    succeed(v)       Empty(Success(v)) - never reads, never fails
    fail()           Empty(Failure)    - never reads, always fails
    satisfy(pred)    reads one atom; Consumed on match, Empty otherwise

Sequencing:
    bind(p, k)       run p, feed its value to k, run the parser k returns

bind never forces a Consumed reply. It returns a new Consumed whose
deferred reply chains the first parser's reply into the continuation,
so evaluation happens once, at the top, inside the force() loop.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from glyphparse.core.reply import (
    Chained,
    Consumed,
    Deferred,
    Empty,
    Failure,
    Message,
    Outcome,
    Ready,
    Reply,
    Success,
)
from glyphparse.core.stream import Stream

__all__ = ["Parser", "bind", "defer", "fail", "keep", "satisfy", "succeed"]


@dataclass(frozen=True, slots=True, repr=False)
class Parser[V]:
    """Composable parser producing a value of type V.

    Attributes:
        run: Function from the input stream to the parse outcome
        name: Short description used in repr() only
    """

    run: Callable[[Stream], Outcome[V]]
    name: str = "parser"

    def __call__(self, stream: Stream) -> Outcome[V]:
        return self.run(stream)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"


def succeed[V](value: V) -> Parser[V]:
    """Parser that returns ``value`` without reading input."""

    def run(stream: Stream) -> Outcome[V]:
        return Empty(Success(value, stream))

    return Parser(run, "succeed")


def fail() -> Parser[Any]:
    """Parser that fails without reading input and without expectations."""

    def run(stream: Stream) -> Outcome[Any]:
        return Empty(Failure(Message(stream.pos)))

    return Parser(run, "fail")


def satisfy(predicate: Callable[[str], bool]) -> Parser[str]:
    """Parser that reads one atom accepted by ``predicate``.

    Returns:
        Consumed(Success(atom)) when the predicate holds,
        Empty(Failure) reporting the rejected atom at its own offset,
        Empty(Failure) reporting end of input when the stream is exhausted
    """

    def run(stream: Stream) -> Outcome[str]:
        if stream.is_eof:
            return Empty(Failure(Message.end_of_input(stream.pos)))
        atom, rest = stream.advance()
        if predicate(atom):
            return Consumed(Ready(Success(atom, rest)))
        return Empty(Failure(Message(stream.pos, atom)))

    return Parser(run, "satisfy")


def bind[A, B](parser: Parser[A], continuation: Callable[[A], Parser[B]]) -> Parser[B]:
    """Run ``parser``, then the parser ``continuation`` builds from its value.

    Once ``parser`` has consumed input the whole sequence is Consumed,
    whatever the continuation does. This is what makes choice() commit
    to a branch that has started reading.
    """

    def then(reply: Reply[A]) -> Deferred[B]:
        match reply:
            case Failure():
                return Ready(reply)
            case Success(value, rest):
                return continuation(value)(rest).as_deferred()

    def run(stream: Stream) -> Outcome[B]:
        match parser(stream):
            case Empty(Failure() as failure):
                return Empty(failure)
            case Empty(Success(value, rest)):
                return continuation(value)(rest)
            case Consumed(deferred):
                return Consumed(Chained(deferred, then))

    return Parser(run, "bind")


keep = bind


def defer[V](factory: Callable[[], Parser[V]]) -> Parser[V]:
    """Parser built by ``factory`` on first use.

    Lets a grammar refer to itself:

        def expr() -> Parser[object]:
            return choice(number, surrounded_by(open_paren, defer(expr), close_paren))

    The factory runs at most once; the built parser is reused afterwards.
    """
    build = functools.cache(factory)

    def run(stream: Stream) -> Outcome[V]:
        return build()(stream)

    return Parser(run, "defer")
