"""Reply and consumption algebra.

Every parser invocation produces an Outcome, which answers two
independent questions:

    Did the parser read at least one atom?   Consumed / Empty
    Did it produce a value?                  Success  / Failure

The first answer is known as soon as the first atom is accepted, long
before the final Reply is. Consumed therefore carries a Deferred reply
that is evaluated only when somebody needs it, while Empty carries its
Reply directly. Choice looks only at the tag, which is what lets it
commit to a branch without evaluating the rest of the branch.

Deferred replies form a small algebra (Ready, Chained) that force()
evaluates with an explicit continuation stack. Chains built by
long repetitions are unwound in a loop on the heap, never on the Python
call stack.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

from glyphparse.constants import END_OF_INPUT
from glyphparse.core.stream import Position, Stream

__all__ = [
    "Chained",
    "Consumed",
    "Deferred",
    "Empty",
    "Failure",
    "Message",
    "Outcome",
    "Ready",
    "Reply",
    "Success",
    "force",
]


def _ordered_union(*groups: Iterable[str]) -> tuple[str, ...]:
    # dict preserves insertion order; later duplicates are dropped
    return tuple(dict.fromkeys(label for group in groups for label in group))


@dataclass(frozen=True, slots=True)
class Message:
    """One parse error at one position.

    Attributes:
        position: Offset of the offending atom (stream length at end of input)
        found: Offending atom, END_OF_INPUT, or None when nothing was read
        expected: Labels of the alternatives tried here, in trial order
        eof: True when found describes the end of input rather than an atom
    """

    position: Position
    found: str | None = None
    expected: tuple[str, ...] = ()
    eof: bool = False

    @classmethod
    def end_of_input(cls, position: Position) -> Message:
        """Message for a parser that needed an atom at the end of the stream."""
        return cls(position, END_OF_INPUT, (), eof=True)

    def with_label(self, description: str) -> Message:
        """Return a copy with ``description`` prepended to expected."""
        return Message(
            self.position,
            self.found,
            _ordered_union((description,), self.expected),
            self.eof,
        )

    def merge(self, other: Message) -> Message:
        """Combine two empty failures from sibling alternatives.

        Messages at the same position keep both expectation lists,
        self's first. At different positions the farther one wins; that
        only happens once attempt() has turned a consumed failure into
        an empty one.
        """
        if other.position > self.position:
            return other
        if other.position < self.position:
            return self
        found, eof = (self.found, self.eof) if self.found is not None else (other.found, other.eof)
        return Message(
            self.position,
            found,
            _ordered_union(self.expected, other.expected),
            eof,
        )

    def describe(self) -> str:
        """Human-readable summary without location.

        Example:
            >>> Message(1, "z", ("l or k",)).describe()
            "unexpected 'z' (expected: 'l or k')"
        """
        if self.eof:
            text = f"unexpected {END_OF_INPUT}"
        elif self.found is not None:
            text = f"unexpected '{self.found}'"
        else:
            text = "parse failed"
        if self.expected:
            text += " (expected: " + ", ".join(f"'{e}'" for e in self.expected) + ")"
        return text


@dataclass(frozen=True, slots=True)
class Success[V]:
    """Parser produced ``value`` and left the input at ``stream``."""

    value: V
    stream: Stream


@dataclass(frozen=True, slots=True)
class Failure:
    """Parser failed; ``message`` says where and why."""

    message: Message


type Reply[V] = Success[V] | Failure


# ============================================================================
# DEFERRED REPLIES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Ready[V]:
    """Already evaluated reply."""

    reply: Reply[V]


@dataclass(frozen=True, slots=True)
class Chained[V]:
    """Force ``source``, then feed its reply to ``then``."""

    source: Deferred[Any]
    then: Callable[[Reply[Any]], Deferred[V]]


type Deferred[V] = Ready[V] | Chained[V]


def force[V](deferred: Deferred[V]) -> Reply[V]:
    """Evaluate a deferred reply.

    Runs as a loop over an explicit stack of pending continuations, so a
    chain of any length (e.g. ``some`` over a million atoms) evaluates in
    constant Python stack depth.
    """
    pending: list[Callable[[Reply[Any]], Deferred[Any]]] = []
    current: Deferred[Any] = deferred
    while True:
        match current:
            case Chained(source, then):
                pending.append(then)
                current = source
            case Ready(reply):
                if not pending:
                    return reply
                current = pending.pop()(reply)


# ============================================================================
# OUTCOMES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Consumed[V]:
    """At least one atom was read; the reply is evaluated on demand."""

    deferred: Deferred[V]

    consumed: ClassVar[bool] = True

    def force(self) -> Reply[V]:
        return force(self.deferred)

    def as_deferred(self) -> Deferred[V]:
        return self.deferred


@dataclass(frozen=True, slots=True)
class Empty[V]:
    """No atom was read; the reply is already known."""

    reply: Reply[V]

    consumed: ClassVar[bool] = False

    def force(self) -> Reply[V]:
        return self.reply

    def as_deferred(self) -> Deferred[V]:
        return Ready(self.reply)


type Outcome[V] = Consumed[V] | Empty[V]
