"""Tests for the reply algebra: messages, deferred replies and outcomes."""

from __future__ import annotations

import pytest

from glyphparse.constants import END_OF_INPUT
from glyphparse.core.reply import (
    Chained,
    Consumed,
    Empty,
    Failure,
    Message,
    Ready,
    Reply,
    Success,
    force,
)
from glyphparse.core.stream import Stream

# ============================================================================
# MESSAGE
# ============================================================================


class TestMessage:
    """Test message construction, labels and merging."""

    def test_defaults(self) -> None:
        """A bare message has no found atom and no expectations."""
        message = Message(3)

        assert message.found is None
        assert message.expected == ()
        assert not message.eof

    def test_end_of_input(self) -> None:
        """end_of_input() describes the end of the stream."""
        message = Message.end_of_input(5)

        assert message == Message(5, END_OF_INPUT, (), eof=True)

    def test_with_label_prepends(self) -> None:
        """Labels are prepended, not appended."""
        message = Message(0, "x", ("inner",)).with_label("outer")

        assert message.expected == ("outer", "inner")

    def test_with_label_keeps_position_and_found(self) -> None:
        """Labelling changes only expected."""
        message = Message.end_of_input(2).with_label("digit")

        assert message.position == 2
        assert message.eof
        assert message.found == END_OF_INPUT

    def test_with_label_drops_duplicate(self) -> None:
        """expected is an ordered set."""
        message = Message(0, "x", ("a", "b")).with_label("b")

        assert message.expected == ("b", "a")

    def test_merge_same_position_concatenates(self) -> None:
        """Same-position messages keep both expectation lists, in order."""
        merged = Message(1, "z", ("A",)).merge(Message(1, "z", ("B",)))

        assert merged == Message(1, "z", ("A", "B"))

    def test_merge_drops_repeated_labels(self) -> None:
        """A label tried twice appears once, at its first position."""
        merged = Message(0, "q", ("A", "B")).merge(Message(0, "q", ("B", "C")))

        assert merged.expected == ("A", "B", "C")

    def test_merge_farther_position_wins(self) -> None:
        """Messages at different positions are not combined."""
        near = Message(1, "a", ("near",))
        far = Message(4, "b", ("far",))

        assert near.merge(far) is far
        assert far.merge(near) is far

    def test_merge_fills_missing_found(self) -> None:
        """fail() has no found atom; a sibling's found is used."""
        merged = Message(0).merge(Message(0, "x", ("X",)))

        assert merged.found == "x"
        assert merged.expected == ("X",)

    def test_merge_keeps_eof_with_found(self) -> None:
        """eof travels with the found description it belongs to."""
        merged = Message(2).merge(Message.end_of_input(2))

        assert merged.eof
        assert merged.found == END_OF_INPUT

    @pytest.mark.parametrize(
        ("message", "text"),
        [
            (Message(1, "z", ("l or k",)), "unexpected 'z' (expected: 'l or k')"),
            (Message(1, "z"), "unexpected 'z'"),
            (Message.end_of_input(3), "unexpected end of input"),
            (Message(0), "parse failed"),
            (Message(0, None, ("A", "B")), "parse failed (expected: 'A', 'B')"),
        ],
    )
    def test_describe(self, message: Message, text: str) -> None:
        """describe() renders found and expected without location."""
        assert message.describe() == text


# ============================================================================
# DEFERRED REPLIES
# ============================================================================


def _success(value: object) -> Reply[object]:
    return Success(value, Stream.of([]))


class TestForce:
    """Test evaluation of deferred replies."""

    def test_ready(self) -> None:
        """Ready holds an evaluated reply."""
        reply = _success(1)

        assert force(Ready(reply)) is reply

    def test_continuation_runs_when_forced(self) -> None:
        """Building a chain runs nothing; force() runs the continuation once."""
        calls: list[int] = []

        def then(reply: Reply[object]) -> Ready[object]:
            calls.append(1)
            return Ready(_success("late"))

        deferred = Chained(Ready(_success("early")), then)
        assert calls == []

        assert force(deferred) == _success("late")
        assert calls == [1]

    def test_chained_feeds_reply_to_continuation(self) -> None:
        """Chained passes the forced source reply to ``then``."""

        def then(reply: Reply[object]) -> Ready[object]:
            assert isinstance(reply, Success)
            return Ready(_success(reply.value * 2))  # type: ignore[operator]

        assert force(Chained(Ready(_success(21)), then)) == _success(42)

    def test_nested_chains_evaluate_inner_first(self) -> None:
        """Left-nested chains apply continuations innermost first."""
        order: list[str] = []

        def step(name: str):  # type: ignore[no-untyped-def]
            def then(reply: Reply[object]) -> Ready[object]:
                order.append(name)
                return Ready(reply)

            return then

        deferred = Chained(Chained(Ready(_success(0)), step("inner")), step("outer"))
        force(deferred)

        assert order == ["inner", "outer"]

    def test_failure_passes_through_continuations(self) -> None:
        """Continuations decide what to do with failures; identity keeps them."""
        failure = Failure(Message(0))

        assert force(Chained(Ready(failure), Ready)) == failure

    def test_deep_chain_does_not_recurse(self) -> None:
        """A chain far deeper than the recursion limit evaluates in a loop."""
        deferred: Chained[object] | Ready[object] = Ready(_success(0))
        for _ in range(100_000):

            def then(reply: Reply[object]) -> Ready[object]:
                assert isinstance(reply, Success)
                return Ready(_success(reply.value + 1))  # type: ignore[operator]

            deferred = Chained(deferred, then)

        assert force(deferred) == _success(100_000)

    def test_continuations_returning_chains(self) -> None:
        """Continuations that return further chains are unwound iteratively."""

        def countdown(n: int) -> Chained[object] | Ready[object]:
            if n == 0:
                return Ready(_success("done"))
            return Chained(Ready(_success(n)), lambda _: countdown(n - 1))

        assert force(countdown(50_000)) == _success("done")


# ============================================================================
# OUTCOMES
# ============================================================================


class TestOutcomes:
    """Test Consumed and Empty."""

    def test_consumed_flag(self) -> None:
        """The consumed tag is a class-level property of the outcome kind."""
        assert Consumed(Ready(_success(1))).consumed
        assert not Empty(_success(1)).consumed

    def test_consumed_force(self) -> None:
        """Consumed.force() evaluates the deferred reply."""
        outcome = Consumed(Chained(Ready(_success(6)), lambda _: Ready(_success(7))))

        assert outcome.force() == _success(7)

    def test_empty_force_returns_reply(self) -> None:
        """Empty already holds its reply."""
        reply = _success(7)

        assert Empty(reply).force() is reply

    def test_as_deferred(self) -> None:
        """Both outcome kinds convert to a deferred reply."""
        deferred = Ready(_success(1))

        assert Consumed(deferred).as_deferred() is deferred
        assert Empty(_success(1)).as_deferred() == Ready(_success(1))
