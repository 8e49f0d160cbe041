"""Core parsing model: stream, reply algebra and the parser monad.

Layers, leaves first:
    stream   Immutable atom stream and line:column lookup
    reply    Success/Failure x Consumed/Empty, deferred replies, force()
    parser   Parser type, succeed/fail/satisfy, bind/keep, defer

Python 3.13+. Zero external dependencies.
"""

from .parser import Parser, bind, defer, fail, keep, satisfy, succeed
from .reply import (
    Consumed,
    Empty,
    Failure,
    Message,
    Outcome,
    Reply,
    Success,
    force,
)
from .stream import LineOffsetCache, Position, Stream

__all__ = [
    "Consumed",
    "Empty",
    "Failure",
    "LineOffsetCache",
    "Message",
    "Outcome",
    "Parser",
    "Position",
    "Reply",
    "Stream",
    "Success",
    "bind",
    "defer",
    "fail",
    "force",
    "keep",
    "satisfy",
    "succeed",
]
