"""Quickstart example for glyphparse.

Builds a few small grammars from the core combinators and shows how
success values and failures are reported.

Note: Examples print Err.format_error() for brevity. Tooling should use
Err.to_diagnostic() for structured output.
"""

from glyphparse import (
    Err,
    ParseFailedError,
    attempt,
    choice,
    end,
    fmap,
    label,
    parse_text,
    sequence,
    skip,
)
from glyphparse.combinators import some
from glyphparse.text import digit, grapheme, letter, lexeme, literal, sep_by, text_of

# Example 1: A fixed word with one choice
print("=" * 50)
print("Example 1: Choice and Labels")
print("=" * 50)

alex = fmap(
    skip(
        sequence(
            [
                grapheme("a"),
                label(choice(grapheme("l"), grapheme("k")), "l or k"),
                grapheme("e"),
                grapheme("x"),
            ]
        ),
        end(),
    ),
    "".join,
)

for text in ["alex", "akex", "azex"]:
    result = parse_text(text, alex)
    match result:
        case Err():
            print(f"{text!r}: {result.format_error()}")
        case _:
            print(f"{text!r}: {result.unwrap()!r}")
# Output:
# 'alex': 'alex'
# 'akex': 'akex'
# 'azex': 1:2: unexpected 'z' (expected: 'l or k')

# Example 2: Lists of numbers
print("\n" + "=" * 50)
print("Example 2: Separated Lists")
print("=" * 50)

number = label(fmap(lexeme(text_of(some(digit()))), int), "number")
comma = lexeme(grapheme(","))
numbers = skip(sep_by(number, comma), end())

print(parse_text("1, 22 ,333", numbers).unwrap())
# Output: [1, 22, 333]

# Example 3: Shared prefixes need attempt()
print("\n" + "=" * 50)
print("Example 3: Backtracking")
print("=" * 50)

keyword = choice(attempt(literal("let")), literal("lambda"))
print(parse_text("lambda", keyword).unwrap())
# Output: lambda

without_attempt = choice(literal("let"), literal("lambda"))
print(parse_text("lambda", without_attempt).format_error())  # type: ignore[union-attr]
# Output: 1:2: unexpected 'a'

# Example 4: Unwrapping a failure raises
print("\n" + "=" * 50)
print("Example 4: Errors as Exceptions")
print("=" * 50)

identifier = skip(text_of(some(letter())), end())
try:
    parse_text("naïve!", identifier).unwrap()
except ParseFailedError as e:
    print(e)
# Output:
# error[UNEXPECTED_ATOM]: unexpected '!'
#   --> line 1, column 6
