"""Template Parser Example - A Small Real Grammar.

Parses a mustache-like template language:

    Hello {{ name }}!              reference
    {{ _ }}                        placeholder
    {{# items }}...{{/ items }}    section, may nest

Demonstrates:

1. Building a recursive grammar with defer()
2. Choosing between alternatives and naming them with label()
3. Reporting failures with line:column and source context
4. Structured diagnostics as JSON for tooling

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from glyphparse import (
    Err,
    Parser,
    bind,
    defer,
    drop,
    end,
    fail,
    fmap,
    label,
    many,
    not_followed_by,
    one_of,
    parse_text,
    skip,
    some,
    succeed,
)
from glyphparse.diagnostics import DiagnosticFormatter, OutputFormat
from glyphparse.text import (
    any_grapheme,
    grapheme,
    letter,
    literal,
    spaces,
    text_of,
)


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class Reference:
    name: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    pass


@dataclass(frozen=True, slots=True)
class Section:
    name: str
    body: list[Node]


type Node = Text | Reference | Placeholder | Section


def template() -> Parser[list[Node]]:
    """Grammar for a complete template."""
    opening = literal("{{")
    closing = label(skip(spaces(), literal("}}")), "closing braces")
    name = label(text_of(some(letter())), "name")

    nodes: Parser[list[Node]]
    body = defer(lambda: nodes)

    def section_rest(section_name: str) -> Parser[Node]:
        end_tag = drop(literal("{{/"), drop(spaces(), skip(name, closing)))

        def closed_by(closed: str) -> Parser[str]:
            if closed == section_name:
                return succeed(closed)
            return label(fail(), f"{{{{/ {section_name} }}}}")

        return bind(
            body,
            lambda children: fmap(
                bind(end_tag, closed_by), lambda _: Section(section_name, children)
            ),
        )

    section_open = drop(label(grapheme("#"), "section"), drop(spaces(), skip(name, closing)))
    section: Parser[Node] = bind(section_open, section_rest)
    placeholder: Parser[Node] = fmap(label(grapheme("_"), "placeholder"), lambda _: Placeholder())
    reference: Parser[Node] = fmap(name, Reference)
    value = skip(one_of([placeholder, reference]), closing)
    tag = drop(opening, drop(spaces(), one_of([section, value])))

    # "{{/" ends the enclosing section, so neither text nor a tag may start there
    text_grapheme = drop(not_followed_by(opening), any_grapheme())
    text: Parser[Node] = fmap(text_of(some(text_grapheme)), Text)
    element = one_of([text, drop(not_followed_by(literal("{{/")), tag)])

    nodes = many(element)
    return skip(nodes, end())


def show(source: str) -> None:
    """Parse ``source`` and print the nodes or the failure."""
    print(f"Source: {source!r}")
    result = parse_text(source, template())
    match result:
        case Err():
            print(result.format_with_context())
        case _:
            for node in result.unwrap():
                print(f"  {node}")
    print()


def example_1_nodes() -> None:
    """Parse a template into nodes."""
    print("=" * 60)
    print("Example 1: Parsing")
    print("=" * 60)

    show("Hello {{ name }}, you have {{_}} messages.")
    show("{{# items }}- {{ item }}\n{{/ items }}done")


def example_2_errors() -> None:
    """Failures carry position, found atom and merged expectations."""
    print("=" * 60)
    print("Example 2: Errors")
    print("=" * 60)

    show("first line\nHello {{ 42 }}\nlast line")
    show("Hello {{ name !")


def example_3_json() -> None:
    """Structured diagnostics for tooling."""
    print("=" * 60)
    print("Example 3: JSON Diagnostics")
    print("=" * 60)

    result = parse_text("Hello {{ 42 }}", template())
    if isinstance(result, Err):
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        print(formatter.format(result.to_diagnostic()))
    print()


def main() -> None:
    """Run all template examples."""
    example_1_nodes()
    example_2_errors()
    example_3_json()


if __name__ == "__main__":
    main()
