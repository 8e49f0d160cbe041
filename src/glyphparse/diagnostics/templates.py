"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


def _quote_all(labels: tuple[str, ...]) -> str:
    return ", ".join(f"'{label}'" for label in labels)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def unexpected_atom(
        found: str, expected: tuple[str, ...], span: SourceSpan | None = None
    ) -> Diagnostic:
        """A parser rejected the atom at the failure position.

        Args:
            found: The offending atom
            expected: Labels of the alternatives tried at this position
            span: Location of the offending atom

        Returns:
            Diagnostic for UNEXPECTED_ATOM
        """
        msg = f"unexpected '{found}'"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_ATOM,
            message=msg,
            span=span,
            found=found,
            expected=expected,
        )

    @staticmethod
    def unexpected_eof(
        expected: tuple[str, ...], span: SourceSpan | None = None
    ) -> Diagnostic:
        """A parser needed another atom at the end of the input.

        Args:
            expected: Labels of the alternatives tried at this position
            span: Location of the end of input

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message="unexpected end of input",
            span=span,
            hint="Input ended before the grammar was complete",
            expected=expected,
        )

    @staticmethod
    def parse_failed(
        expected: tuple[str, ...], span: SourceSpan | None = None
    ) -> Diagnostic:
        """Failure without an offending atom (fail(), rejected lookahead).

        Args:
            expected: Labels attached to the failing parser
            span: Location of the failure

        Returns:
            Diagnostic for PARSE_FAILED
        """
        msg = f"expected {_quote_all(expected)}" if expected else "parse failed"
        return Diagnostic(
            code=DiagnosticCode.PARSE_FAILED,
            message=msg,
            span=span,
            expected=expected,
        )

    @staticmethod
    def input_too_large(size: int, limit: int) -> Diagnostic:
        """Input rejected before parsing because it exceeds the limit.

        Args:
            size: Size of the rejected input
            limit: Configured maximum size

        Returns:
            Diagnostic for INPUT_TOO_LARGE
        """
        msg = f"Input size {size} exceeds maximum of {limit}"
        return Diagnostic(
            code=DiagnosticCode.INPUT_TOO_LARGE,
            message=msg,
            hint="Raise max_source_size, or pass max_source_size=0 to disable the check",
        )

    @staticmethod
    def nesting_too_deep(limit: int) -> Diagnostic:
        """Parsing exhausted the Python call stack.

        Args:
            limit: Recursion limit in effect (sys.getrecursionlimit())

        Returns:
            Diagnostic for NESTING_TOO_DEEP
        """
        msg = f"Grammar nesting exceeded the recursion limit of {limit}"
        return Diagnostic(
            code=DiagnosticCode.NESTING_TOO_DEEP,
            message=msg,
            hint="Keep recursion through defer() outside attempt() and not_followed_by()",
        )
