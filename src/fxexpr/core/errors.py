"""
Error types for fxexpr parsing and configuration.
"""

from __future__ import annotations

from enum import StrEnum


class FxExprError(Exception):
    """Base exception for all fxexpr errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseErrorKind(StrEnum):
    """The closed set of parse failures."""

    UNEXPECTED_TOKEN = "unexpected_token"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    INVALID_NUMBER = "invalid_number"
    INVALID_IDENTIFIER = "invalid_identifier"
    UNMATCHED_PARENTHESIS = "unmatched_parenthesis"
    UNKNOWN_FUNCTION = "unknown_function"
    INVALID_VECTOR_LITERAL = "invalid_vector_literal"
    NESTING_TOO_DEEP = "nesting_too_deep"


# Grouping used by the editor to pick an error-panel theme.
_CATEGORIES: dict[ParseErrorKind, str] = {
    ParseErrorKind.UNEXPECTED_TOKEN: "syntax",
    ParseErrorKind.UNEXPECTED_END_OF_INPUT: "syntax",
    ParseErrorKind.UNMATCHED_PARENTHESIS: "syntax",
    ParseErrorKind.NESTING_TOO_DEEP: "syntax",
    ParseErrorKind.INVALID_NUMBER: "value",
    ParseErrorKind.INVALID_IDENTIFIER: "value",
    ParseErrorKind.UNKNOWN_FUNCTION: "reference",
    ParseErrorKind.INVALID_VECTOR_LITERAL: "vector",
}


class ExpressionParseError(FxExprError):
    """
    Raised when expression text cannot be parsed.

    Subclasses fix ``kind``; ``text`` carries the offending token text or
    function name (empty when there is none) and ``pos`` the offset in the
    source where the problem was found.
    """

    kind: ParseErrorKind

    def __init__(self, text: str = "", pos: int = 0) -> None:
        self.text = text
        self.pos = pos
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        raise NotImplementedError

    @property
    def category(self) -> str:
        return _CATEGORIES[self.kind]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpressionParseError):
            return NotImplemented
        return (self.kind, self.text, self.pos) == (other.kind, other.text, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.pos))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text!r}, pos={self.pos})"


class UnexpectedTokenError(ExpressionParseError):
    kind = ParseErrorKind.UNEXPECTED_TOKEN

    def _format_message(self) -> str:
        return f"Unexpected token: '{self.text}'"


class UnexpectedEndOfInputError(ExpressionParseError):
    kind = ParseErrorKind.UNEXPECTED_END_OF_INPUT

    def _format_message(self) -> str:
        return "Unexpected end of input"


class InvalidNumberError(ExpressionParseError):
    kind = ParseErrorKind.INVALID_NUMBER

    def _format_message(self) -> str:
        return f"Invalid number: '{self.text}'"


class InvalidIdentifierError(ExpressionParseError):
    kind = ParseErrorKind.INVALID_IDENTIFIER

    def _format_message(self) -> str:
        return f"Invalid identifier: '{self.text}'"


class UnmatchedParenthesisError(ExpressionParseError):
    kind = ParseErrorKind.UNMATCHED_PARENTHESIS

    def _format_message(self) -> str:
        return "Unmatched parenthesis"


class UnknownFunctionError(ExpressionParseError):
    kind = ParseErrorKind.UNKNOWN_FUNCTION

    def _format_message(self) -> str:
        return f"Unknown function: '{self.text}'"


class InvalidVectorLiteralError(ExpressionParseError):
    kind = ParseErrorKind.INVALID_VECTOR_LITERAL

    def _format_message(self) -> str:
        return "Invalid vector literal"


class NestingTooDeepError(ExpressionParseError):
    kind = ParseErrorKind.NESTING_TOO_DEEP

    def _format_message(self) -> str:
        return "Expression nested too deeply"


class ManifestError(FxExprError):
    """
    Raised when an ``fxexpr.toml`` manifest cannot be used.

    Examples:
    - Malformed TOML
    - A type name that is not float, integer, vec2 or vec3
    - ``attributes`` or ``properties`` that is not a table
    """

    pass
