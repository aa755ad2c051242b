"""Core fxexpr functionality: IR, expression language, manifest loading."""

from . import ir
from .errors import (
    ExpressionParseError,
    FxExprError,
    InvalidIdentifierError,
    InvalidNumberError,
    InvalidVectorLiteralError,
    ManifestError,
    NestingTooDeepError,
    ParseErrorKind,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnknownFunctionError,
    UnmatchedParenthesisError,
)
from .manifest import ExprManifest, load_manifest

__all__ = [
    "ir",
    "FxExprError",
    "ExpressionParseError",
    "ParseErrorKind",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
    "InvalidNumberError",
    "InvalidIdentifierError",
    "UnmatchedParenthesisError",
    "UnknownFunctionError",
    "InvalidVectorLiteralError",
    "NestingTooDeepError",
    "ManifestError",
    "ExprManifest",
    "load_manifest",
]
