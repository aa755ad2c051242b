"""
fxexpr - typed expression language for particle-effect parameters.

Tokenizer, parser, type inference and canonical printer for the small
DSL used inside effect-parameter fields.

Usage:
    from fxexpr import parse_expr, get_result_type, ReturnType

    expr = parse_expr("attr(position) + vec3(0.0, 1.0, 0.0) * time")
    str(expr)
    # 'attr(position) + vec3(0.0, 1.0, 0.0) * time'
    get_result_type(expr, {"position": ReturnType.VEC3}, {})
    # ReturnType.VEC3
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import ExpressionParseError, FxExprError, ManifestError, ParseErrorKind
from .core.expression_lang import get_result_type, parse_expr, to_string, tokenize
from .core.ir import Expr, ReturnType

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Expr",
    "ReturnType",
    "parse_expr",
    "to_string",
    "get_result_type",
    "tokenize",
    "FxExprError",
    "ExpressionParseError",
    "ParseErrorKind",
    "ManifestError",
]
