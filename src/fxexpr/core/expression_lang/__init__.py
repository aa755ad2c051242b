"""
fxexpr expression language.

Tokenizer, parser, type inference and canonical printer, plus the
highlighting and completion helpers used by expression input fields.

Usage:
    from fxexpr.core.expression_lang import parse_expr, get_result_type

    expr = parse_expr("norm(attr(velocity)) * prop(drag)")
    get_result_type(expr, {"velocity": ReturnType.VEC2}, {"drag": ReturnType.FLOAT})
    # ReturnType.FLOAT
"""

from fxexpr.core.expression_lang.completions import CompletionItem, CompletionKind, get_completions
from fxexpr.core.expression_lang.highlight import (
    HighlightSpan,
    SyntaxHighlight,
    find_matching_paren,
    highlight_spans,
)
from fxexpr.core.expression_lang.parser import parse_expr
from fxexpr.core.expression_lang.printer import to_string
from fxexpr.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from fxexpr.core.expression_lang.type_checker import get_result_type

__all__ = [
    "CompletionItem",
    "CompletionKind",
    "HighlightSpan",
    "SyntaxHighlight",
    "Token",
    "TokenKind",
    "find_matching_paren",
    "get_completions",
    "get_result_type",
    "highlight_spans",
    "parse_expr",
    "to_string",
    "tokenize",
]
