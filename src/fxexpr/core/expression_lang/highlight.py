"""
Syntax highlighting support for expression input fields.

Classifies tokens into highlight categories and finds the parenthesis
pair under the editor cursor. Colors are the editor's business; this
module only says what each span is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from fxexpr.core.expression_lang.tokenizer import Token, TokenKind, tokenize


class SyntaxHighlight(StrEnum):
    """Highlight categories."""

    NUMBER = "number"
    STRING = "string"
    FUNCTION = "function"
    OPERATOR = "operator"
    IDENTIFIER = "identifier"
    BUILTIN = "builtin"
    PUNCTUATION = "punctuation"
    ERROR = "error"


_CATEGORY_BY_KIND: dict[TokenKind, SyntaxHighlight] = {
    TokenKind.INTEGER: SyntaxHighlight.NUMBER,
    TokenKind.FLOAT: SyntaxHighlight.NUMBER,
    TokenKind.STRING: SyntaxHighlight.STRING,
    TokenKind.FUNCTION: SyntaxHighlight.FUNCTION,
    TokenKind.BUILTIN: SyntaxHighlight.BUILTIN,
    TokenKind.UNARY_OP: SyntaxHighlight.OPERATOR,
    TokenKind.BINARY_OP: SyntaxHighlight.OPERATOR,
    TokenKind.IDENTIFIER: SyntaxHighlight.IDENTIFIER,
    TokenKind.ATTRIBUTE: SyntaxHighlight.IDENTIFIER,
    TokenKind.PROPERTY: SyntaxHighlight.IDENTIFIER,
    TokenKind.LPAREN: SyntaxHighlight.PUNCTUATION,
    TokenKind.RPAREN: SyntaxHighlight.PUNCTUATION,
    TokenKind.COMMA: SyntaxHighlight.PUNCTUATION,
    TokenKind.DOT: SyntaxHighlight.PUNCTUATION,
    TokenKind.ERROR: SyntaxHighlight.ERROR,
}


def classify(token: Token) -> SyntaxHighlight | None:
    """Highlight category of a token; whitespace has none."""
    return _CATEGORY_BY_KIND.get(token.kind)


@dataclass(frozen=True)
class HighlightSpan:
    """A highlighted region ``[start, end)`` of the source."""

    start: int
    end: int
    category: SyntaxHighlight
    matched: bool = False  # one of the parentheses under the cursor


def highlight_spans(
    source: str,
    matching_parens: tuple[int, int] | None = None,
) -> list[HighlightSpan]:
    """Highlight spans for every non-whitespace token in ``source``.

    ``matching_parens`` is an (open, close) offset pair, as returned by
    ``find_matching_paren``; those two parentheses are flagged ``matched``.
    """
    spans: list[HighlightSpan] = []
    for token in tokenize(source):
        category = classify(token)
        if category is None:
            continue
        matched = False
        if matching_parens is not None:
            open_pos, close_pos = matching_parens
            matched = (token.kind == TokenKind.LPAREN and token.start == open_pos) or (
                token.kind == TokenKind.RPAREN and token.start == close_pos
            )
        spans.append(HighlightSpan(token.start, token.end, category, matched))
    return spans


def find_matching_paren(source: str, cursor: int) -> tuple[int, int] | None:
    """Find the parenthesis pair touching the cursor.

    A parenthesis starting at the cursor wins over one ending at it.
    Returns the (open, close) offsets, or None when the cursor is not
    next to a parenthesis or it has no partner.
    """
    tokens = tokenize(source)
    parens = [t for t in tokens if t.kind in (TokenKind.LPAREN, TokenKind.RPAREN)]

    pairs: dict[int, int] = {}
    stack: list[int] = []
    for tok in parens:
        if tok.kind == TokenKind.LPAREN:
            stack.append(tok.start)
        elif stack:
            open_pos = stack.pop()
            pairs[open_pos] = tok.start
            pairs[tok.start] = open_pos

    for tok in [t for t in parens if t.start == cursor] + [t for t in parens if t.end == cursor]:
        partner = pairs.get(tok.start)
        if partner is None:
            continue
        if tok.kind == TokenKind.LPAREN:
            return tok.start, partner
        return partner, tok.start
    return None
