"""
Tokenizer for the fxexpr expression language.

Converts an expression string into a flat list of classified tokens.
Tokenizing never fails: characters that fit no rule become ERROR tokens,
and whitespace is kept as WHITESPACE tokens so the token texts always
concatenate back to the input. The parser and the syntax highlighter both
consume this output.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto
from typing import TYPE_CHECKING

from fxexpr.core.ir.ops import BinaryOp, BuiltInOp, FunctionKind, lookup_builtin, lookup_function

if TYPE_CHECKING:
    from fxexpr.core.expression_lang.highlight import SyntaxHighlight


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()

    # Names
    IDENTIFIER = auto()
    ATTRIBUTE = auto()
    PROPERTY = auto()
    BUILTIN = auto()

    # Keywords/Functions
    FUNCTION = auto()

    # Operators
    UNARY_OP = auto()
    BINARY_OP = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    DOT = auto()

    # Special
    WHITESPACE = auto()
    ERROR = auto()


# Word-shaped kinds, i.e. anything that can name an attribute or property
NAME_KINDS = frozenset(
    {
        TokenKind.IDENTIFIER,
        TokenKind.ATTRIBUTE,
        TokenKind.PROPERTY,
        TokenKind.BUILTIN,
        TokenKind.FUNCTION,
    }
)


class Token:
    """A single token with its half-open source span ``[start, end)``."""

    __slots__ = ("kind", "text", "start", "end", "op")

    def __init__(
        self,
        kind: TokenKind,
        text: str,
        start: int,
        end: int,
        op: BinaryOp | BuiltInOp | FunctionKind | None = None,
    ) -> None:
        self.kind = kind
        self.text = text
        self.start = start
        self.end = end
        self.op = op

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.text, self.start, self.end, self.op) == (
            other.kind,
            other.text,
            other.start,
            other.end,
            other.op,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.start, self.end, self.op))

    def __repr__(self) -> str:
        payload = f", op={self.op!r}" if self.op is not None else ""
        return f"Token({self.kind}, {self.text!r}, {self.start}..{self.end}{payload})"

    @property
    def syntax_highlight(self) -> SyntaxHighlight | None:
        """Highlight category for this token; None for whitespace."""
        from fxexpr.core.expression_lang.highlight import classify

        return classify(self)


# Number: digits with an optional point and fraction ("1.", "1.5"), or a bare fraction (".5")
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]*)?|\.[0-9]+")
_WHITESPACE_RE = re.compile(r"[ \t\r\n]+")

_TWO_CHAR_OPS: dict[str, BinaryOp] = {
    "<=": BinaryOp.LTE,
    ">=": BinaryOp.GTE,
    "==": BinaryOp.EQ,
    "!=": BinaryOp.NEQ,
}

_ONE_CHAR_OPS: dict[str, BinaryOp] = {
    "+": BinaryOp.ADD,
    "-": BinaryOp.SUB,
    "*": BinaryOp.MUL,
    "/": BinaryOp.DIV,
    "<": BinaryOp.LT,
    ">": BinaryOp.GE,
}

_PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
}


def _is_ident_start(c: str) -> bool:
    return c.isalpha() or c == "_"


def _is_ident_char(c: str) -> bool:
    return c.isalnum() or c == "_"


def is_identifier(name: str) -> bool:
    """True when ``name`` tokenizes as a single word."""
    return bool(name) and _is_ident_start(name[0]) and all(_is_ident_char(c) for c in name[1:])


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens."""
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Whitespace
        m = _WHITESPACE_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.WHITESPACE, m.group(0), i, m.end()))
            i = m.end()
            continue

        # String literals
        if c == '"':
            close = source.find('"', i + 1)
            if close == -1:
                tokens.append(Token(TokenKind.ERROR, source[i:], i, n))
                i = n
            else:
                tokens.append(Token(TokenKind.STRING, source[i : close + 1], i, close + 1))
                i = close + 1
            continue

        # Numbers
        m = _NUMBER_RE.match(source, i)
        if m:
            text = m.group(0)
            kind = TokenKind.FLOAT if "." in text else TokenKind.INTEGER
            tokens.append(Token(kind, text, i, m.end()))
            i = m.end()
            continue

        # Identifiers, functions and built-ins
        if _is_ident_start(c):
            j = i + 1
            while j < n and _is_ident_char(source[j]):
                j += 1
            tokens.append(_classify_word(source[i:j], i, j))
            i = j
            continue

        # Operators, longest match first
        two = source[i : i + 2]
        if two in _TWO_CHAR_OPS:
            tokens.append(Token(TokenKind.BINARY_OP, two, i, i + 2, _TWO_CHAR_OPS[two]))
            i += 2
            continue
        if c in _ONE_CHAR_OPS:
            tokens.append(Token(TokenKind.BINARY_OP, c, i, i + 1, _ONE_CHAR_OPS[c]))
            i += 1
            continue

        if c in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[c], c, i, i + 1))
            i += 1
            continue

        tokens.append(Token(TokenKind.ERROR, c, i, i + 1))
        i += 1

    _mark_reference_names(tokens)
    return tokens


def _classify_word(word: str, start: int, end: int) -> Token:
    func = lookup_function(word)
    if func is not None:
        return Token(TokenKind.FUNCTION, word, start, end, func)
    builtin = lookup_builtin(word)
    if builtin is not None:
        return Token(TokenKind.BUILTIN, word, start, end, builtin)
    return Token(TokenKind.IDENTIFIER, word, start, end)


def _mark_reference_names(tokens: list[Token]) -> None:
    """Reclassify the word inside ``attr(...)`` / ``prop(...)`` as a reference name."""
    significant = significant_tokens(tokens)
    for call, paren, arg in zip(significant, significant[1:], significant[2:]):
        if call.kind != TokenKind.FUNCTION or paren.kind != TokenKind.LPAREN:
            continue
        if arg.kind not in NAME_KINDS:
            continue
        if call.op is FunctionKind.ATTR:
            arg.kind, arg.op = TokenKind.ATTRIBUTE, None
        elif call.op is FunctionKind.PROP:
            arg.kind, arg.op = TokenKind.PROPERTY, None


def significant_tokens(tokens: list[Token]) -> list[Token]:
    """Drop whitespace tokens."""
    return [t for t in tokens if t.kind != TokenKind.WHITESPACE]

