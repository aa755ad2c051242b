"""
Recursive descent parser for the fxexpr expression language.

Grammar (precedence low to high):
    expr           → additive (cmp_op additive)?
    additive       → multiplicative (("+" | "-") multiplicative)*
    multiplicative → atom (("*" | "/") atom)*
    atom           → "(" expr ")"
                   | "-" atom
                   | INTEGER | FLOAT
                   | FUNCTION "(" args ")"
                   | IDENTIFIER                  # shorthand for attr(IDENTIFIER)
                   | BUILTIN
    cmp_op         → "<" | "<=" | ">" | ">=" | "==" | "!="

A comparison appears at most once per expression; ``a < b < c`` leaves the
second ``<`` unconsumed and is rejected as a stray token. Negation binds
tighter than any binary operator, so ``-a * b`` is ``(-a) * b``.

Parentheses, negations and calls may nest at most MAX_NESTING_DEPTH
levels deep; deeper input raises NestingTooDeepError.

Function arities are fixed and checked here:
    sin cos abs norm all any attr prop → 1
    dot cross min max vec2             → 2
    vec3                               → 3
"""

from __future__ import annotations

import logging

from fxexpr.core.errors import (
    ExpressionParseError,
    InvalidIdentifierError,
    InvalidNumberError,
    InvalidVectorLiteralError,
    NestingTooDeepError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnknownFunctionError,
    UnmatchedParenthesisError,
)
from fxexpr.core.expression_lang.tokenizer import (
    NAME_KINDS,
    Token,
    TokenKind,
    significant_tokens,
    tokenize,
)
from fxexpr.core.ir.expressions import (
    AttrRef,
    BinaryExpr,
    BuiltIn,
    Expr,
    Literal,
    PropRef,
    UnaryExpr,
)
from fxexpr.core.ir.ops import BinaryOp, FunctionKind, UnaryOp
from fxexpr.core.ir.values import (
    INT32_MAX,
    FloatValue,
    IntValue,
    Vec2Value,
    Vec3Value,
    fits_f32,
)

logger = logging.getLogger(__name__)

_ADDITIVE_OPS = (BinaryOp.ADD, BinaryOp.SUB)
_MULTIPLICATIVE_OPS = (BinaryOp.MUL, BinaryOp.DIV)
_VECTOR_FUNCTIONS = (FunctionKind.VEC2, FunctionKind.VEC3)
_COMPARISON_OPS = tuple(op for op in BinaryOp if op.is_comparison)

# Groups, negations and calls nested deeper than this are rejected
MAX_NESTING_DEPTH = 64


class _Parser:
    """Recursive descent parser over whitespace-free tokens."""

    def __init__(self, tokens: list[Token], source_length: int) -> None:
        self.tokens = tokens
        self.pos = 0
        self.end = source_length
        self.depth = 0

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        tok = self.require()
        self.pos += 1
        return tok

    def require(self) -> Token:
        """Current token, or UnexpectedEndOfInput when the input ran out."""
        tok = self.current
        if tok is None:
            raise UnexpectedEndOfInputError(pos=self.end)
        return tok

    def expect(self, kind: TokenKind, vector: bool = False) -> Token:
        tok = self.require()
        if tok.kind != kind:
            if vector:
                raise InvalidVectorLiteralError(tok.text, tok.start)
            raise UnexpectedTokenError(tok.text, tok.start)
        return self.advance()

    def match_op(self, *ops: BinaryOp) -> BinaryOp | None:
        tok = self.current
        if tok is not None and tok.kind == TokenKind.BINARY_OP and tok.op in ops:
            self.advance()
            return tok.op  # type: ignore[return-value]
        return None

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """additive (cmp_op additive)?"""
        left = self.parse_additive()
        op = self.match_op(*_COMPARISON_OPS)
        if op is not None:
            right = self.parse_additive()
            return BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_additive(self) -> Expr:
        """multiplicative (('+' | '-') multiplicative)*"""
        left = self.parse_multiplicative()
        while (op := self.match_op(*_ADDITIVE_OPS)) is not None:
            right = self.parse_multiplicative()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_multiplicative(self) -> Expr:
        """atom (('*' | '/') atom)*"""
        left = self.parse_atom()
        while (op := self.match_op(*_MULTIPLICATIVE_OPS)) is not None:
            right = self.parse_atom()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_atom(self) -> Expr:
        """'(' expr ')' | '-' atom | number | call | identifier | builtin"""
        tok = self.require()

        if tok.kind in (TokenKind.LPAREN, TokenKind.FUNCTION) or (
            tok.kind == TokenKind.BINARY_OP and tok.op is BinaryOp.SUB
        ):
            self.depth += 1
            if self.depth > MAX_NESTING_DEPTH:
                raise NestingTooDeepError(tok.text, tok.start)
            try:
                return self._parse_nested(tok)
            finally:
                self.depth -= 1

        if tok.kind == TokenKind.INTEGER:
            self.advance()
            return Literal(value=_parse_int(tok))
        if tok.kind == TokenKind.FLOAT:
            self.advance()
            return Literal(value=_parse_float(tok))

        if tok.kind in (TokenKind.IDENTIFIER, TokenKind.BUILTIN):
            self.advance()
            after = self.current
            if after is not None and after.kind == TokenKind.LPAREN:
                raise UnknownFunctionError(tok.text, tok.start)
            if tok.kind == TokenKind.BUILTIN:
                return BuiltIn(op=tok.op)  # type: ignore[arg-type]
            return AttrRef(name=tok.text)

        raise UnexpectedTokenError(tok.text, tok.start)

    def _parse_nested(self, tok: Token) -> Expr:
        """Atoms that contain further expressions: groups, negation, calls."""
        self.advance()

        # Parenthesized expression
        if tok.kind == TokenKind.LPAREN:
            expr = self.parse_expression()
            close = self.current
            if close is None:
                raise UnmatchedParenthesisError(pos=tok.start)
            if close.kind != TokenKind.RPAREN:
                raise UnexpectedTokenError(close.text, close.start)
            self.advance()
            return expr

        # Prefix negation
        if tok.kind == TokenKind.BINARY_OP:
            return UnaryExpr(op=UnaryOp.NEG, operand=self.parse_atom())

        self.expect(TokenKind.LPAREN)
        return self._parse_call(tok.op)  # type: ignore[arg-type]

    def _parse_call(self, func: FunctionKind) -> Expr:
        """Arguments and closing paren of a call; the '(' is already consumed."""
        if func in (FunctionKind.ATTR, FunctionKind.PROP):
            name = self._parse_reference_name()
            self.expect(TokenKind.RPAREN)
            if func is FunctionKind.ATTR:
                return AttrRef(name=name)
            return PropRef(name=name)

        vector = func in _VECTOR_FUNCTIONS
        if vector and self.current is not None and self.current.kind == TokenKind.RPAREN:
            raise InvalidVectorLiteralError(self.current.text, self.current.start)

        args = [self.parse_expression()]
        for _ in range(func.arity - 1):
            self.expect(TokenKind.COMMA, vector=vector)
            args.append(self.parse_expression())
        self.expect(TokenKind.RPAREN, vector=vector)

        if (op := func.unary_op) is not None:
            return UnaryExpr(op=op, operand=args[0])
        if (op2 := func.binary_op) is not None:
            return BinaryExpr(op=op2, left=args[0], right=args[1])
        if func is FunctionKind.VEC2:
            return _build_vec2(args[0], args[1])
        return _build_vec3(args[0], args[1], args[2])

    def _parse_reference_name(self) -> str:
        """The single name argument of attr()/prop(): a word or a quoted string."""
        tok = self.require()
        if tok.kind in NAME_KINDS:
            self.advance()
            return tok.text
        if tok.kind == TokenKind.STRING:
            name = tok.text[1:-1]
            if not name:
                raise InvalidIdentifierError(name, tok.start)
            self.advance()
            return name
        if tok.kind == TokenKind.RPAREN:
            raise InvalidIdentifierError("", tok.start)
        raise InvalidIdentifierError(tok.text, tok.start)


def _parse_int(tok: Token) -> IntValue:
    value = int(tok.text)
    if value > INT32_MAX:
        raise InvalidNumberError(tok.text, tok.start)
    return IntValue(value=value)


def _parse_float(tok: Token) -> FloatValue:
    value = float(tok.text)
    if not fits_f32(value):
        raise InvalidNumberError(tok.text, tok.start)
    return FloatValue(value=value)


def _fold_float(expr: Expr) -> float | None:
    """Value of a float literal under any number of leading negations."""
    if isinstance(expr, Literal) and isinstance(expr.value, FloatValue):
        return expr.value.value
    if isinstance(expr, UnaryExpr) and expr.op is UnaryOp.NEG:
        inner = _fold_float(expr.operand)
        return None if inner is None else -inner
    return None


def _build_vec2(x: Expr, y: Expr) -> Expr:
    fx, fy = _fold_float(x), _fold_float(y)
    if fx is not None and fy is not None:
        return Literal(value=Vec2Value(x=fx, y=fy))
    return BinaryExpr(op=BinaryOp.VEC2, left=x, right=y)


def _build_vec3(x: Expr, y: Expr, z: Expr) -> Expr:
    fx, fy, fz = _fold_float(x), _fold_float(y), _fold_float(z)
    if fx is not None and fy is not None and fz is not None:
        return Literal(value=Vec3Value(x=fx, y=fy, z=fz))
    xy = BinaryExpr(op=BinaryOp.VEC2, left=x, right=y)
    return BinaryExpr(op=BinaryOp.VEC3, left=xy, right=z)


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an expression tree.

    Args:
        source: Expression text (e.g., "sin(time * 2.0) + attr(age)")

    Returns:
        The parsed tree.

    Raises:
        ExpressionParseError: One of its subclasses, describing the first
            problem found. No partial tree is ever returned.
    """
    parser = _Parser(significant_tokens(tokenize(source)), len(source))
    try:
        expr = parser.parse_expression()

        # Ensure all tokens consumed
        trailing = parser.current
        if trailing is not None:
            raise UnexpectedTokenError(trailing.text, trailing.start)
    except ExpressionParseError as e:
        logger.debug("Rejected expression %r: %s (at %d)", source, e, e.pos)
        raise

    return expr

