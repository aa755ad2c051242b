"""
Canonical printer for fxexpr expression trees.

Renders a tree back to source text that parses to an equal tree, with
the fewest parentheses possible:

    1.0 + rand * sin(time)
    (1.0 + 2.0) * 3.0
    dot(attr(position), vec3(0.0, 1.0, 0.0))
"""

from __future__ import annotations

import math
from decimal import Decimal

from fxexpr.core.expression_lang.tokenizer import is_identifier
from fxexpr.core.ir.expressions import (
    AttrRef,
    BinaryExpr,
    BuiltIn,
    Expr,
    Literal,
    PropRef,
    UnaryExpr,
)
from fxexpr.core.ir.ops import BinaryOp, UnaryOp
from fxexpr.core.ir.values import FloatValue, IntValue, Value, Vec2Value, Vec3Value, to_f32

# Precedence tiers, loosest first
_LOWEST = 0
_COMPARISON = 1
_ADDITIVE = 2
_MULTIPLICATIVE = 3
_ATOM = 4


def to_string(expr: Expr) -> str:
    """Canonical source text for an expression tree.

    Every tree the parser produces prints back to text that parses to an
    equal tree. Hand-built trees can take shapes the grammar has no
    spelling for: a VEC3 node whose left operand is not a VEC2 node prints
    as two-argument ``vec3(l, r)``, which the parser rejects as an invalid
    vector literal.
    """
    return _format(expr, _LOWEST)



def format_float(value: float) -> str:
    """Shortest plain decimal that reads back as the same 32-bit float.

    Integral values keep one fractional digit (``1.0``), and exponent
    notation is never used since the tokenizer does not read it.
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    text = repr(value)
    for digits in range(1, 10):
        candidate = f"{value:.{digits}g}"
        if to_f32(float(candidate)) == value:
            text = candidate
            break

    plain = format(Decimal(text), "f")
    if "." not in plain:
        plain += ".0"
    return plain


def format_value(value: Value) -> str:
    if isinstance(value, FloatValue):
        return format_float(value.value)
    if isinstance(value, IntValue):
        return str(value.value)
    if isinstance(value, Vec2Value):
        return f"vec2({format_float(value.x)}, {format_float(value.y)})"
    if isinstance(value, Vec3Value):
        return f"vec3({format_float(value.x)}, {format_float(value.y)}, {format_float(value.z)})"
    raise TypeError(f"Unknown value type: {type(value).__name__}")


def _format_name(name: str) -> str:
    if is_identifier(name):
        return name
    return f'"{name}"'


def _precedence(expr: Expr) -> int:
    if isinstance(expr, BinaryExpr) and not expr.op.is_call_form:
        if expr.op.is_comparison:
            return _COMPARISON
        if expr.op in (BinaryOp.ADD, BinaryOp.SUB):
            return _ADDITIVE
        return _MULTIPLICATIVE
    return _ATOM


def _format(expr: Expr, required: int) -> str:
    """Render ``expr`` in a position that needs at least ``required`` precedence."""
    text = _render(expr)
    if _precedence(expr) < required:
        return f"({text})"
    return text


def _render(expr: Expr) -> str:
    if isinstance(expr, Literal):
        return format_value(expr.value)
    if isinstance(expr, AttrRef):
        return f"attr({_format_name(expr.name)})"
    if isinstance(expr, PropRef):
        return f"prop({_format_name(expr.name)})"
    if isinstance(expr, BuiltIn):
        return expr.op.value
    if isinstance(expr, UnaryExpr):
        if expr.op == UnaryOp.NEG:
            return f"-{_format(expr.operand, _ATOM)}"
        return f"{expr.op.value}({_format(expr.operand, _LOWEST)})"
    if isinstance(expr, BinaryExpr):
        return _render_binary(expr)
    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _render_binary(expr: BinaryExpr) -> str:
    op = expr.op
    if op.is_call_form:
        args = [expr.left, expr.right]
        # vec3(x, y, z) is stored as VEC3(VEC2(x, y), z)
        if op == BinaryOp.VEC3 and isinstance(expr.left, BinaryExpr) and expr.left.op == BinaryOp.VEC2:
            args = [expr.left.left, expr.left.right, expr.right]
        return f"{op.value}({', '.join(_format(a, _LOWEST) for a in args)})"

    prec = _precedence(expr)
    if op.is_comparison:
        # Comparisons do not chain: both sides must be additive or tighter
        left_req = right_req = _ADDITIVE
    else:
        # Left associative: an equal-precedence right operand needs parens
        left_req, right_req = prec, prec + 1
    return f"{_format(expr.left, left_req)} {op.value} {_format(expr.right, right_req)}"
