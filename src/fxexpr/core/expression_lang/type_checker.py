"""
Type inference for the fxexpr expression language.

Infers an expression's result type from the attribute and property types
declared by the effect asset. Two failure modes are kept apart:

- ``None``: some attribute/property name is not declared, so the type
  cannot be known at all.
- ``ReturnType.ERROR``: every name resolved but an operator was applied to
  operand types it does not accept.
"""

from __future__ import annotations

from collections.abc import Mapping

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
from fxexpr.core.ir.types import ReturnType

# Type context maps attribute or property names to their declared types
TypeContext = Mapping[str, ReturnType]


def get_result_type(
    expr: Expr,
    attribute_types: TypeContext,
    property_types: TypeContext,
) -> ReturnType | None:
    """Infer the result type of an expression.

    Args:
        expr: Expression tree.
        attribute_types: Declared per-particle attribute types.
        property_types: Declared effect property types.

    Returns:
        The inferred type (possibly ReturnType.ERROR), or None if any
        referenced name is missing from its mapping.
    """
    return _infer(expr, attribute_types, property_types)


def _infer(expr: Expr, attrs: TypeContext, props: TypeContext) -> ReturnType | None:
    """Dispatch type inference."""
    if isinstance(expr, Literal):
        return expr.value.return_type

    if isinstance(expr, AttrRef):
        return attrs.get(expr.name)

    if isinstance(expr, PropRef):
        return props.get(expr.name)

    if isinstance(expr, BuiltIn):
        return ReturnType.FLOAT

    if isinstance(expr, UnaryExpr):
        operand_t = _infer(expr.operand, attrs, props)
        if operand_t is None:
            return None
        return _infer_unary(expr.op, operand_t)

    if isinstance(expr, BinaryExpr):
        left_t = _infer(expr.left, attrs, props)
        if left_t is None:
            return None
        right_t = _infer(expr.right, attrs, props)
        if right_t is None:
            return None
        return _infer_binary(expr.op, left_t, right_t)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _infer_unary(op: UnaryOp, operand_t: ReturnType) -> ReturnType:
    """Infer result type of a unary operation."""
    if op in (UnaryOp.ABS, UnaryOp.SIN, UnaryOp.COS, UnaryOp.NEG):
        return operand_t
    if op == UnaryOp.NORM:
        return ReturnType.FLOAT
    # ALL / ANY reduce a vector to a boolean-as-float
    if operand_t.is_vector:
        return ReturnType.FLOAT
    return ReturnType.ERROR


_BROADCAST_OPS = {
    BinaryOp.ADD,
    BinaryOp.SUB,
    BinaryOp.MUL,
    BinaryOp.DIV,
    BinaryOp.MIN,
    BinaryOp.MAX,
}

# Types that may be compared with each other (same type only)
_COMPARABLE_TYPES = {ReturnType.FLOAT, ReturnType.INTEGER, ReturnType.VEC2, ReturnType.VEC3}


def _infer_binary(op: BinaryOp, left_t: ReturnType, right_t: ReturnType) -> ReturnType:
    """Infer result type of a binary operation."""
    if op in _BROADCAST_OPS:
        return _broadcast(left_t, right_t)

    if op.is_comparison:
        if left_t == right_t and left_t in _COMPARABLE_TYPES:
            return ReturnType.FLOAT
        return ReturnType.ERROR

    pair = (left_t, right_t)
    if op == BinaryOp.DOT:
        if pair in ((ReturnType.VEC2, ReturnType.VEC2), (ReturnType.VEC3, ReturnType.VEC3)):
            return ReturnType.FLOAT
        return ReturnType.ERROR
    if op == BinaryOp.CROSS:
        if pair == (ReturnType.VEC3, ReturnType.VEC3):
            return ReturnType.VEC3
        return ReturnType.ERROR
    if op == BinaryOp.VEC2:
        if pair == (ReturnType.FLOAT, ReturnType.FLOAT):
            return ReturnType.VEC2
        return ReturnType.ERROR
    if op == BinaryOp.VEC3:
        if pair == (ReturnType.VEC2, ReturnType.FLOAT):
            return ReturnType.VEC3
        return ReturnType.ERROR

    raise ValueError(f"Unhandled binary operator: {op!r}")


def _broadcast(left_t: ReturnType, right_t: ReturnType) -> ReturnType:
    """Element-wise arithmetic: same types keep their type, scalars widen to vectors."""
    if left_t == right_t and left_t != ReturnType.ERROR:
        return left_t
    if left_t.is_scalar and right_t.is_vector:
        return right_t
    if left_t.is_vector and right_t.is_scalar:
        return left_t
    return ReturnType.ERROR
