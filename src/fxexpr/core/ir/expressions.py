"""
Expression tree for the fxexpr effect-parameter language.

A tree is made of six frozen node types:
- Literal: a float, integer, vec2 or vec3 value
- AttrRef: a per-particle attribute, e.g. ``attr(position)`` or ``position``
- PropRef: an effect-level property, e.g. ``prop(gravity)``
- BuiltIn: a zero-argument system value (``time``, ``rand``, ...)
- UnaryExpr: ``-x``, ``sin(x)``, ``norm(x)``, ...
- BinaryExpr: ``a + b``, ``a < b``, ``dot(a, b)``, ``vec2(a, b)``, ...

Nodes own their children exclusively and are never mutated; editing an
expression means building a new tree. ``str(expr)`` gives the canonical
source text, which parses back to an equal tree.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fxexpr.core.ir.ops import BinaryOp, BuiltInOp, UnaryOp
from fxexpr.core.ir.types import ReturnType
from fxexpr.core.ir.values import Value, value_of

# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------


class _ExprNode(BaseModel):
    """Behaviour shared by every node type."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        from fxexpr.core.expression_lang.printer import to_string

        return to_string(self)  # type: ignore[arg-type]

    def get_result_type(
        self,
        attribute_types: Mapping[str, ReturnType],
        property_types: Mapping[str, ReturnType],
    ) -> ReturnType | None:
        """Infer the result type; see ``type_checker.get_result_type``."""
        from fxexpr.core.expression_lang.type_checker import get_result_type

        return get_result_type(self, attribute_types, property_types)  # type: ignore[arg-type]

    # -- Combinators --

    def add(self, other: Expr) -> BinaryExpr:
        return binary(self, BinaryOp.ADD, other)  # type: ignore[arg-type]

    def sub(self, other: Expr) -> BinaryExpr:
        return binary(self, BinaryOp.SUB, other)  # type: ignore[arg-type]

    def mul(self, other: Expr) -> BinaryExpr:
        return binary(self, BinaryOp.MUL, other)  # type: ignore[arg-type]

    def div(self, other: Expr) -> BinaryExpr:
        return binary(self, BinaryOp.DIV, other)  # type: ignore[arg-type]


class Literal(_ExprNode):
    """A literal value."""

    value: Value


class AttrRef(_ExprNode):
    """Reference to a per-particle simulation attribute."""

    name: str = Field(description="Attribute name as declared by the asset")


class PropRef(_ExprNode):
    """Reference to an effect-level named property."""

    name: str = Field(description="Property name as declared by the effect")


class BuiltIn(_ExprNode):
    """A zero-argument system value."""

    op: BuiltInOp


class UnaryExpr(_ExprNode):
    """Unary operation: op(operand), or -operand for NEG."""

    op: UnaryOp
    operand: Expr


class BinaryExpr(_ExprNode):
    """Binary operation: left op right, or op(left, right) for call-form ops."""

    op: BinaryOp
    left: Expr
    right: Expr


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | AttrRef | PropRef | BuiltIn | UnaryExpr | BinaryExpr

# Rebuild models for recursive forward references
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def lit(value: Any) -> Literal:
    """Literal from a value model, a Python number, or a 2/3-tuple of floats."""
    return Literal(value=value_of(value))


def attr(name: str) -> AttrRef:
    return AttrRef(name=name)


def prop(name: str) -> PropRef:
    return PropRef(name=name)


def builtin(op: BuiltInOp) -> BuiltIn:
    return BuiltIn(op=op)


def unary(op: UnaryOp, operand: Expr) -> UnaryExpr:
    return UnaryExpr(op=op, operand=operand)


def binary(left: Expr, op: BinaryOp, right: Expr) -> BinaryExpr:
    return BinaryExpr(op=op, left=left, right=right)


def add(left: Expr, right: Expr) -> BinaryExpr:
    return binary(left, BinaryOp.ADD, right)


def sub(left: Expr, right: Expr) -> BinaryExpr:
    return binary(left, BinaryOp.SUB, right)


def mul(left: Expr, right: Expr) -> BinaryExpr:
    return binary(left, BinaryOp.MUL, right)


def div(left: Expr, right: Expr) -> BinaryExpr:
    return binary(left, BinaryOp.DIV, right)


def neg(operand: Expr) -> UnaryExpr:
    return unary(UnaryOp.NEG, operand)


def sin(operand: Expr) -> UnaryExpr:
    return unary(UnaryOp.SIN, operand)


def cos(operand: Expr) -> UnaryExpr:
    return unary(UnaryOp.COS, operand)


def abs_(operand: Expr) -> UnaryExpr:
    return unary(UnaryOp.ABS, operand)


def norm(operand: Expr) -> UnaryExpr:
    return unary(UnaryOp.NORM, operand)
