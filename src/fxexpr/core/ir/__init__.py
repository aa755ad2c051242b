"""
fxexpr Intermediate Representation (IR) types.

Values, operators, the return type lattice and expression tree nodes,
re-exported from their submodules.
"""

from .expressions import (
    AttrRef,
    BinaryExpr,
    BuiltIn,
    Expr,
    Literal,
    PropRef,
    UnaryExpr,
    abs_,
    add,
    attr,
    binary,
    builtin,
    cos,
    div,
    lit,
    mul,
    neg,
    norm,
    prop,
    sin,
    sub,
    unary,
)
from .ops import BinaryOp, BuiltInOp, FunctionKind, UnaryOp
from .types import ReturnType
from .values import FloatValue, IntValue, Value, Vec2Value, Vec3Value, value_of

__all__ = [
    # Values
    "Value",
    "FloatValue",
    "IntValue",
    "Vec2Value",
    "Vec3Value",
    "value_of",
    # Operators
    "UnaryOp",
    "BinaryOp",
    "BuiltInOp",
    "FunctionKind",
    # Types
    "ReturnType",
    # Nodes
    "Expr",
    "Literal",
    "AttrRef",
    "PropRef",
    "BuiltIn",
    "UnaryExpr",
    "BinaryExpr",
    # Builders
    "lit",
    "attr",
    "prop",
    "builtin",
    "unary",
    "binary",
    "add",
    "sub",
    "mul",
    "div",
    "neg",
    "sin",
    "cos",
    "abs_",
    "norm",
]
