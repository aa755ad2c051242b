"""
Operator vocabulary for fxexpr expressions.

Every enum member's value is its canonical source spelling.
"""

from __future__ import annotations

from enum import StrEnum


class UnaryOp(StrEnum):
    """Unary operators. NEG is the prefix ``-``; the rest are call-form."""

    ABS = "abs"
    NORM = "norm"
    SIN = "sin"
    COS = "cos"
    NEG = "-"
    ALL = "all"
    ANY = "any"


class BinaryOp(StrEnum):
    """Binary operators.

    GE spells ``>`` and GTE spells ``>=``. VEC2 and VEC3 are the vector
    constructors; VEC3 takes a vec2 on the left and a float on the right.
    """

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    # Vector / scalar functions
    DOT = "dot"
    CROSS = "cross"
    MIN = "min"
    MAX = "max"
    # Comparison
    LT = "<"
    LTE = "<="
    GE = ">"
    GTE = ">="
    EQ = "=="
    NEQ = "!="
    # Constructors
    VEC2 = "vec2"
    VEC3 = "vec3"

    @property
    def is_call_form(self) -> bool:
        """Printed as ``name(left, right)`` rather than infix."""
        return self in _CALL_FORM_OPS

    @property
    def is_comparison(self) -> bool:
        return self in _COMPARISON_OPS


_CALL_FORM_OPS = frozenset(
    {BinaryOp.DOT, BinaryOp.CROSS, BinaryOp.MIN, BinaryOp.MAX, BinaryOp.VEC2, BinaryOp.VEC3}
)
_COMPARISON_OPS = frozenset(
    {BinaryOp.LT, BinaryOp.LTE, BinaryOp.GE, BinaryOp.GTE, BinaryOp.EQ, BinaryOp.NEQ}
)


class BuiltInOp(StrEnum):
    """Zero-argument system values. All of them are floats."""

    TIME = "time"
    DELTA_TIME = "delta_time"
    RAND = "rand"
    ALPHA_CUTOFF = "alpha_cutoff"
    PARTICLE_ID = "particle_id"


class FunctionKind(StrEnum):
    """Names usable in call position."""

    # Unary
    SIN = "sin"
    COS = "cos"
    ABS = "abs"
    NORM = "norm"
    ALL = "all"
    ANY = "any"
    # Binary
    DOT = "dot"
    CROSS = "cross"
    MIN = "min"
    MAX = "max"
    # Vector
    VEC2 = "vec2"
    VEC3 = "vec3"
    # References
    ATTR = "attr"
    PROP = "prop"

    @property
    def arity(self) -> int:
        if self is FunctionKind.VEC3:
            return 3
        if self in (
            FunctionKind.DOT,
            FunctionKind.CROSS,
            FunctionKind.MIN,
            FunctionKind.MAX,
            FunctionKind.VEC2,
        ):
            return 2
        return 1

    @property
    def unary_op(self) -> UnaryOp | None:
        return _UNARY_FUNCTIONS.get(self)

    @property
    def binary_op(self) -> BinaryOp | None:
        return _BINARY_FUNCTIONS.get(self)


_UNARY_FUNCTIONS: dict[FunctionKind, UnaryOp] = {
    FunctionKind.SIN: UnaryOp.SIN,
    FunctionKind.COS: UnaryOp.COS,
    FunctionKind.ABS: UnaryOp.ABS,
    FunctionKind.NORM: UnaryOp.NORM,
    FunctionKind.ALL: UnaryOp.ALL,
    FunctionKind.ANY: UnaryOp.ANY,
}

_BINARY_FUNCTIONS: dict[FunctionKind, BinaryOp] = {
    FunctionKind.DOT: BinaryOp.DOT,
    FunctionKind.CROSS: BinaryOp.CROSS,
    FunctionKind.MIN: BinaryOp.MIN,
    FunctionKind.MAX: BinaryOp.MAX,
}


def lookup_function(name: str) -> FunctionKind | None:
    try:
        return FunctionKind(name)
    except ValueError:
        return None


def lookup_builtin(name: str) -> BuiltInOp | None:
    try:
        return BuiltInOp(name)
    except ValueError:
        return None
