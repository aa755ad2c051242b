"""Tests for the expression parser.

Covers:
- Precedence and associativity
- Atoms: literals, names, built-ins, calls, negation
- Vector constructors and constant folding
- Every parse error kind with its position
"""

from __future__ import annotations

import math

import pytest

from fxexpr.core.errors import (
    ExpressionParseError,
    InvalidIdentifierError,
    InvalidNumberError,
    InvalidVectorLiteralError,
    NestingTooDeepError,
    ParseErrorKind,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnknownFunctionError,
    UnmatchedParenthesisError,
)
from fxexpr.core.expression_lang.parser import MAX_NESTING_DEPTH, parse_expr
from fxexpr.core.ir import (
    AttrRef,
    BinaryExpr,
    BinaryOp,
    BuiltIn,
    BuiltInOp,
    FloatValue,
    IntValue,
    Literal,
    PropRef,
    UnaryExpr,
    UnaryOp,
    Vec2Value,
    Vec3Value,
    add,
    attr,
    binary,
    builtin,
    lit,
    mul,
    neg,
    sub,
)

# ============================================================================
# Precedence
# ============================================================================


class TestPrecedence:
    def test_multiplication_binds_tighter(self) -> None:
        assert parse_expr("1 + 2 * 3") == add(lit(1), mul(lit(2), lit(3)))

    def test_parentheses_override(self) -> None:
        assert parse_expr("(1 + 2) * 3") == mul(add(lit(1), lit(2)), lit(3))

    def test_subtraction_is_left_associative(self) -> None:
        assert parse_expr("1 - 2 - 3") == sub(sub(lit(1), lit(2)), lit(3))

    def test_division_is_left_associative(self) -> None:
        expr = parse_expr("8 / 4 / 2")
        assert expr == binary(binary(lit(8), BinaryOp.DIV, lit(4)), BinaryOp.DIV, lit(2))

    def test_comparison_is_loosest(self) -> None:
        expr = parse_expr("age + 1.0 < lifetime * 2.0")
        assert expr == binary(
            add(attr("age"), lit(1.0)),
            BinaryOp.LT,
            mul(attr("lifetime"), lit(2.0)),
        )

    @pytest.mark.parametrize(
        "text,op",
        [
            ("<", BinaryOp.LT),
            ("<=", BinaryOp.LTE),
            (">", BinaryOp.GE),
            (">=", BinaryOp.GTE),
            ("==", BinaryOp.EQ),
            ("!=", BinaryOp.NEQ),
        ],
    )
    def test_comparison_operators(self, text: str, op: BinaryOp) -> None:
        assert parse_expr(f"a {text} b") == binary(attr("a"), op, attr("b"))

    def test_chained_comparison_rejected(self) -> None:
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_expr("a < b < c")
        assert exc_info.value.text == "<"
        assert exc_info.value.pos == 6

    def test_negation_binds_tighter_than_multiplication(self) -> None:
        assert parse_expr("-a * b") == mul(neg(attr("a")), attr("b"))

    def test_whitespace_is_insignificant(self) -> None:
        assert parse_expr(" 1+2*3 ") == parse_expr("1 + 2 * 3")


# ============================================================================
# Atoms
# ============================================================================


class TestAtoms:
    def test_integer_literal(self) -> None:
        assert parse_expr("42") == Literal(value=IntValue(value=42))

    def test_float_literal(self) -> None:
        assert parse_expr("2.5") == Literal(value=FloatValue(value=2.5))

    def test_trailing_point_float(self) -> None:
        assert parse_expr("1.") == Literal(value=FloatValue(value=1.0))
        assert parse_expr("vec2(1., -2.)") == Literal(value=Vec2Value(x=1.0, y=-2.0))

    def test_leading_point_float(self) -> None:
        assert parse_expr(".5") == Literal(value=FloatValue(value=0.5))

    def test_float_rounds_to_f32(self) -> None:
        expr = parse_expr("0.1")
        assert isinstance(expr, Literal)
        assert expr.value == FloatValue(value=0.1)
        assert expr.value.value != 0.1  # type: ignore[union-attr]

    def test_int32_max(self) -> None:
        assert parse_expr("2147483647") == Literal(value=IntValue(value=2**31 - 1))

    def test_bare_identifier_is_attribute(self) -> None:
        assert parse_expr("position") == AttrRef(name="position")
        assert parse_expr("position") == parse_expr("attr(position)")

    def test_attr_call(self) -> None:
        assert parse_expr("attr(velocity)") == AttrRef(name="velocity")

    def test_prop_call(self) -> None:
        assert parse_expr("prop(gravity)") == PropRef(name="gravity")

    def test_quoted_reference_names(self) -> None:
        assert parse_expr('attr("my attr")') == AttrRef(name="my attr")
        assert parse_expr('prop("Wind Speed")') == PropRef(name="Wind Speed")

    def test_keyword_as_reference_name(self) -> None:
        assert parse_expr("attr(time)") == AttrRef(name="time")
        assert parse_expr("prop(sin)") == PropRef(name="sin")

    @pytest.mark.parametrize("op", list(BuiltInOp))
    def test_builtins(self, op: BuiltInOp) -> None:
        assert parse_expr(op.value) == BuiltIn(op=op)

    def test_negation(self) -> None:
        assert parse_expr("-time") == UnaryExpr(op=UnaryOp.NEG, operand=builtin(BuiltInOp.TIME))

    def test_double_negation(self) -> None:
        assert parse_expr("--1") == neg(neg(lit(1)))

    def test_negated_literal_is_not_folded(self) -> None:
        assert parse_expr("-1.0") == neg(lit(1.0))

    def test_redundant_parentheses(self) -> None:
        assert parse_expr("((age))") == AttrRef(name="age")


class TestCalls:
    @pytest.mark.parametrize(
        "name,op",
        [
            ("sin", UnaryOp.SIN),
            ("cos", UnaryOp.COS),
            ("abs", UnaryOp.ABS),
            ("norm", UnaryOp.NORM),
            ("all", UnaryOp.ALL),
            ("any", UnaryOp.ANY),
        ],
    )
    def test_unary_functions(self, name: str, op: UnaryOp) -> None:
        assert parse_expr(f"{name}(x)") == UnaryExpr(op=op, operand=AttrRef(name="x"))

    @pytest.mark.parametrize(
        "name,op",
        [
            ("dot", BinaryOp.DOT),
            ("cross", BinaryOp.CROSS),
            ("min", BinaryOp.MIN),
            ("max", BinaryOp.MAX),
        ],
    )
    def test_binary_functions(self, name: str, op: BinaryOp) -> None:
        assert parse_expr(f"{name}(a, b)") == BinaryExpr(
            op=op, left=AttrRef(name="a"), right=AttrRef(name="b")
        )

    def test_nested_call_arguments(self) -> None:
        expr = parse_expr("max(sin(time) * 2.0, 0.0)")
        assert expr == binary(
            mul(UnaryExpr(op=UnaryOp.SIN, operand=builtin(BuiltInOp.TIME)), lit(2.0)),
            BinaryOp.MAX,
            lit(0.0),
        )

    def test_comparison_inside_call(self) -> None:
        expr = parse_expr("min(a < b, 1.0)")
        assert isinstance(expr, BinaryExpr)
        assert expr.left == binary(attr("a"), BinaryOp.LT, attr("b"))


class TestVectors:
    def test_vec2_literal(self) -> None:
        assert parse_expr("vec2(1.0, 2.0)") == Literal(value=Vec2Value(x=1.0, y=2.0))

    def test_vec3_literal(self) -> None:
        assert parse_expr("vec3(1.0, 2.0, 3.0)") == Literal(value=Vec3Value(x=1.0, y=2.0, z=3.0))

    def test_negative_components_keep_sign(self) -> None:
        expr = parse_expr("vec3(-0.0, -15.0, -0.0)")
        assert expr == Literal(value=Vec3Value(x=-0.0, y=-15.0, z=-0.0))
        assert isinstance(expr, Literal)
        assert isinstance(expr.value, Vec3Value)
        assert math.copysign(1.0, expr.value.x) == -1.0
        assert math.copysign(1.0, expr.value.z) == -1.0

    def test_negative_zero_differs_from_zero(self) -> None:
        assert parse_expr("vec2(-0.0, 1.0)") != parse_expr("vec2(0.0, 1.0)")

    def test_double_negation_folds(self) -> None:
        assert parse_expr("vec2(--1.0, 2.0)") == Literal(value=Vec2Value(x=1.0, y=2.0))

    def test_integer_components_build_node(self) -> None:
        assert parse_expr("vec2(1, 2)") == binary(lit(1), BinaryOp.VEC2, lit(2))

    def test_non_literal_vec2(self) -> None:
        assert parse_expr("vec2(age, 1.0)") == binary(attr("age"), BinaryOp.VEC2, lit(1.0))

    def test_non_literal_vec3_nests_vec2(self) -> None:
        expr = parse_expr("vec3(1.0, time, 0.0)")
        assert expr == binary(
            binary(lit(1.0), BinaryOp.VEC2, builtin(BuiltInOp.TIME)),
            BinaryOp.VEC3,
            lit(0.0),
        )


# ============================================================================
# Errors
# ============================================================================


class TestErrors:
    def test_unknown_function(self) -> None:
        with pytest.raises(UnknownFunctionError) as exc_info:
            parse_expr("unknown_func(x)")
        assert exc_info.value == UnknownFunctionError("unknown_func", 0)
        assert exc_info.value.kind == ParseErrorKind.UNKNOWN_FUNCTION

    def test_builtin_called_as_function(self) -> None:
        with pytest.raises(UnknownFunctionError, match="time"):
            parse_expr("time(1)")

    def test_malformed_number(self) -> None:
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_expr("1.2.3")
        assert exc_info.value.text == ".3"
        assert exc_info.value.pos == 3

    def test_lone_point(self) -> None:
        with pytest.raises(UnexpectedTokenError, match=r"'\.'"):
            parse_expr(".")

    def test_nesting_too_deep(self) -> None:
        source = "(" * 1000 + "1" + ")" * 1000
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse_expr(source)
        assert exc_info.value == NestingTooDeepError("(", MAX_NESTING_DEPTH)
        assert exc_info.value.category == "syntax"

    def test_negation_too_deep(self) -> None:
        with pytest.raises(NestingTooDeepError):
            parse_expr("-" * 1000 + "1")

    def test_calls_too_deep(self) -> None:
        source = "sin(" * 1000 + "time" + ")" * 1000
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse_expr(source)
        assert exc_info.value.text == "sin"

    def test_nesting_at_limit(self) -> None:
        depth = MAX_NESTING_DEPTH
        assert parse_expr("(" * depth + "age" + ")" * depth) == AttrRef(name="age")
        assert parse_expr("sin(" * depth + "1.0" + ")" * depth) is not None

    @pytest.mark.parametrize("source", ["", "   ", "1 +", "sin(", "-", "max(1.0,"])
    def test_unexpected_end_of_input(self, source: str) -> None:
        with pytest.raises(UnexpectedEndOfInputError) as exc_info:
            parse_expr(source)
        assert exc_info.value.pos == len(source)

    def test_unexpected_token(self) -> None:
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_expr("1 + * 2")
        assert exc_info.value == UnexpectedTokenError("*", 4)

    def test_stray_closing_paren(self) -> None:
        with pytest.raises(UnexpectedTokenError, match=r"'\)'"):
            parse_expr("1 + 2)")

    def test_error_token(self) -> None:
        with pytest.raises(UnexpectedTokenError, match="#"):
            parse_expr("1 # 2")

    def test_function_without_call(self) -> None:
        with pytest.raises(UnexpectedTokenError):
            parse_expr("sin + 1")

    def test_too_many_arguments(self) -> None:
        with pytest.raises(UnexpectedTokenError, match=","):
            parse_expr("sin(1.0, 2.0)")

    def test_too_few_arguments(self) -> None:
        with pytest.raises(UnexpectedTokenError, match=r"'\)'"):
            parse_expr("dot(a)")

    def test_unmatched_parenthesis(self) -> None:
        with pytest.raises(UnmatchedParenthesisError) as exc_info:
            parse_expr("(1 + 2")
        assert exc_info.value.pos == 0

    def test_unmatched_inner_parenthesis(self) -> None:
        with pytest.raises(UnmatchedParenthesisError) as exc_info:
            parse_expr("1 * (2 + (3)")
        assert exc_info.value.pos == 4

    def test_integer_out_of_range(self) -> None:
        with pytest.raises(InvalidNumberError) as exc_info:
            parse_expr("1 + 2147483648")
        assert exc_info.value == InvalidNumberError("2147483648", 4)

    def test_float_overflow(self) -> None:
        with pytest.raises(InvalidNumberError):
            parse_expr("1" + "0" * 40 + ".0")

    @pytest.mark.parametrize("source", ["attr(1)", 'attr("")', "attr()", "prop(1.5)", "prop(-)"])
    def test_invalid_identifier(self, source: str) -> None:
        with pytest.raises(InvalidIdentifierError):
            parse_expr(source)

    def test_reference_missing_close(self) -> None:
        with pytest.raises(UnexpectedTokenError):
            parse_expr("attr(a b)")

    def test_reference_at_end_of_input(self) -> None:
        with pytest.raises(UnexpectedEndOfInputError):
            parse_expr("attr(")

    def test_empty_vector(self) -> None:
        with pytest.raises(InvalidVectorLiteralError) as exc_info:
            parse_expr("vec2()")
        assert exc_info.value.pos == 5

    def test_vector_missing_component(self) -> None:
        with pytest.raises(InvalidVectorLiteralError):
            parse_expr("vec3(1.0, 2.0)")

    def test_vector_extra_component(self) -> None:
        with pytest.raises(InvalidVectorLiteralError):
            parse_expr("vec2(1.0, 2.0, 3.0)")

    def test_every_error_is_a_parse_error(self) -> None:
        sources = ["", "1 +", "(", "nope(1)", "attr(1)", "vec2()", "99999999999", ")"]
        for source in sources:
            with pytest.raises(ExpressionParseError):
                parse_expr(source)

    def test_categories(self) -> None:
        assert UnexpectedTokenError("x", 0).category == "syntax"
        assert InvalidNumberError("1", 0).category == "value"
        assert UnknownFunctionError("f", 0).category == "reference"
        assert InvalidVectorLiteralError().category == "vector"

    def test_messages(self) -> None:
        assert str(UnexpectedTokenError("*", 2)) == "Unexpected token: '*'"
        assert str(UnexpectedEndOfInputError(pos=3)) == "Unexpected end of input"
        assert str(UnknownFunctionError("foo", 0)) == "Unknown function: 'foo'"
        assert str(UnmatchedParenthesisError(pos=0)) == "Unmatched parenthesis"
