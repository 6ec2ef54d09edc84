"""
Tests for the tree-walking evaluator.

Domain errors must come back as NaN (never as exceptions), overflow as a
signed infinity.
"""

import math

import pytest

from FormulaEngine.arena import Arena
from FormulaEngine.AstNodes import Number, Variable, Negate, BinaryOp, Call
from FormulaEngine.MathEngine import parse_formula
from FormulaEngine.ScientificEngine import (
    evaluate, evaluate_x, apply_function, power, is_known_function, FUNCTIONS,
)


def value_of(text, x=0.0, y=0.0):
    result = parse_formula(text, Arena())
    assert result.valid, str(result.error)
    return evaluate(result.ast, x, y)


class TestNodes:
    """Tests for the five node variants."""

    @pytest.mark.parametrize("v", [0.0, -0.0, 1.5, -2.25, 1e300, -1e-300, 123456789.125])
    def test_number_is_returned_exactly(self, v):
        assert evaluate(Number(v), 7.0, 9.0) == v

    def test_variables(self):
        assert evaluate(Variable('x'), 2.0, 5.0) == 2.0
        assert evaluate(Variable('y'), 2.0, 5.0) == 5.0

    def test_one_variable_form_ignores_y(self):
        assert evaluate_x(BinaryOp('+', Variable('x'), Variable('y')), 4.0) == 4.0

    def test_negate(self):
        assert evaluate(Negate(Variable('x')), 3.0) == -3.0

    def test_none_is_nan(self):
        assert math.isnan(evaluate(None, 1.0))

    def test_unknown_variable_rejected(self):
        with pytest.raises(ValueError):
            Variable('z')

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValueError):
            BinaryOp('&', Number(1), Number(2))


class TestBinaryOperators:
    """Tests for + - * / % ^."""

    @pytest.mark.parametrize("text", ["1/0", "5%0", "x/(x-x)", "x%0"])
    def test_zero_divisor_is_nan(self, text):
        for x in (-2.0, 0.0, 1.0, 3.5):
            assert math.isnan(value_of(text, x))

    def test_fmod_keeps_sign_of_dividend(self):
        assert value_of("-5.5 % 2") == -1.5

    def test_fractional_power_of_negative_base(self):
        assert math.isnan(value_of("(-8)^(1/3)"))

    def test_integer_power_of_negative_base(self):
        assert value_of("(-2)^3") == -8

    def test_power_overflow(self):
        assert value_of("10^400") == math.inf
        assert value_of("(-10)^401") == -math.inf

    def test_power_of_zero_with_negative_exponent(self):
        assert power(0.0, -1.0) == math.inf
        assert power(-0.0, -1.0) == -math.inf
        assert power(0.0, -2.0) == math.inf

    def test_nan_to_the_zero(self):
        assert power(math.nan, 0.0) == 1.0


class TestFunctions:
    """Tests for the named function table."""

    @pytest.mark.parametrize("text,expected", [
        ("sin(pi/2)", 1.0),
        ("cos(0)", 1.0),
        ("tan(pi/4)", 1.0),
        ("asin(1)", math.pi / 2),
        ("acos(1)", 0.0),
        ("atan(1)", math.pi / 4),
        ("cot(pi/4)", 1.0),
        ("sec(0)", 1.0),
        ("csc(pi/2)", 1.0),
        ("sinh(0)", 0.0),
        ("cosh(0)", 1.0),
        ("tanh(0)", 0.0),
        ("asinh(0)", 0.0),
        ("acosh(1)", 0.0),
        ("atanh(0)", 0.0),
        ("sqrt(16)", 4.0),
        ("cbrt(-27)", -3.0),
        ("log(1000)", 3.0),
        ("ln(e)", 1.0),
        ("log2(8)", 3.0),
        ("exp(0)", 1.0),
        ("abs(-2.5)", 2.5),
        ("floor(-1.5)", -2.0),
        ("ceil(-1.5)", -1.0),
    ])
    def test_values(self, text, expected):
        assert value_of(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", [
        "sqrt(-1)",
        "ln(0)",
        "ln(-1)",
        "log(-10)",
        "log2(0)",
        "asin(2)",
        "acos(-1.5)",
        "acosh(0.5)",
        "atanh(1)",
        "cot(0)",
        "csc(0)",
        "sin(1/0)",
    ])
    def test_domain_errors_are_nan(self, text):
        assert math.isnan(value_of(text))

    @pytest.mark.parametrize("a,expected", [(2.5, 3.0), (-2.5, -3.0), (0.49999999999999994, 0.0), (1.4, 1.0)])
    def test_round_half_away_from_zero(self, a, expected):
        assert apply_function("round", a) == expected

    def test_round_keeps_negative_zero(self):
        assert math.copysign(1.0, apply_function("round", -0.4)) == -1.0

    @pytest.mark.parametrize("name", ["sign", "sgn"])
    def test_sign(self, name):
        assert apply_function(name, -3.0) == -1.0
        assert apply_function(name, 0.0) == 0.0
        assert apply_function(name, 4.0) == 1.0
        assert apply_function(name, math.nan) == 0.0

    def test_overflow_is_infinite(self):
        assert value_of("exp(1000)") == math.inf
        assert value_of("cosh(1000)") == math.inf
        assert value_of("sinh(-1000)") == -math.inf

    def test_rounding_of_infinity(self):
        assert apply_function("floor", math.inf) == math.inf
        assert apply_function("ceil", -math.inf) == -math.inf
        assert math.isnan(apply_function("round", math.nan))

    def test_unknown_function_is_nan(self):
        assert not is_known_function("banana")
        assert math.isnan(evaluate(Call("banana", Variable('x')), 1.0))

    def test_table_has_every_function(self):
        expected = {
            "sin", "cos", "tan", "asin", "acos", "atan", "cot", "sec", "csc",
            "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
            "sqrt", "cbrt", "log", "ln", "log2", "exp",
            "abs", "floor", "ceil", "round", "sign", "sgn",
        }
        assert set(FUNCTIONS) == expected


class TestPurity:
    """Tests for determinism and robustness."""

    def test_repeated_evaluation_is_identical(self):
        result = parse_formula("sin(pi*x)^2 + ln(|y| + 1) / 3", Arena())
        for x, y in [(0.1, -2.0), (1.7, 0.0), (-3.3, 4.2)]:
            first = evaluate(result.ast, x, y)
            assert evaluate(result.ast, x, y) == first

    def test_too_deep_tree_is_nan(self):
        node = Number(1.0)
        for _ in range(5000):
            node = Negate(node)
        assert math.isnan(evaluate(node))

    def test_integer_bindings_are_accepted(self):
        assert value_of("x*y", 2, 3) == 6.0
