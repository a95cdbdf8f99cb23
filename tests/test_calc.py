"""Tests for Calc, the tree-walking evaluator."""

import math

import pytest

from sigma import BUILTINS, Calc, VariableStore, ast, calculate, evaluate


@pytest.fixture
def store():
    return VariableStore()


class TestArithmetic:
    @pytest.mark.parametrize(
        "line,expected",
        [
            ("2 + 3 * 4", 14),
            ("(2 + 3) * 4", 20),
            ("- - 5", 5),
            ("-5 + 2", -3),
            ("10 / 4", 2.5),
            ("8 - 3 - 2", 3),
            ("12 / 2 / 3", 2),
        ],
    )
    def test_expression(self, line, expected):
        assert calculate(line) == expected

    def test_division_by_zero_is_infinite(self):
        assert calculate("1 / 0") == math.inf
        assert calculate("-1 / 0") == -math.inf

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(calculate("0 / 0"))

    def test_none_tree_is_zero(self, store):
        assert evaluate(None, store) == 0
        assert Calc([], None, store).exec() == 0


class TestVariables:
    def test_assignment_then_reference(self, store):
        assert calculate("x = 10", store) == 10
        assert calculate("x + 5", store) == 15

    def test_colon_assignment(self, store):
        assert calculate("rent: 1200", store) == 1200
        assert store.get_var("rent") == 1200

    def test_unbound_is_zero(self, store):
        assert calculate("missing * 2", store) == 0

    def test_names_are_case_sensitive(self, store):
        calculate("X = 1", store)
        assert calculate("x", store) == 0
        assert calculate("X", store) == 1


class TestBuiltins:
    def test_builtin_table(self):
        assert set(BUILTINS) == {"sin", "cos", "tan", "asin", "acos", "atan", "abs", "clamp"}

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("clamp(15, 0, 10)", 10),
            ("clamp(-5, 0, 10)", 0),
            ("clamp(5, 0, 10)", 5),
            ("abs(-3)", 3),
            ("sin(0)", 0),
            ("cos(0)", 1),
            ("atan(0)", 0),
            ("2 * abs(-1.5) + 1", 4),
        ],
    )
    def test_builtin(self, line, expected):
        assert calculate(line) == pytest.approx(expected)

    def test_out_of_domain_is_nan(self):
        assert math.isnan(calculate("asin(2)"))

    def test_arguments_evaluated_in_order(self, store):
        assert calculate("clamp(a = 5, a + 1, 10)", store) == 6
        assert store.get_var("a") == 5

    def test_unknown_function(self, store):
        calc = Calc.from_source("1 + foo(2)", store)
        assert calc.exec() == 0
        assert calc.error == "unknown function 'foo'"

    def test_wrong_arity(self, store):
        calc = Calc.from_source("clamp(1, 2)", store)
        assert calc.exec() == 0
        assert "takes 3" in calc.error


class TestStrings:
    def test_string_literal(self):
        assert calculate("'abc'") == "abc"

    def test_string_concatenation(self):
        assert calculate("'a' + 'b'") == "ab"

    def test_string_arithmetic_is_absorbed(self, store):
        calc = Calc.from_source("'a' * 2", store)
        assert calc.exec() == 0
        assert calc.error.startswith("unsupported operand")


class TestCalc:
    def test_keeps_scan_error(self, store):
        calc = Calc.from_source("'abc", store)
        assert calc.scan_error == "unterminated string"
        assert calc.tree is None
        assert calc.exec() == 0

    def test_error_reset_between_runs(self, store):
        calc = Calc.from_source("foo(1)", store)
        calc.exec()
        assert calc.error is not None
        store.set_var("unused", 1)
        calc.tree = None
        calc.exec()
        assert calc.error is None

    def test_deep_tree_is_absorbed(self, store):
        node = ast.Literal(value=1.0)
        for _ in range(5000):
            node = ast.UnaryOp(op="-", operand=node)
        calc = Calc([], node, store)
        assert calc.exec() == 0
        assert calc.error == "expression too deeply nested"
