from __future__ import annotations

import math

import pytest

from graphcalc import EvalFailure, Evaluated, ExpressionEvaluator, SyntaxFailure, ValidExpression
from graphcalc.expression import evaluate_at, validate


@pytest.fixture
def evaluator() -> ExpressionEvaluator:
    return ExpressionEvaluator()


@pytest.mark.parametrize(
    "expression",
    ["x^2", "x^3", "sin(x)", "cos(x)", "tan(x)", "sqrt(x)", "abs(x)", "1/x", "log(x)", "log(x, 10)", "log(x, 2)"],
)
def test_preset_expressions_validate(evaluator: ExpressionEvaluator, expression: str) -> None:
    result = evaluator.validate(expression)
    assert isinstance(result, ValidExpression)
    assert result.ok


@pytest.mark.parametrize("expression", ["x+", "sin(", "x**", "*x", "(x"])
def test_malformed_expressions_fail_with_message(evaluator: ExpressionEvaluator, expression: str) -> None:
    result = evaluator.validate(expression)
    assert isinstance(result, SyntaxFailure)
    assert not result.ok
    assert result.message.strip()


def test_unbound_symbols_fail_validation(evaluator: ExpressionEvaluator) -> None:
    result = evaluator.validate("y + 1")
    assert isinstance(result, SyntaxFailure)
    assert "y" in result.message


def test_relations_are_not_functions(evaluator: ExpressionEvaluator) -> None:
    result = evaluator.validate("x < 2")
    assert isinstance(result, SyntaxFailure)


def test_calculator_notation(evaluator: ExpressionEvaluator) -> None:
    assert evaluator.evaluate_at("x^2", 3.0) == Evaluated(x=3.0, y=9.0)
    assert evaluator.evaluate_at("2x + 1", 2.0).y == pytest.approx(5.0)
    assert evaluator.evaluate_at("e^x", 1.0).y == pytest.approx(math.e)
    assert evaluator.evaluate_at("pi*x", 1.0).y == pytest.approx(math.pi)
    assert evaluator.evaluate_at("ln(x)", math.e).y == pytest.approx(1.0)
    assert evaluator.evaluate_at("log(x, 10)", 1000.0).y == pytest.approx(3.0)
    assert evaluator.evaluate_at("log10(x)", 100.0).y == pytest.approx(2.0)
    assert evaluator.evaluate_at("log2(x)", 8.0).y == pytest.approx(3.0)
    assert evaluator.evaluate_at("abs(x)", -4.0).y == pytest.approx(4.0)


def test_constant_expressions_evaluate(evaluator: ExpressionEvaluator) -> None:
    assert evaluator.evaluate_at("3", 0.5).y == pytest.approx(3.0)


@pytest.mark.parametrize(
    "expression,x",
    [
        ("1/x", 0.0),
        ("log(x)", 0.0),
        ("log(x)", -1.0),
        ("sqrt(x)", -4.0),
        ("log(x, -1)", 2.0),
        ("log(x, -1)", -3.0),
        ("exp(x)", 1000.0),
    ],
)
def test_domain_failures_are_eval_failures(evaluator: ExpressionEvaluator, expression: str, x: float) -> None:
    result = evaluator.evaluate_at(expression, x)
    assert isinstance(result, EvalFailure)
    assert not result.ok
    assert result.x == x


def test_exceptions_during_evaluation_become_eval_failures(evaluator: ExpressionEvaluator, monkeypatch) -> None:
    def _boom(_x):
        raise ZeroDivisionError("boom")

    monkeypatch.setattr(evaluator, "compile", lambda _expression: _boom)
    result = evaluator.evaluate_at("x", 1.0)
    assert isinstance(result, EvalFailure)
    assert "boom" in result.reason


def test_invalid_expression_evaluates_to_failure(evaluator: ExpressionEvaluator) -> None:
    assert isinstance(evaluator.evaluate_at("x+", 1.0), EvalFailure)


def test_custom_namespace_extends_parser() -> None:
    evaluator = ExpressionEvaluator({"k": 3})
    assert evaluator.evaluate_at("k*x", 2.0).y == pytest.approx(6.0)


def test_compiled_callables_are_cached(evaluator: ExpressionEvaluator) -> None:
    assert evaluator.compile("sin(x)") is evaluator.compile("sin(x)")


def test_module_level_helpers_use_shared_evaluator() -> None:
    assert validate("cos(x)").ok
    assert evaluate_at("cos(x)", 0.0).y == pytest.approx(1.0)


def test_functions_printed_through_math_and_functools(evaluator: ExpressionEvaluator) -> None:
    assert evaluator.validate("gamma(x)").ok
    assert evaluator.evaluate_at("gamma(x)", 1.5) == Evaluated(x=1.5, y=pytest.approx(math.sqrt(math.pi) / 2))
    assert evaluator.evaluate_at("Max(x, 1)", 2.0) == Evaluated(x=2.0, y=2.0)
    assert evaluator.evaluate_at("Min(x, 1)", 2.0) == Evaluated(x=2.0, y=1.0)
    assert evaluator.evaluate_at("Max(x, 1)", -3.0).y == pytest.approx(1.0)


def test_bare_diagnostics_name_the_error_type(evaluator: ExpressionEvaluator) -> None:
    result = evaluator.validate("zoo")
    assert isinstance(result, SyntaxFailure)
    assert "ComplexInfinity" in result.message
    assert len(result.message.split()) > 1
