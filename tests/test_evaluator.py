"""Tests for the evaluator and the composed evaluate()/try_evaluate() entry points."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from querycalc.errors import (
    DivisionByZero,
    ErrorKind,
    ExpressionError,
    MalformedExpression,
    MismatchedParentheses,
    Overflow,
)
from querycalc.evaluator import evaluate, evaluate_postfix, try_evaluate
from querycalc.models import Number, Operator, OperatorSymbol, Paren, ParenSymbol


# --- Basic arithmetic ---

def test_addition():
    assert evaluate("2+3") == pytest.approx(5.0)


def test_subtraction():
    assert evaluate("10-4") == pytest.approx(6.0)


def test_multiplication():
    assert evaluate("3*7") == pytest.approx(21.0)


def test_division():
    assert evaluate("7/2") == 3.5


def test_decimal_numbers():
    assert evaluate("3.14*2") == pytest.approx(6.28)


def test_single_number():
    assert evaluate("42") == 42.0


# --- Precedence and associativity ---

def test_precedence_mul_before_add():
    assert evaluate("2+3*4") == 14


def test_parentheses_override():
    assert evaluate("(2+3)*4") == 20


def test_precedence_complex():
    """10 - 2 * 3 + 4 / 2 should be 6."""
    assert evaluate("10-2*3+4/2") == pytest.approx(6.0)


def test_left_associative_subtraction():
    assert evaluate("8-3-2") == 3


def test_left_associative_division():
    assert evaluate("20/4/5") == 1


def test_nested_parentheses():
    assert evaluate("((2+3)*(4-1))") == pytest.approx(15.0)


# --- Negative numbers ---

def test_negative_result():
    assert evaluate("5-12") == -7


def test_leading_negative():
    assert evaluate("-3+5") == 2


def test_negated_group():
    assert evaluate("-(3+5)") == -8


def test_negated_group_in_product():
    assert evaluate("2*-(1+1)") == -4


def test_negative_operand_after_operator():
    assert evaluate("4*-2") == -8


def test_subtract_negative():
    assert evaluate("5--3") == 8


# --- Errors ---

def test_division_by_zero():
    with pytest.raises(DivisionByZero) as exc:
        evaluate("5/0")
    assert exc.value.kind is ErrorKind.DIVISION_BY_ZERO
    assert exc.value.expression == "5/0"


def test_division_by_zero_is_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        evaluate("1/(2-2)")


def test_division_by_negative_zero():
    with pytest.raises(DivisionByZero):
        evaluate("1/-0")


def test_overflowing_product():
    big = "1" + "0" * 300
    with pytest.raises(Overflow) as exc:
        evaluate(f"{big}*{big}")
    assert exc.value.kind is ErrorKind.OVERFLOW


def test_overflow_is_overflow_error():
    big = "1" + "0" * 300
    with pytest.raises(OverflowError):
        evaluate(f"{big}/0.0000000001")


def test_huge_literals_never_yield_nan():
    outcome = try_evaluate("9" * 400 + "-" + "9" * 400)
    assert not outcome.ok
    assert outcome.error is ErrorKind.INVALID_NUMBER


def test_postfix_rejects_infinite_operand():
    with pytest.raises(Overflow):
        evaluate_postfix([Number(float("inf"))])


def test_mismatched_open():
    with pytest.raises(MismatchedParentheses):
        evaluate("(2+3")


def test_mismatched_close():
    with pytest.raises(MismatchedParentheses):
        evaluate("2+3)")


@pytest.mark.parametrize("expr", ["", "()", "2+", "*3", "2++3", "5-", "-", "2(3)"])
def test_malformed(expr):
    with pytest.raises(MalformedExpression) as exc:
        evaluate(expr)
    assert exc.value.kind is ErrorKind.MALFORMED_EXPRESSION


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        evaluate("2++3")


# --- evaluate_postfix directly ---

def test_postfix_right_operand_popped_first():
    tokens = [Number(8.0), Number(2.0), Operator(OperatorSymbol.DIV)]
    assert evaluate_postfix(tokens) == 4.0


def test_postfix_negate():
    assert evaluate_postfix([Number(3.0), Operator(OperatorSymbol.NEGATE)]) == -3.0


def test_postfix_leftover_operands():
    with pytest.raises(MalformedExpression):
        evaluate_postfix([Number(1.0), Number(2.0)])


def test_postfix_rejects_parens():
    with pytest.raises(MalformedExpression):
        evaluate_postfix([Number(1.0), Paren(ParenSymbol.OPEN)])


# --- try_evaluate ---

def test_try_evaluate_ok():
    outcome = try_evaluate("7/2")
    assert outcome.ok
    assert outcome.value == 3.5
    assert outcome.error is None


def test_try_evaluate_error_kind():
    outcome = try_evaluate("5/0")
    assert not outcome.ok
    assert outcome.value is None
    assert outcome.error is ErrorKind.DIVISION_BY_ZERO
    assert outcome.to_dict()["error"] == "DivisionByZero"


@pytest.mark.parametrize("expr,kind", [
    ("2+a", ErrorKind.INVALID_CHARACTER),
    ("1.2.3", ErrorKind.INVALID_NUMBER),
    ("(1", ErrorKind.MISMATCHED_PARENTHESES),
    ("1/0", ErrorKind.DIVISION_BY_ZERO),
    ("1+", ErrorKind.MALFORMED_EXPRESSION),
])
def test_try_evaluate_reports_every_kind(expr, kind):
    assert try_evaluate(expr).error is kind


# --- Purity ---

def test_repeated_evaluation_is_identical():
    results = {evaluate("(1.5+2.25)*4/3-0.1") for _ in range(50)}
    assert len(results) == 1


def test_concurrent_evaluation():
    exprs = ["2+3*4", "(2+3)*4", "8-3-2", "20/4/5"] * 25
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(evaluate, exprs))
    assert results == [14, 20, 3, 1] * 25


def test_all_errors_share_base_class():
    for expr in ("2+a", "1.2.3", "(1", "1/0", "1+"):
        with pytest.raises(ExpressionError):
            evaluate(expr)
