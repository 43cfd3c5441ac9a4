"""Evaluator: postfix tokens → float, plus the composed entry points.

``evaluate`` is the single entry point callers use: it runs
tokenize → to_postfix → evaluate_postfix and raises an ExpressionError on
failure. ``try_evaluate`` runs the same pipeline and reports the failure as
an EvalOutcome instead.
"""

from __future__ import annotations

import math
import operator
from typing import Callable

from querycalc.errors import DivisionByZero, ExpressionError, MalformedExpression, Overflow
from querycalc.models import EvalOutcome, Number, Operator, OperatorSymbol, Token
from querycalc.parser import to_postfix
from querycalc.tokenizer import tokenize

_BINARY: dict[OperatorSymbol, Callable[[float, float], float]] = {
    OperatorSymbol.ADD: operator.add,
    OperatorSymbol.SUB: operator.sub,
    OperatorSymbol.MUL: operator.mul,
    OperatorSymbol.DIV: operator.truediv,
}


def _apply(symbol: OperatorSymbol, stack: list[float]) -> float:
    """Pop the operands of ``symbol`` off ``stack`` and return the result."""
    if len(stack) < symbol.arity:
        raise MalformedExpression(f"Operator {symbol.value!r} is missing an operand")

    if symbol is OperatorSymbol.NEGATE:
        return -stack.pop()

    right = stack.pop()
    left = stack.pop()
    if symbol is OperatorSymbol.DIV and right == 0:
        raise DivisionByZero("Division by zero")
    return _BINARY[symbol](left, right)


def evaluate_postfix(tokens: list[Token]) -> float:
    """Compute the value of a postfix token sequence.

    Raises:
        DivisionByZero: a ``/`` whose right operand is exactly zero.
        MalformedExpression: an operator without enough operands, or a
            final stack that does not hold exactly one value.
        Overflow: an operand or intermediate result that is not finite.
    """
    stack: list[float] = []
    for tok in tokens:
        if isinstance(tok, Number):
            value = tok.value
        elif isinstance(tok, Operator):
            value = _apply(tok.symbol, stack)
        else:
            raise MalformedExpression("Parenthesis in postfix sequence")
        if not math.isfinite(value):
            raise Overflow(f"Result out of range: {value}")
        stack.append(value)

    if len(stack) != 1:
        raise MalformedExpression(f"Expected a single result, got {len(stack)} values")
    return stack[0]


def evaluate(expression: str) -> float:
    """Evaluate an arithmetic expression such as ``"(2+3)*4"``.

    Args:
        expression: Characters from ``[0-9+\\-*/().]`` only, no whitespace.

    Returns:
        The value as a float.

    Raises:
        ExpressionError: one of its subclasses, naming what went wrong.
    """
    try:
        return evaluate_postfix(to_postfix(tokenize(expression)))
    except ExpressionError as err:
        if err.expression is None:
            err.expression = expression
        raise


def try_evaluate(expression: str) -> EvalOutcome:
    """Evaluate ``expression`` and report failure in the outcome, not by raising."""
    try:
        value = evaluate(expression)
    except ExpressionError as err:
        return EvalOutcome(expression=expression, error=err.kind, message=str(err))
    return EvalOutcome(expression=expression, value=value)
