"""Error taxonomy for querycalc.

Every failure of the expression pipeline is an ExpressionError carrying an
ErrorKind, so callers can either catch the class they care about or branch
on ``err.kind``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories of the tokenizer, parser and evaluator."""

    INVALID_CHARACTER = "InvalidCharacter"
    INVALID_NUMBER = "InvalidNumber"
    MISMATCHED_PARENTHESES = "MismatchedParentheses"
    DIVISION_BY_ZERO = "DivisionByZero"
    MALFORMED_EXPRESSION = "MalformedExpression"
    OVERFLOW = "Overflow"


class ExpressionError(ValueError):
    """Base class for all expression failures."""

    kind: ErrorKind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(
        self,
        message: str,
        expression: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.expression = expression
        self.position = position

    def __str__(self) -> str:
        if self.position is not None:
            return f"{self.message} (at position {self.position})"
        return self.message


class InvalidCharacter(ExpressionError):
    kind = ErrorKind.INVALID_CHARACTER


class InvalidNumber(ExpressionError):
    kind = ErrorKind.INVALID_NUMBER


class MismatchedParentheses(ExpressionError):
    kind = ErrorKind.MISMATCHED_PARENTHESES


class DivisionByZero(ExpressionError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class MalformedExpression(ExpressionError):
    kind = ErrorKind.MALFORMED_EXPRESSION


class Overflow(ExpressionError, OverflowError):
    """An intermediate or final result left the finite float range."""

    kind = ErrorKind.OVERFLOW


class ConfigError(ValueError):
    """Raised when an answers file cannot be read or has the wrong shape."""
