"""Data models for the querycalc expression pipeline.

OperatorSymbol, ParenSymbol, the Number/Operator/Paren token kinds and
EvalOutcome. These are the typed structures that flow through
tokenizer → parser → evaluator → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from querycalc.errors import ErrorKind


class OperatorSymbol(str, Enum):
    """Arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    # Produced by the parser only, never by the tokenizer
    NEGATE = "neg"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @property
    def arity(self) -> int:
        return 1 if self is OperatorSymbol.NEGATE else 2


class ParenSymbol(str, Enum):
    """Grouping symbols."""

    OPEN = "("
    CLOSE = ")"


_PRECEDENCE: dict[OperatorSymbol, int] = {
    OperatorSymbol.ADD: 1,
    OperatorSymbol.SUB: 1,
    OperatorSymbol.MUL: 2,
    OperatorSymbol.DIV: 2,
    OperatorSymbol.NEGATE: 3,
}


@dataclass(frozen=True)
class Number:
    """A numeric literal, sign already folded in."""

    value: float


@dataclass(frozen=True)
class Operator:
    """An arithmetic operator."""

    symbol: OperatorSymbol


@dataclass(frozen=True)
class Paren:
    """An opening or closing parenthesis."""

    symbol: ParenSymbol

    @property
    def is_open(self) -> bool:
        return self.symbol is ParenSymbol.OPEN


Token = Union[Number, Operator, Paren]


@dataclass
class EvalOutcome:
    """Result of evaluating one expression without raising.

    Exactly one of ``value`` / ``error`` is set.
    """

    expression: str
    value: Optional[float] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "expression": self.expression,
            "value": self.value,
            "error": self.error.value if self.error else None,
            "message": self.message,
        }
