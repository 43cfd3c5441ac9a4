"""Tokenizer: expression string → ordered list of tokens.

Single left-to-right scan. The only lookahead rule is for ``-``: in prefix
position (start of input, after an operator, after ``(``) a following digit
run is folded into a negative Number literal.
"""

from __future__ import annotations

import math
import re

from querycalc.errors import InvalidCharacter, InvalidNumber
from querycalc.models import Number, Operator, OperatorSymbol, Paren, ParenSymbol, Token

_NUMBER_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_NUMBER_CHARS = frozenset("0123456789.")

_OPERATORS = {
    "+": OperatorSymbol.ADD,
    "-": OperatorSymbol.SUB,
    "*": OperatorSymbol.MUL,
    "/": OperatorSymbol.DIV,
}


def _scan_number(expression: str, start: int) -> int:
    """Return the index just past the run of digits/dots starting at ``start``."""
    end = start
    while end < len(expression) and expression[end] in _NUMBER_CHARS:
        end += 1
    return end


def _to_number(text: str, expression: str, position: int) -> Number:
    # Stricter than float(): "1.2.3", ".5" and "5." are all rejected
    if not _NUMBER_RE.fullmatch(text):
        raise InvalidNumber(f"Invalid number: {text!r}", expression, position)
    value = float(text)
    if math.isinf(value):
        raise InvalidNumber(f"Number too large: {text[:20]}...", expression, position)
    return Number(value)


def _is_prefix_position(tokens: list[Token]) -> bool:
    """True when a ``-`` here can only be a sign, not a binary minus."""
    if not tokens:
        return True
    prev = tokens[-1]
    return isinstance(prev, Operator) or (isinstance(prev, Paren) and prev.is_open)


def tokenize(expression: str) -> list[Token]:
    """Split a pre-validated expression into tokens.

    Args:
        expression: Characters from ``[0-9+\\-*/().]`` only, no whitespace.

    Returns:
        Tokens in input order.

    Raises:
        InvalidCharacter: a character outside the allowed set.
        InvalidNumber: a digit run that is not a well-formed decimal, or
            one too large to fit in a float.
    """
    tokens: list[Token] = []
    i = 0

    while i < len(expression):
        ch = expression[i]

        if ch == "(":
            tokens.append(Paren(ParenSymbol.OPEN))
            i += 1
        elif ch == ")":
            tokens.append(Paren(ParenSymbol.CLOSE))
            i += 1
        elif ch == "-" and _is_prefix_position(tokens):
            end = _scan_number(expression, i + 1)
            if end == i + 1:
                # Lone minus: left for the parser to treat as negation
                tokens.append(Operator(OperatorSymbol.SUB))
            else:
                tokens.append(_to_number(expression[i:end], expression, i))
            i = end
        elif ch in _OPERATORS:
            tokens.append(Operator(_OPERATORS[ch]))
            i += 1
        elif ch in _NUMBER_CHARS:
            end = _scan_number(expression, i)
            tokens.append(_to_number(expression[i:end], expression, i))
            i = end
        else:
            raise InvalidCharacter(f"Invalid character in expression: {ch!r}", expression, i)

    return tokens
