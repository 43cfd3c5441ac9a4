"""Parser: infix tokens → postfix (RPN) tokens via the shunting-yard algorithm.

Binary operators are left-associative: an operator on the stack with
precedence >= the incoming one is popped first, so ``8-3-2`` becomes
``8 3 - 2 -``. A ``-`` in prefix position (start, after an operator, after
``(``) is rewritten to the unary NEGATE operator, which binds tighter than
every binary operator and is pushed without popping.
"""

from __future__ import annotations

from typing import Optional

from querycalc.errors import MismatchedParentheses
from querycalc.models import Number, Operator, OperatorSymbol, Paren, Token


def _in_prefix_position(prev: Optional[Token]) -> bool:
    if prev is None:
        return True
    return isinstance(prev, Operator) or (isinstance(prev, Paren) and prev.is_open)


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Reorder infix tokens into postfix order.

    Args:
        tokens: Output of ``tokenize``.

    Returns:
        A new list in Reverse Polish order. Parentheses never appear in it.

    Raises:
        MismatchedParentheses: a ``)`` without its ``(`` or vice versa.
    """
    output: list[Token] = []
    ops: list[Token] = []
    prev: Optional[Token] = None

    for tok in tokens:
        if isinstance(tok, Number):
            output.append(tok)

        elif isinstance(tok, Operator):
            if tok.symbol is OperatorSymbol.SUB and _in_prefix_position(prev):
                ops.append(Operator(OperatorSymbol.NEGATE))
            else:
                while ops:
                    top = ops[-1]
                    if isinstance(top, Operator) and top.symbol.precedence >= tok.symbol.precedence:
                        output.append(ops.pop())
                        continue
                    break
                ops.append(tok)

        elif tok.is_open:
            ops.append(tok)

        else:
            while ops and not (isinstance(ops[-1], Paren) and ops[-1].is_open):
                output.append(ops.pop())
            if not ops:
                raise MismatchedParentheses("Mismatched parentheses: unexpected ')'")
            ops.pop()  # discard the matching '('

        prev = tok

    while ops:
        top = ops.pop()
        if isinstance(top, Paren):
            raise MismatchedParentheses("Mismatched parentheses: unclosed '('")
        output.append(top)

    return output
