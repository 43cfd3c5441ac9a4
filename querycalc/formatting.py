"""Display helpers: numbers for answers, tokens for the CLI tables."""

from __future__ import annotations

from querycalc.models import Number, Operator, OperatorSymbol, Token

DEFAULT_PRECISION = 10


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a result for display.

    Integral values drop the decimal point ("150", "-7"); everything else is
    rounded to ``precision`` places and trailing zeros trimmed ("3.5"),
    always in fixed-point notation ("0.00001", never "1e-05").
    """
    rounded = round(value, precision)
    if rounded.is_integer():
        # int() also folds -0.0 into "0"
        return str(int(rounded))
    return f"{rounded:.{precision}f}".rstrip("0").rstrip(".")


def token_text(token: Token) -> str:
    """Source-like text for a single token."""
    if isinstance(token, Number):
        return format_number(token.value)
    return token.symbol.value


def describe_token(token: Token) -> tuple[str, str]:
    """Return (kind, text) for a token, e.g. ("number", "-3")."""
    if isinstance(token, Number):
        return "number", token_text(token)
    if isinstance(token, Operator):
        kind = "unary" if token.symbol is OperatorSymbol.NEGATE else "operator"
        return kind, token_text(token)
    return "paren", token_text(token)


def render_postfix(tokens: list[Token]) -> str:
    """Space-separated RPN text, e.g. "2 3 4 * +"."""
    return " ".join(token_text(t) for t in tokens)
