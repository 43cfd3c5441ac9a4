"""Query processor: turns a free-text question into an answer string.

Rules are tried in order and the first one that produces an answer wins:

1. "largest" questions → the biggest number mentioned in the query
2. arithmetic → word operators normalized, expression extracted and evaluated
3. keyword answers → canned responses matched by substring (see config.py)

Anything else answers with the empty string. User text never raises.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from querycalc.config import QueryConfig
from querycalc.evaluator import try_evaluate
from querycalc.formatting import format_number

logger = logging.getLogger(__name__)

# Numbers mentioned in a "which is the largest" question
_NUMBER_RE = re.compile(r"-?\d+\.?\d*")

# Word operators → symbols, applied in this order
_WORD_OPERATORS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\bplus\b|\badded to\b|\badd\b", re.IGNORECASE), "+"),
    (re.compile(r"\bminus\b|\bsubtract(?:ed)?(?: from)?\b", re.IGNORECASE), "-"),
    (re.compile(r"\btimes\b|\bmultiplied by\b|\bmultiply\b", re.IGNORECASE), "*"),
    (re.compile(r"\bdivided by\b|\bdivide\b", re.IGNORECASE), "/"),
]

# First run that looks like arithmetic. A leading '-' counts only when it is
# not glued to a word ("COVID-19" yields "19", not "-19").
_CANDIDATE_RE = re.compile(r"(?:(?<![\w)])-)?[0-9(][0-9+\-*/().\s]*")
_EXPRESSION_RE = re.compile(r"[0-9+\-*/().]+")
_WHITESPACE_RE = re.compile(r"\s+")


def largest_number(query: str) -> Optional[float]:
    """Return the largest number mentioned in ``query``, or None if there is none."""
    nums = [float(m.group(0)) for m in _NUMBER_RE.finditer(query)]
    return max(nums) if nums else None


def normalize_operators(query: str) -> str:
    """Rewrite word operators as symbols: "45 plus 53" → "45 + 53"."""
    for pattern, symbol in _WORD_OPERATORS:
        query = pattern.sub(symbol, query)
    return query


def extract_expression(text: str) -> Optional[str]:
    """Pull the first arithmetic-looking substring out of ``text``.

    Whitespace is removed and sentence-final periods dropped, so
    "What is (2 + 3) * 4." gives "(2+3)*4". Returns None when no candidate
    exists or it contains characters the evaluator does not accept.
    """
    match = _CANDIDATE_RE.search(text)
    if not match:
        return None
    expr = _WHITESPACE_RE.sub("", match.group(0)).rstrip(".")
    if not _EXPRESSION_RE.fullmatch(expr):
        return None
    return expr


def _answer_largest(query: str, config: QueryConfig) -> Optional[str]:
    if "largest" not in query.lower():
        return None
    value = largest_number(query)
    if value is None:
        return None
    logger.debug("largest-number rule matched: %s", value)
    return format_number(value, config.precision)


def _answer_arithmetic(query: str, config: QueryConfig) -> Optional[str]:
    expr = extract_expression(normalize_operators(query))
    if expr is None:
        return None
    outcome = try_evaluate(expr)
    if not outcome.ok:
        logger.debug("candidate %r rejected: %s (%s)", expr, outcome.error.value, outcome.message)
        return None
    logger.debug("arithmetic rule matched: %s = %s", expr, outcome.value)
    return format_number(outcome.value, config.precision)


def _answer_keyword(query: str, config: QueryConfig) -> Optional[str]:
    lowered = query.lower()
    for rule in config.answers:
        if rule.matches(lowered):
            logger.debug("keyword rule matched: %r", rule.keyword)
            return rule.answer
    return None


def process_query(query: Optional[str], config: Optional[QueryConfig] = None) -> str:
    """Answer a free-text query.

    Args:
        query: The question, e.g. "What is 2 + 3 * 4?". None is treated as "".
        config: Keyword answers and precision. Defaults to QueryConfig.default().

    Returns:
        The answer, or "" when no rule applies.
    """
    q = query or ""
    config = config or QueryConfig.default()

    for rule in (_answer_largest, _answer_arithmetic, _answer_keyword):
        answer = rule(q, config)
        if answer is not None:
            return answer
    return ""
