"""querycalc — arithmetic expression evaluator behind a free-text query answerer.

Tokenizes an expression, reorders it into postfix with the shunting-yard
algorithm and evaluates it on an operand stack. The query processor finds
the arithmetic inside a question ("What is 45 plus 53?"), evaluates it and
formats the answer, falling back to keyword answers.

Usage:
    python -m querycalc eval "(2+3)*4"             # 20
    python -m querycalc ask "What is 7 / 2?"       # 3.5
    python -m querycalc rpn "2+3*4"                # 2 3 4 * +
"""
