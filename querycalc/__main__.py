"""CLI for querycalc.

Usage:
    python -m querycalc eval "(2+3)*4"              # Evaluate an expression
    python -m querycalc eval -- "-3+5"              # Leading minus needs --
    python -m querycalc ask "What is 45 plus 53?"   # Answer a free-text query
    python -m querycalc tokens "2*-(1+1)"           # Show the token stream
    python -m querycalc rpn "2+3*4"                 # Show the postfix form
    python -m querycalc answers                     # List keyword answers
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from querycalc.config import QueryConfig
from querycalc.errors import ConfigError, ExpressionError
from querycalc.evaluator import evaluate
from querycalc.formatting import describe_token, format_number, render_postfix
from querycalc.parser import to_postfix
from querycalc.query import process_query
from querycalc.tokenizer import tokenize

app = typer.Typer(
    name="querycalc",
    help="Arithmetic expression evaluator and query answerer",
    no_args_is_help=True,
)
console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log rule matches and rejected candidates"),
) -> None:
    """Arithmetic expression evaluator and query answerer."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )


def _fail(err: ExpressionError) -> NoReturn:
    console.print(f"[red]{err.kind.value}:[/red] {err}")
    raise typer.Exit(1)


def _load_config(answers: Optional[Path]) -> QueryConfig:
    try:
        return QueryConfig.from_env(answers)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise typer.Exit(2)


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '(2+3)*4'"),
    precision: int = typer.Option(10, "--precision", "-p", min=0, help="Decimal places kept in the output"),
) -> None:
    """Evaluate an arithmetic expression."""
    try:
        value = evaluate(expression.replace(" ", ""))
    except ExpressionError as err:
        _fail(err)
    typer.echo(format_number(value, precision))


@app.command("ask")
def cmd_ask(
    query: str = typer.Argument(help="Free-text question, e.g. 'What is 2 + 3 * 4?'"),
    answers: Optional[Path] = typer.Option(None, "--answers", help="JSON answers file (overrides QUERYCALC_ANSWERS)"),
) -> None:
    """Answer a free-text query."""
    config = _load_config(answers)
    answer = process_query(query, config)
    if not answer:
        console.print("[yellow]No answer for that query.[/yellow]")
        raise typer.Exit(1)
    typer.echo(answer)


@app.command("tokens")
def cmd_tokens(
    expression: str = typer.Argument(help="Expression to tokenize"),
) -> None:
    """Show the token stream of an expression."""
    try:
        tokens = tokenize(expression.replace(" ", ""))
    except ExpressionError as err:
        _fail(err)

    table = Table(title=f"Tokens: {expression}", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="green")
    table.add_column("Text", justify="right")

    kind_styles = {"number": "cyan", "operator": "yellow", "paren": "magenta"}
    for i, tok in enumerate(tokens):
        kind, text = describe_token(tok)
        style = kind_styles.get(kind, "white")
        table.add_row(str(i), kind, f"[{style}]{text}[/{style}]")

    console.print()
    console.print(table)
    console.print()


@app.command("rpn")
def cmd_rpn(
    expression: str = typer.Argument(help="Expression to convert"),
) -> None:
    """Print the postfix (Reverse Polish) form of an expression."""
    try:
        postfix = to_postfix(tokenize(expression.replace(" ", "")))
    except ExpressionError as err:
        _fail(err)
    typer.echo(render_postfix(postfix))


@app.command("answers")
def cmd_answers(
    answers: Optional[Path] = typer.Option(None, "--answers", help="JSON answers file (overrides QUERYCALC_ANSWERS)"),
) -> None:
    """List the configured keyword answers, in match order."""
    config = _load_config(answers)
    if not config.answers:
        console.print("[yellow]No keyword answers configured.[/yellow]")
        return

    table = Table(title="Keyword Answers", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Keyword", style="green", min_width=12)
    table.add_column("Answer", min_width=30)

    for i, rule in enumerate(config.answers, 1):
        table.add_row(str(i), rule.keyword, rule.answer)

    console.print()
    console.print(table)
    console.print(f"[dim]Precision: {config.precision} decimal places[/dim]")
    console.print()


if __name__ == "__main__":
    app()
