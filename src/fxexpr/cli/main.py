"""
fxexpr CLI application.

Developer commands for checking effect-parameter expressions outside
the editor:

- fmt: print the canonical form
- check: canonical form plus inferred type
- tokens: tokenizer output
- highlight: colorized rendering
- complete: completion suggestions for a prefix
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from fxexpr.cli.utils import (
    configure_logging,
    parse_declarations,
    resolve_manifest,
    version_callback,
)
from fxexpr.core.errors import ExpressionParseError, ManifestError
from fxexpr.core.expression_lang import (
    SyntaxHighlight,
    TokenKind,
    find_matching_paren,
    get_completions,
    get_result_type,
    highlight_spans,
    parse_expr,
    to_string,
    tokenize,
)
from fxexpr.core.ir import Expr, ReturnType

app = typer.Typer(
    help="fxexpr - typed expression language for particle-effect parameters",
    no_args_is_help=True,
)

console = Console()

_STYLES: dict[SyntaxHighlight, str] = {
    SyntaxHighlight.NUMBER: "cyan",
    SyntaxHighlight.STRING: "green",
    SyntaxHighlight.FUNCTION: "magenta",
    SyntaxHighlight.OPERATOR: "bold",
    SyntaxHighlight.IDENTIFIER: "blue",
    SyntaxHighlight.BUILTIN: "yellow",
    SyntaxHighlight.PUNCTUATION: "dim",
    SyntaxHighlight.ERROR: "bold red",
}


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """fxexpr CLI main callback for global options."""
    configure_logging(verbose)


def _parse_or_exit(source: str) -> Expr:
    try:
        return parse_expr(source)
    except ExpressionParseError as e:
        console.print(f"[red]error[/red] ({e.category}): {escape(e.message)}")
        console.print(f"  {escape(source)}", highlight=False)
        console.print("  " + " " * e.pos + "^", highlight=False)
        raise typer.Exit(code=1)


@app.command(name="fmt")
def fmt_command(
    expression: str = typer.Argument(..., help="Expression text"),
) -> None:
    """Print the canonical form of an expression."""
    expr = _parse_or_exit(expression)
    console.print(escape(to_string(expr)), highlight=False)


@app.command(name="check")
def check_command(
    expression: str = typer.Argument(..., help="Expression text"),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="fxexpr.toml with attribute/property types"
    ),
    attrs: list[str] = typer.Option([], "--attr", help="Declare an attribute: NAME=TYPE"),
    props: list[str] = typer.Option([], "--prop", help="Declare a property: NAME=TYPE"),
) -> None:
    """Parse an expression and infer its result type."""
    try:
        declared = resolve_manifest(manifest)
    except ManifestError as e:
        console.print(f"[red]error[/red]: {escape(e.message)}")
        raise typer.Exit(code=1)

    attribute_types = {**declared.attributes, **parse_declarations(attrs, "--attr")}
    property_types = {**declared.properties, **parse_declarations(props, "--prop")}

    expr = _parse_or_exit(expression)
    console.print(escape(to_string(expr)), highlight=False)

    result = get_result_type(expr, attribute_types, property_types)
    if result is None:
        console.print("type: [yellow]unknown[/yellow] (undeclared attribute or property)")
        raise typer.Exit(code=2)
    if result == ReturnType.ERROR:
        console.print("type: [red]error[/red] (operand types do not match)")
        raise typer.Exit(code=2)
    console.print(f"type: [green]{result.value}[/green]")


@app.command(name="tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression text"),
    whitespace: bool = typer.Option(False, "--whitespace", help="Include whitespace tokens"),
) -> None:
    """Show the tokenizer output for an expression."""
    table = Table(title="Tokens")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    table.add_column("Span", justify="right")

    for tok in tokenize(expression):
        if tok.kind == TokenKind.WHITESPACE and not whitespace:
            continue
        table.add_row(tok.kind.value, escape(repr(tok.text)), f"{tok.start}..{tok.end}")

    console.print(table)


@app.command(name="highlight")
def highlight_command(
    expression: str = typer.Argument(..., help="Expression text"),
    cursor: int | None = typer.Option(
        None, "--cursor", "-c", help="Cursor offset; marks the parenthesis pair there"
    ),
) -> None:
    """Print an expression with syntax colors."""
    parens = find_matching_paren(expression, cursor) if cursor is not None else None
    text = Text(expression)
    for span in highlight_spans(expression, parens):
        style = "reverse " + _STYLES[span.category] if span.matched else _STYLES[span.category]
        text.stylize(style, span.start, span.end)
    console.print(text)


@app.command(name="complete")
def complete_command(
    prefix: str = typer.Argument("", help="Word prefix to complete"),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="fxexpr.toml with attribute/property names"
    ),
) -> None:
    """List completion suggestions for a prefix."""
    try:
        declared = resolve_manifest(manifest)
    except ManifestError as e:
        console.print(f"[red]error[/red]: {escape(e.message)}")
        raise typer.Exit(code=1)

    items = get_completions(
        prefix,
        attributes=list(declared.attributes) or None,
        properties=list(declared.properties),
    )
    for item in items:
        console.print(
            f"{escape(item.label)}\t{item.kind.value}\t{escape(item.insert_text)}",
            highlight=False,
        )


def main() -> None:
    """Entry point for the fxexpr console script."""
    app()
