"""CLI entry point for quill-lang.

Invoked as::

    quill [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m quill.cli.main

Commands
--------
check       Parse a Quill file and report the first syntax error
parse       Dump the parsed AST to JSON or YAML
tokens      Show the token stream of a Quill file
fmt         Format a Quill file to canonical style
version     Show version information

Every FILE argument accepts ``-`` to read from standard input.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from quill.ast.nodes import Block

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def _read_source(path: str) -> str:
    """Read a Quill source file (or stdin for ``-``), exiting on error."""
    if path == "-":
        return click.get_text_stream("stdin").read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _parse_or_exit(source: str, path: str) -> "Block":
    """Parse Quill source, printing the error and exiting on failure."""
    from quill.lexer import LexError
    from quill.parser import ParseError, parse

    logger.debug("Parsing %s (%d characters)", path, len(source))
    try:
        return parse(source)
    except LexError as exc:
        err_console.print(f"[red]Lex error[/red] in {path}: {escape(str(exc))}")
        sys.exit(1)
    except ParseError as exc:
        err_console.print(f"[red]Parse error[/red] in {path}: {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="quill-lang")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Quill scripting language toolkit: lexer, parser, formatter."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from quill import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]quill-lang[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("file", type=click.Path(exists=False, allow_dash=True))
def check_command(file: str) -> None:
    """Parse a Quill file and report whether it is syntactically valid.

    FILE is the path to the .ql file to check.
    """
    source = _read_source(file)
    tree = _parse_or_exit(source, file)
    console.print(f"[green]OK[/green] {file}: {len(tree.body)} statement(s)")


# ---------------------------------------------------------------------------
# tokens command
# ---------------------------------------------------------------------------


@cli.command(name="tokens")
@click.argument("file", type=click.Path(exists=False, allow_dash=True))
@click.option("--comments", is_flag=True, default=False, help="Include COMMENT tokens")
def tokens_command(file: str, comments: bool) -> None:
    """Show the token stream of a Quill file.

    FILE is the path to the .ql file to tokenize.
    """
    from quill.grammar import TokenType
    from quill.lexer import LexError, tokenize

    source = _read_source(file)
    try:
        tokens = tokenize(source)
    except LexError as exc:
        err_console.print(f"[red]Lex error[/red] in {file}: {escape(str(exc))}")
        sys.exit(1)

    table = Table(title=f"Tokens: {file}")
    table.add_column("Location", min_width=8)
    table.add_column("Type", style="bold")
    table.add_column("Value")

    for tok in tokens:
        if tok.type is TokenType.COMMENT and not comments:
            continue
        table.add_row(f"{tok.line}:{tok.col}", tok.type.name, repr(tok.value))

    console.print(table)


# ---------------------------------------------------------------------------
# fmt command
# ---------------------------------------------------------------------------


@cli.command(name="fmt")
@click.argument("file", type=click.Path(exists=False, allow_dash=True))
@click.option("--check", is_flag=True, default=False, help="Check if file is already formatted")
@click.option("--in-place", is_flag=True, default=False, help="Rewrite the file in place")
@click.option("--indent", default=2, show_default=True, type=click.IntRange(min=0), help="Spaces per block level")
def fmt_command(file: str, check: bool, in_place: bool, indent: int) -> None:
    """Format a Quill file to canonical style.

    FILE is the path to the .ql file to format.

    Without --check or --in-place, prints the formatted output to stdout.
    """
    from quill.formatter import QuillFormatter

    source = _read_source(file)
    tree = _parse_or_exit(source, file)
    formatted = QuillFormatter(indent=indent).format(tree)

    if check:
        if formatted == source:
            console.print(f"[green]OK[/green] {file} — already formatted")
            sys.exit(0)
        else:
            console.print(f"[yellow]NEEDS FORMATTING[/yellow] {file}")
            sys.exit(1)
    elif in_place:
        if file == "-":
            err_console.print("[red]Error:[/red] --in-place cannot be used with stdin")
            sys.exit(1)
        Path(file).write_text(formatted, encoding="utf-8")
        console.print(f"[green]Formatted[/green] {file}")
    else:
        syntax = Syntax(formatted, "javascript", line_numbers=True)
        console.print(syntax)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False, allow_dash=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="AST output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def parse_command(file: str, output_format: str, output: str | None) -> None:
    """Parse a Quill file and dump the AST.

    FILE is the path to the .ql file to parse.
    """
    from quill.ast import AstSerializer

    source = _read_source(file)
    tree = _parse_or_exit(source, file)

    serializer = AstSerializer()

    if output_format.lower() == "json":
        text = serializer.to_json(tree, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(tree)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]AST written to[/green] {output}")
    else:
        syntax = Syntax(text, lang, line_numbers=True)
        console.print(syntax)


if __name__ == "__main__":
    cli()
