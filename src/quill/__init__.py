"""quill-lang — lexer, recursive-descent parser and formatter for the Quill scripting language.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import quill

    # Parse Quill source into an AST
    tree = quill.parse('''
        items = [1, 2, 3];
        total = items.length * (price + tax);
        log({"total": total, "ok": !failed});
    ''')

    # Parse a single expression
    expr = quill.parse_expression("a.b[c].d()")

    # Format back to canonical style
    canonical = quill.format(tree)

    quill.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from quill.ast.nodes import Block, Expression
    from quill.grammar.tokens import Token


def tokenize(source: str) -> list["Token"]:
    """Tokenize Quill source text.

    Parameters
    ----------
    source:
        Complete Quill source text.

    Returns
    -------
    list[Token]
        All tokens, COMMENT tokens included, terminated by EOF.

    Raises
    ------
    quill.lexer.LexError
        If the source contains invalid characters or unterminated literals.
    """
    from quill.lexer.lexer import tokenize as _tokenize

    return _tokenize(source)


def parse(source: str) -> "Block":
    """Parse a Quill source string into a ``Block`` AST.

    Parameters
    ----------
    source:
        Complete Quill source text.

    Returns
    -------
    Block
        The root block of the program.

    Raises
    ------
    quill.lexer.LexError
        If the source contains invalid characters.
    quill.parser.ParseError
        On the first syntax error.
    """
    from quill.parser.parser import parse as _parse

    return _parse(source)


def parse_expression(source: str) -> "Expression":
    """Parse source text holding exactly one expression.

    Raises
    ------
    quill.parser.ParseError
        If the text is not a single complete expression.
    """
    from quill.parser.parser import parse_expression as _parse_expression

    return _parse_expression(source)


def format(tree: "Block") -> str:  # noqa: A001
    """Format a ``Block`` AST to canonical Quill text.

    Parameters
    ----------
    tree:
        The root block to format.

    Returns
    -------
    str
        Canonical Quill source text ending with a newline.
    """
    from quill.formatter.formatter import format_tree

    return format_tree(tree)


__all__ = [
    "__version__",
    "tokenize",
    "parse",
    "parse_expression",
    "format",
]
