"""Quill canonical formatter: AST → formatted Quill source text.

The ``QuillFormatter`` takes a ``Block`` AST and renders it as canonically
formatted source with:

- One statement per line, every statement terminated by ``;``
- 2-space indentation inside nested blocks (configurable)
- Single spaces around binary operators and after commas
- Parentheses only where precedence or left-associativity needs them
- Double-quoted strings and lowercase ``true`` / ``false`` / ``null``
- COMMENT tokens are not preserved (the formatter works from the AST)

Re-parsing the output yields the same tree, positions aside.  The one
exception is an empty nested block: ``{}`` at statement start always
reads back as an empty map.

Usage
-----
::

    from quill.formatter import QuillFormatter
    from quill.parser import parse

    tree = parse(source)
    canonical = QuillFormatter().format(tree)
"""
from __future__ import annotations

import re

from quill.ast.nodes import (
    BinOp,
    Block,
    Expression,
    NodeKind,
    Statement,
)
from quill.grammar.tokens import BINARY_PRECEDENCE, OPERATORS

_NUMBER_TEXT = re.compile(r"[0-9]+(\.[0-9]+)?")

_STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
}

# Kinds that can be followed directly by a call, member or index suffix.
_POSTFIX_SAFE = frozenset({
    NodeKind.LITERAL,
    NodeKind.VARIABLE,
    NodeKind.MEMBER,
    NodeKind.CALL,
    NodeKind.ARRAY,
    NodeKind.MAP,
})


def _precedence(op: BinOp) -> int:
    return BINARY_PRECEDENCE[OPERATORS[op.value]]


class QuillFormatter:
    """Produces canonical Quill text from a ``Block`` AST.

    Parameters
    ----------
    indent:
        Number of spaces per nesting level.
    """

    def __init__(self, indent: int = 2) -> None:
        self._indent = " " * indent

    def format(self, tree: Block) -> str:
        """Render ``tree`` as a canonical Quill string.

        Parameters
        ----------
        tree:
            The root block returned by the parser.

        Returns
        -------
        str
            Canonical Quill source text, always ending with a newline.
        """
        lines: list[str] = []
        for stmt in tree.body:
            lines.extend(self._format_statement(stmt, depth=0))
        return "\n".join(lines) + "\n"

    def format_expression(self, expr: Expression) -> str:
        """Render a single expression without a terminator."""
        kind = expr.kind

        if kind is NodeKind.LITERAL:
            return self._format_literal(expr.value, expr.raw)
        if kind is NodeKind.VARIABLE:
            return expr.name
        if kind is NodeKind.MEMBER:
            obj = self._format_postfix_operand(expr.object)
            if expr.computed:
                return f"{obj}[{self.format_expression(expr.property)}]"
            return f"{obj}.{expr.property.name}"
        if kind is NodeKind.CALL:
            args = ", ".join(self.format_expression(a) for a in expr.arguments)
            return f"{self._format_postfix_operand(expr.callee)}({args})"
        if kind is NodeKind.ARRAY:
            return "[" + ", ".join(self.format_expression(e) for e in expr.elements) + "]"
        if kind is NodeKind.MAP:
            entries = ", ".join(
                f"{self._format_string(str(key.value))}: {self.format_expression(value)}"
                for key, value in expr.entries
            )
            return "{" + entries + "}"
        if kind is NodeKind.BINARY:
            return self._format_binary(expr)
        if kind is NodeKind.UNARY:
            symbol = expr.operator.value
            arg = self.format_expression(expr.argument)
            # "- -x" must not collapse into "--x"
            if expr.argument.kind is NodeKind.BINARY or (symbol in "+-" and arg.startswith(symbol)):
                arg = f"({arg})"
            return f"{symbol}{arg}"
        if kind is NodeKind.UPDATE:
            arg = self.format_expression(expr.argument)
            if expr.prefix:
                return f"{expr.operator.value}{arg}"
            return f"{arg}{expr.operator.value}"
        raise TypeError(f"Unknown expression type: {type(expr)}")

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _format_statement(self, stmt: Statement, depth: int) -> list[str]:
        pad = self._indent * depth
        kind = stmt.kind
        if kind is NodeKind.ASSIGN:
            return [f"{pad}{stmt.target.name} = {self.format_expression(stmt.value)};"]
        if kind is NodeKind.EXPRESSION_STATEMENT:
            return [f"{pad}{self.format_expression(stmt.expression)};"]
        if kind is NodeKind.BLOCK:
            if not stmt.body:
                return [f"{pad}{{}};"]
            lines = [f"{pad}{{"]
            for inner in stmt.body:
                lines.extend(self._format_statement(inner, depth + 1))
            lines.append(f"{pad}}};")
            return lines
        raise TypeError(f"Unknown statement type: {type(stmt)}")

    # ------------------------------------------------------------------
    # Expression helpers
    # ------------------------------------------------------------------

    def _format_binary(self, expr: Expression) -> str:
        prec = _precedence(expr.operator)
        left = self.format_expression(expr.left)
        right = self.format_expression(expr.right)
        if expr.left.kind is NodeKind.BINARY and _precedence(expr.left.operator) < prec:
            left = f"({left})"
        if expr.right.kind is NodeKind.BINARY and _precedence(expr.right.operator) <= prec:
            right = f"({right})"
        return f"{left} {expr.operator.value} {right}"

    def _format_postfix_operand(self, expr: Expression) -> str:
        text = self.format_expression(expr)
        if expr.kind in _POSTFIX_SAFE or (expr.kind is NodeKind.UPDATE and not expr.prefix):
            return text
        return f"({text})"

    def _format_literal(self, value: object, raw: str) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return self._format_string(value)
        if _NUMBER_TEXT.fullmatch(raw):
            return raw
        return repr(value)

    def _format_string(self, value: str) -> str:
        return '"' + "".join(_STRING_ESCAPES.get(ch, ch) for ch in value) + '"'


def format_tree(tree: Block) -> str:
    """Format ``tree`` using the default ``QuillFormatter`` settings.

    Parameters
    ----------
    tree:
        The root block to format.

    Returns
    -------
    str
        Canonical Quill source text.
    """
    return QuillFormatter().format(tree)
