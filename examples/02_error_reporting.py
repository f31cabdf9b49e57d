#!/usr/bin/env python3
"""Example: Quill Error Reporting

Demonstrates the errors raised for malformed Quill scripts and the
position information they carry.

Usage:
    python examples/02_error_reporting.py

Requirements:
    pip install quill-lang
"""
from __future__ import annotations

import quill
from quill.lexer import LexError
from quill.parser import ParseError

BROKEN_SCRIPTS = [
    "a = 1 b = 2",
    "values = [1, 2",
    'settings = {"depth" 3}',
    "f(1 2)",
    "++limit()",
    "{ x = 1 }",
    "x = )",
    'name = "unterminated',
]


def main() -> None:
    print(f"quill-lang version: {quill.__version__}")

    for source in BROKEN_SCRIPTS:
        print(f"\n{source}")
        try:
            quill.parse(source)
        except ParseError as exc:
            print(" " * (exc.position.col - 1) + "^")
            print(f"  {exc.kind.name}: {exc.message}")
            print(f"  at line {exc.position.line}, column {exc.position.col}")
        except LexError as exc:
            print(f"  {exc}")


if __name__ == "__main__":
    main()
