"""Quill Parser module.

Exports the ``Parser`` class, the token cursor, the ``parse`` and
``parse_expression`` convenience functions, and the parse error types.
"""
from __future__ import annotations

from quill.parser.errors import ParseError, ParseErrorKind
from quill.parser.parser import Parser, parse, parse_expression
from quill.parser.stream import TokenStream

__all__ = [
    "Parser",
    "TokenStream",
    "parse",
    "parse_expression",
    "ParseError",
    "ParseErrorKind",
]
