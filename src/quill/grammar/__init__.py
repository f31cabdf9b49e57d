"""Quill grammar module.

Exports token definitions, the operator precedence table, and formal
grammar constants.
"""
from __future__ import annotations

from quill.grammar.grammar import FULL_GRAMMAR, GRAMMAR_EXPRESSION, GRAMMAR_STATEMENT
from quill.grammar.tokens import (
    BINARY_PRECEDENCE,
    LOWEST_PRECEDENCE,
    OPERATORS,
    Token,
    TokenType,
)

__all__ = [
    # Token types
    "TokenType",
    "Token",
    "OPERATORS",
    "BINARY_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    # Grammar constants
    "FULL_GRAMMAR",
    "GRAMMAR_STATEMENT",
    "GRAMMAR_EXPRESSION",
]
