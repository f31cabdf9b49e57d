"""Quill AST module.

Exports all AST node types and the serializer for converting AST trees
to and from JSON/YAML.
"""
from __future__ import annotations

from quill.ast.nodes import (
    LVALUE_KINDS,
    Array,
    Assign,
    BinOp,
    Binary,
    Block,
    Call,
    Expression,
    ExpressionStatement,
    Identifier,
    Literal,
    Map,
    Member,
    Node,
    NodeKind,
    Position,
    Statement,
    Unary,
    UnaryOp,
    Update,
    UpdateOp,
    Variable,
)
from quill.ast.serializer import AstSerializer

__all__ = [
    # Core types
    "Position",
    "NodeKind",
    "Node",
    "LVALUE_KINDS",
    # Enums
    "BinOp",
    "UnaryOp",
    "UpdateOp",
    # Statements
    "Statement",
    "Block",
    "Assign",
    "ExpressionStatement",
    # Expressions
    "Expression",
    "Identifier",
    "Literal",
    "Variable",
    "Member",
    "Call",
    "Array",
    "Map",
    "Binary",
    "Unary",
    "Update",
    # Serializer
    "AstSerializer",
]
