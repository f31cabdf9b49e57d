"""AST serialization and deserialization for Quill.

Provides round-trip serialization of Quill AST trees to and from JSON and
YAML.  The serialized form is a plain dict/list structure that maps
naturally to both formats; every node becomes a dict with a ``"kind"``
discriminator and a ``"position"`` entry.

Usage
-----
::

    from quill.ast.serializer import AstSerializer

    serializer = AstSerializer()
    data = serializer.to_dict(tree)
    json_text = serializer.to_json(tree)
    tree2 = serializer.from_json(json_text)
    assert tree == tree2
"""
from __future__ import annotations

import json

import yaml

from quill.ast.nodes import (
    Array,
    Assign,
    BinOp,
    Binary,
    Block,
    Call,
    ExpressionStatement,
    Identifier,
    Literal,
    Map,
    Member,
    Node,
    NodeKind,
    Position,
    Unary,
    UnaryOp,
    Update,
    UpdateOp,
    Variable,
)


class AstSerializer:
    """Converts between Quill AST nodes and plain Python dicts.

    Any node can be serialized, not only a root ``Block``; the
    ``"kind"`` field names the node class so deserialization is
    unambiguous.
    """

    # ------------------------------------------------------------------
    # Serialization (AST → dict)
    # ------------------------------------------------------------------

    def to_dict(self, node: Node) -> dict[str, object]:
        """Serialize any AST node to a JSON-compatible dict."""
        kind = node.kind
        data: dict[str, object] = {"kind": type(node).__name__}

        if kind is NodeKind.BLOCK:
            data["body"] = [self.to_dict(s) for s in node.body]
        elif kind is NodeKind.ASSIGN:
            data["target"] = self.to_dict(node.target)
            data["value"] = self.to_dict(node.value)
        elif kind is NodeKind.EXPRESSION_STATEMENT:
            data["expression"] = self.to_dict(node.expression)
        elif kind is NodeKind.LITERAL:
            data["value"] = node.value
            data["raw"] = node.raw
        elif kind in (NodeKind.VARIABLE, NodeKind.IDENTIFIER):
            data["name"] = node.name
        elif kind is NodeKind.MEMBER:
            data["object"] = self.to_dict(node.object)
            data["property"] = self.to_dict(node.property)
            data["computed"] = node.computed
        elif kind is NodeKind.CALL:
            data["callee"] = self.to_dict(node.callee)
            data["arguments"] = [self.to_dict(a) for a in node.arguments]
        elif kind is NodeKind.ARRAY:
            data["elements"] = [self.to_dict(e) for e in node.elements]
        elif kind is NodeKind.MAP:
            data["entries"] = [
                {"key": self.to_dict(key), "value": self.to_dict(value)}
                for key, value in node.entries
            ]
        elif kind is NodeKind.BINARY:
            data["operator"] = node.operator.name
            data["left"] = self.to_dict(node.left)
            data["right"] = self.to_dict(node.right)
        elif kind is NodeKind.UNARY:
            data["operator"] = node.operator.name
            data["argument"] = self.to_dict(node.argument)
        elif kind is NodeKind.UPDATE:
            data["operator"] = node.operator.name
            data["argument"] = self.to_dict(node.argument)
            data["prefix"] = node.prefix
        else:
            raise TypeError(f"Unknown node type: {type(node)}")

        data["position"] = self._position_to_dict(node.position)
        return data

    def _position_to_dict(self, position: Position) -> dict[str, int]:
        return {"line": position.line, "col": position.col, "offset": position.offset}

    # ------------------------------------------------------------------
    # Deserialization (dict → AST)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> Node:
        """Deserialize any AST node from a plain dict."""
        kind = data["kind"]
        position = self._position_from_dict(data["position"])

        if kind == "Block":
            return Block(body=tuple(self.from_dict(s) for s in data.get("body", [])), position=position)
        if kind == "Assign":
            return Assign(
                target=self.from_dict(data["target"]),
                value=self.from_dict(data["value"]),
                position=position,
            )
        if kind == "ExpressionStatement":
            return ExpressionStatement(expression=self.from_dict(data["expression"]), position=position)
        if kind == "Literal":
            return Literal(value=data["value"], raw=data["raw"], position=position)
        if kind == "Variable":
            return Variable(name=data["name"], position=position)
        if kind == "Identifier":
            return Identifier(name=data["name"], position=position)
        if kind == "Member":
            return Member(
                object=self.from_dict(data["object"]),
                property=self.from_dict(data["property"]),
                computed=bool(data["computed"]),
                position=position,
            )
        if kind == "Call":
            return Call(
                callee=self.from_dict(data["callee"]),
                arguments=tuple(self.from_dict(a) for a in data.get("arguments", [])),
                position=position,
            )
        if kind == "Array":
            return Array(
                elements=tuple(self.from_dict(e) for e in data.get("elements", [])),
                position=position,
            )
        if kind == "Map":
            return Map(
                entries=tuple(
                    (self.from_dict(e["key"]), self.from_dict(e["value"]))
                    for e in data.get("entries", [])
                ),
                position=position,
            )
        if kind == "Binary":
            return Binary(
                operator=BinOp[data["operator"]],
                left=self.from_dict(data["left"]),
                right=self.from_dict(data["right"]),
                position=position,
            )
        if kind == "Unary":
            return Unary(
                operator=UnaryOp[data["operator"]],
                argument=self.from_dict(data["argument"]),
                position=position,
            )
        if kind == "Update":
            return Update(
                operator=UpdateOp[data["operator"]],
                argument=self.from_dict(data["argument"]),
                prefix=bool(data["prefix"]),
                position=position,
            )
        raise ValueError(f"Unknown node kind: {kind!r}")

    def _position_from_dict(self, d: dict[str, int]) -> Position:
        return Position(line=d["line"], col=d["col"], offset=d["offset"])

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, node: Node, indent: int = 2) -> str:
        """Serialize an AST node to a JSON string."""
        return json.dumps(self.to_dict(node), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> Node:
        """Deserialize an AST node from a JSON string."""
        data: dict[str, object] = json.loads(text)
        return self.from_dict(data)

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, node: Node) -> str:
        """Serialize an AST node to a YAML string."""
        return yaml.dump(self.to_dict(node), default_flow_style=False, allow_unicode=True)

    def from_yaml(self, text: str) -> Node:
        """Deserialize an AST node from a YAML string."""
        data: dict[str, object] = yaml.safe_load(text)
        return self.from_dict(data)
