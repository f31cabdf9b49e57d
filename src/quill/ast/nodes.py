"""AST node definitions for the Quill scripting language.

Every node produced by the Quill parser is a frozen dataclass so that
AST trees are immutable and hashable.  Each node class carries a ``kind``
class attribute taken from ``NodeKind``; downstream code should dispatch
on that discriminant rather than on the concrete class.

All nodes carry a ``Position`` that records the leftmost source token
that contributed to them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Union


# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Position:
    """Location of a token within the source text.

    Parameters
    ----------
    line:
        1-based line number.
    col:
        1-based column number.
    offset:
        0-based character offset from the start of the source.
    """

    line: int
    col: int
    offset: int

    def __repr__(self) -> str:
        return f"Position({self.line}:{self.col})"

    @classmethod
    def unknown(cls) -> "Position":
        """Return a sentinel position used when location info is unavailable."""
        return cls(line=0, col=0, offset=0)


# ---------------------------------------------------------------------------
# Discriminant and operator enums
# ---------------------------------------------------------------------------


class NodeKind(Enum):
    """Tag identifying the variant of every AST node."""

    # Statements
    BLOCK = auto()
    ASSIGN = auto()
    EXPRESSION_STATEMENT = auto()

    # Expressions
    LITERAL = auto()
    VARIABLE = auto()
    MEMBER = auto()
    CALL = auto()
    ARRAY = auto()
    MAP = auto()
    BINARY = auto()
    UNARY = auto()
    UPDATE = auto()

    # Names
    IDENTIFIER = auto()


class BinOp(Enum):
    """Binary operators; the value is the source symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    EQ = "=="
    NEQ = "!="
    LT = "<"
    GT = ">"
    LTE = "<="
    GTE = ">="
    AND = "&&"
    OR = "||"


class UnaryOp(Enum):
    """Prefix unary operators."""

    NOT = "!"
    PLUS = "+"
    MINUS = "-"


class UpdateOp(Enum):
    """Increment / decrement operators."""

    INC = "++"
    DEC = "--"


# Expression kinds that may be the target of an update.
LVALUE_KINDS: frozenset[NodeKind] = frozenset({NodeKind.VARIABLE, NodeKind.MEMBER})


# ---------------------------------------------------------------------------
# Names and leaf expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Identifier:
    """A bare name, used as an assignment target or a member name."""

    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER

    name: str
    position: Position


@dataclass(frozen=True, slots=True)
class Literal:
    """A string, number, boolean or null literal.

    ``raw`` keeps the text as written, e.g. ``TRUE`` or ``1.50``.
    """

    kind: ClassVar[NodeKind] = NodeKind.LITERAL

    value: Union[str, int, float, bool, None]
    raw: str
    position: Position


@dataclass(frozen=True, slots=True)
class Variable:
    """A reference to a named variable, e.g. ``counter``."""

    kind: ClassVar[NodeKind] = NodeKind.VARIABLE

    name: str
    position: Position


# Forward reference; most expression nodes are recursive.
Expression = Union[
    "Literal",
    "Variable",
    "Member",
    "Call",
    "Array",
    "Map",
    "Binary",
    "Unary",
    "Update",
]


# ---------------------------------------------------------------------------
# Compound expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Member:
    """Member access: ``obj.name`` (not computed) or ``obj[expr]`` (computed)."""

    kind: ClassVar[NodeKind] = NodeKind.MEMBER

    object: "Expression"
    property: Union[Identifier, "Expression"]
    computed: bool
    position: Position


@dataclass(frozen=True, slots=True)
class Call:
    """A call of ``callee`` with positional arguments in source order."""

    kind: ClassVar[NodeKind] = NodeKind.CALL

    callee: "Expression"
    arguments: tuple["Expression", ...]
    position: Position


@dataclass(frozen=True, slots=True)
class Array:
    """An array literal, e.g. ``[1, 2, 3]``."""

    kind: ClassVar[NodeKind] = NodeKind.ARRAY

    elements: tuple["Expression", ...]
    position: Position


@dataclass(frozen=True, slots=True)
class Map:
    """A map literal, e.g. ``{"a": 1}``.

    Entries keep source order and duplicate keys are preserved; which of
    several equal keys wins is left to the consumer of the tree.
    """

    kind: ClassVar[NodeKind] = NodeKind.MAP

    entries: tuple[tuple[Literal, "Expression"], ...]
    position: Position

    def keys(self) -> tuple[str, ...]:
        """Return the key strings in source order."""
        return tuple(str(key.value) for key, _ in self.entries)


@dataclass(frozen=True, slots=True)
class Binary:
    """A binary operator expression, e.g. ``a + b`` or ``x && y``."""

    kind: ClassVar[NodeKind] = NodeKind.BINARY

    operator: BinOp
    left: "Expression"
    right: "Expression"
    position: Position


@dataclass(frozen=True, slots=True)
class Unary:
    """A prefix unary expression, e.g. ``!done`` or ``-x``."""

    kind: ClassVar[NodeKind] = NodeKind.UNARY

    operator: UnaryOp
    argument: "Expression"
    position: Position


@dataclass(frozen=True, slots=True)
class Update:
    """An increment or decrement of a variable or member.

    ``prefix`` is True for ``++x`` and False for ``x++``.
    """

    kind: ClassVar[NodeKind] = NodeKind.UPDATE

    operator: UpdateOp
    argument: Union[Variable, Member]
    prefix: bool
    position: Position


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Assign:
    """An assignment statement: ``name = expression``."""

    kind: ClassVar[NodeKind] = NodeKind.ASSIGN

    target: Identifier
    value: "Expression"
    position: Position


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """An expression evaluated for its effect, e.g. ``print(x);``."""

    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_STATEMENT

    expression: "Expression"
    position: Position


@dataclass(frozen=True, slots=True)
class Block:
    """An ordered sequence of statements.

    A parse always returns a ``Block`` as the root of the tree; nested
    ``{ ... }`` blocks are ``Block`` statements as well.
    """

    kind: ClassVar[NodeKind] = NodeKind.BLOCK

    body: tuple["Statement", ...]
    position: Position


Statement = Union[Block, Assign, ExpressionStatement]

Node = Union[Statement, Expression, Identifier]
