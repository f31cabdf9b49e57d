"""Token definitions for the Quill scripting language.

Defines the complete token vocabulary used by the Quill lexer and parser.
Every operator, punctuation mark, and literal kind is represented as a
member of the ``TokenType`` enum, and every scanned token is represented by
a ``Token`` dataclass that carries its type, raw text, and source position.

Binary operator precedence lives here as well, so that the parser can ask a
token for its precedence without knowing the table itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from quill.ast.nodes import Position


class TokenType(Enum):
    """Exhaustive enumeration of all Quill token types."""

    # -----------------------------------------------------------------
    # Literals and names
    # -----------------------------------------------------------------
    IDENT = auto()
    STRING = auto()
    NUMBER = auto()

    # -----------------------------------------------------------------
    # Statement structure
    # -----------------------------------------------------------------
    ASSIGN = auto()     # =
    SEMICOLON = auto()  # ;

    # -----------------------------------------------------------------
    # Update and unary operators
    # -----------------------------------------------------------------
    INC = auto()        # ++
    DEC = auto()        # --
    NOT = auto()        # !

    # -----------------------------------------------------------------
    # Arithmetic operators (ADD / SUB double as unary plus / minus)
    # -----------------------------------------------------------------
    ADD = auto()        # +
    SUB = auto()        # -
    MUL = auto()        # *
    DIV = auto()        # /
    MOD = auto()        # %

    # -----------------------------------------------------------------
    # Comparison operators
    # -----------------------------------------------------------------
    EQ = auto()         # ==
    NEQ = auto()        # !=
    LT = auto()         # <
    GT = auto()         # >
    LTE = auto()        # <=
    GTE = auto()        # >=

    # -----------------------------------------------------------------
    # Logical operators
    # -----------------------------------------------------------------
    AND = auto()        # &&
    OR = auto()         # ||

    # -----------------------------------------------------------------
    # Punctuation
    # -----------------------------------------------------------------
    COMMA = auto()
    COLON = auto()
    DOT = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LBRACE = auto()
    RBRACE = auto()

    # -----------------------------------------------------------------
    # Structure
    # -----------------------------------------------------------------
    COMMENT = auto()
    EOF = auto()


# Operator and punctuation symbols.  The lexer tries two-character symbols
# before single-character ones.
OPERATORS: dict[str, TokenType] = {
    "++": TokenType.INC,
    "--": TokenType.DEC,
    "==": TokenType.EQ,
    "!=": TokenType.NEQ,
    "<=": TokenType.LTE,
    ">=": TokenType.GTE,
    "&&": TokenType.AND,
    "||": TokenType.OR,
    "=": TokenType.ASSIGN,
    ";": TokenType.SEMICOLON,
    "!": TokenType.NOT,
    "+": TokenType.ADD,
    "-": TokenType.SUB,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "%": TokenType.MOD,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ".": TokenType.DOT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

# Binding strength of every binary operator; higher binds tighter.
BINARY_PRECEDENCE: dict[TokenType, int] = {
    TokenType.OR: 1,
    TokenType.AND: 2,
    TokenType.EQ: 3,
    TokenType.NEQ: 3,
    TokenType.LT: 4,
    TokenType.GT: 4,
    TokenType.LTE: 4,
    TokenType.GTE: 4,
    TokenType.ADD: 5,
    TokenType.SUB: 5,
    TokenType.MUL: 6,
    TokenType.DIV: 6,
    TokenType.MOD: 6,
}

# Precedence reported by every token that is not a binary operator.
LOWEST_PRECEDENCE: int = 0


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with source-location metadata.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    value:
        The token text.  For string literals this is the unescaped
        content without the surrounding quotes.
    line:
        1-based line number in the source file.
    col:
        1-based column number of the first character of the token.
    offset:
        0-based character offset from the start of the source string.
    """

    type: TokenType
    value: str
    line: int
    col: int
    offset: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.col})"

    def test(self, token_type: TokenType) -> bool:
        """Return True if this token has type ``token_type``."""
        return self.type is token_type

    def test_any(self, *token_types: TokenType) -> bool:
        """Return True if this token has any of ``token_types``."""
        return self.type in token_types

    @property
    def is_binary_operator(self) -> bool:
        """Return True if this token can join two operands."""
        return self.type in BINARY_PRECEDENCE

    @property
    def binary_precedence(self) -> int:
        """Return the binding strength, ``LOWEST_PRECEDENCE`` for non-operators."""
        return BINARY_PRECEDENCE.get(self.type, LOWEST_PRECEDENCE)

    @property
    def position(self) -> Position:
        """Return the source position of the first character."""
        return Position(line=self.line, col=self.col, offset=self.offset)
