"""Parse error types for the Quill parser.

Parsing stops at the first error: a ``ParseError`` is raised from the point
of detection and unwinds the whole parse.  Every error carries the source
position and the offending token so that the CLI can display precise,
actionable messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from quill.ast.nodes import Position
from quill.grammar.tokens import Token, TokenType


class ParseErrorKind(Enum):
    """What went wrong.

    UNEXPECTED_TOKEN
        The current token cannot start an expression.
    EXPECTATION_FAILURE
        A required token (delimiter, separator, terminator, name) was
        missing.
    INVALID_LVALUE
        An increment or decrement was applied to something other than a
        variable or member access.
    """

    UNEXPECTED_TOKEN = auto()
    EXPECTATION_FAILURE = auto()
    INVALID_LVALUE = auto()


@dataclass(eq=False)
class ParseError(Exception):
    """A syntax error with location and context.

    Parameters
    ----------
    message:
        Human-readable description of the error.
    kind:
        Category of the failure.
    position:
        Source location of the offending token.
    expected:
        Token types that would have been accepted at this position.
    found:
        The token actually encountered, if any.
    """

    message: str
    kind: ParseErrorKind
    position: Position
    expected: tuple[TokenType, ...] = ()
    found: Token | None = None

    def __str__(self) -> str:
        loc = f"{self.position.line}:{self.position.col}"
        if self.found is not None:
            return (
                f"ParseError at {loc}: {self.message} "
                f"(found {self.found.type.name} {self.found.value!r})"
            )
        return f"ParseError at {loc}: {self.message}"

    # dataclass doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        self.args = (str(self),)
