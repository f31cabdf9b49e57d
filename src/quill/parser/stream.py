"""Token cursor used by the Quill parser.

``TokenStream`` is a forward-only reader over a token list.  It never
rewinds; lookahead is bounded (the parser peeks at most two tokens past
the current one) and always safe, because any index past the end resolves
to the trailing ``EOF`` token.
"""
from __future__ import annotations

from quill.grammar.tokens import Token, TokenType
from quill.parser.errors import ParseError, ParseErrorKind


class TokenStream:
    """Peekable, non-rewindable cursor over a token list.

    Parameters
    ----------
    tokens:
        The flat token list produced by the lexer.  COMMENT tokens are
        dropped; a terminal ``EOF`` token is appended if missing.
    """

    __slots__ = ("_tokens", "_pos")

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens: list[Token] = [t for t in tokens if t.type is not TokenType.COMMENT]
        if not self._tokens or self._tokens[-1].type is not TokenType.EOF:
            last = self._tokens[-1] if self._tokens else None
            self._tokens.append(
                Token(
                    type=TokenType.EOF,
                    value="",
                    line=last.line if last else 1,
                    col=last.col + len(last.value) if last else 1,
                    offset=last.offset + len(last.value) if last else 0,
                )
            )
        self._pos: int = 0

    def __repr__(self) -> str:
        return f"TokenStream(at {self._pos} of {len(self._tokens)}, current={self.current()!r})"

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def current(self) -> Token:
        """Return the current token without consuming it."""
        return self.look(0)

    def look(self, n: int = 1) -> Token:
        """Return the token ``n`` positions ahead without consuming."""
        idx = self._pos + n
        if idx < len(self._tokens):
            return self._tokens[idx]
        return self._tokens[-1]

    def next(self) -> Token:
        """Consume and return the current token; EOF is never passed."""
        tok = self.current()
        if tok.type is not TokenType.EOF:
            self._pos += 1
        return tok

    def eof(self) -> bool:
        """Return True if the current token is the end-of-input marker."""
        return self.current().type is TokenType.EOF

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def test(self, token_type: TokenType) -> bool:
        """Return True if the current token has type ``token_type``."""
        return self.current().test(token_type)

    def test_any(self, *token_types: TokenType) -> bool:
        """Return True if the current token matches any of ``token_types``."""
        return self.current().test_any(*token_types)

    # ------------------------------------------------------------------
    # Expectations
    # ------------------------------------------------------------------

    def expect(self, token_type: TokenType, message: str | None = None) -> Token:
        """Consume the current token if it has ``token_type``.

        Raises
        ------
        ParseError
            With kind ``EXPECTATION_FAILURE`` when the type does not match;
            ``message`` replaces the generic "Expected <TYPE>" text.
        """
        if self.test(token_type):
            return self.next()
        raise self._expectation_error(message or f"Expected {token_type.name}", (token_type,))

    def expect_one_of(self, *token_types: TokenType, message: str | None = None) -> Token:
        """Consume the current token if it matches any of ``token_types``."""
        if self.test_any(*token_types):
            return self.next()
        names = ", ".join(t.name for t in token_types)
        raise self._expectation_error(message or f"Expected one of {names}", token_types)

    def _expectation_error(self, message: str, expected: tuple[TokenType, ...]) -> ParseError:
        tok = self.current()
        return ParseError(
            message=message,
            kind=ParseErrorKind.EXPECTATION_FAILURE,
            position=tok.position,
            expected=expected,
            found=tok,
        )
