"""Unit tests for quill.parser.stream — the TokenStream cursor."""
from __future__ import annotations

import pytest

from quill.grammar.tokens import Token, TokenType
from quill.lexer.lexer import tokenize
from quill.parser.errors import ParseError, ParseErrorKind
from quill.parser.stream import TokenStream


def stream_of(source: str) -> TokenStream:
    return TokenStream(tokenize(source))


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_comments_are_dropped(self) -> None:
        stream = stream_of("a /* skip */ b // tail")
        assert stream.next().value == "a"
        assert stream.next().value == "b"
        assert stream.eof()

    def test_missing_eof_is_appended(self) -> None:
        tokens = [Token(type=TokenType.IDENT, value="abc", line=2, col=4, offset=9)]
        stream = TokenStream(tokens)
        eof = stream.look(1)
        assert eof.type is TokenType.EOF
        assert (eof.line, eof.col, eof.offset) == (2, 7, 12)

    def test_empty_list_gets_eof(self) -> None:
        stream = TokenStream([])
        assert stream.eof()
        assert stream.current().position.line == 1

    def test_input_list_is_not_mutated(self) -> None:
        tokens = tokenize("a // c")
        TokenStream(tokens)
        assert len(tokens) == 3


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestNavigation:
    def test_current_does_not_consume(self) -> None:
        stream = stream_of("x y")
        assert stream.current().value == "x"
        assert stream.current().value == "x"

    def test_look_ahead(self) -> None:
        stream = stream_of("a = 1")
        assert stream.look().type is TokenType.ASSIGN
        assert stream.look(2).type is TokenType.NUMBER
        assert stream.look(0) is stream.current()

    def test_look_past_end_returns_eof(self) -> None:
        stream = stream_of("a")
        assert stream.look(5).type is TokenType.EOF

    def test_next_returns_then_advances(self) -> None:
        stream = stream_of("a b")
        assert stream.next().value == "a"
        assert stream.current().value == "b"

    def test_next_never_passes_eof(self) -> None:
        stream = stream_of("")
        first = stream.next()
        second = stream.next()
        assert first.type is TokenType.EOF
        assert second is first
        assert stream.eof()

    def test_test_and_test_any(self) -> None:
        stream = stream_of("(")
        assert stream.test(TokenType.LPAREN)
        assert not stream.test(TokenType.RPAREN)
        assert stream.test_any(TokenType.RPAREN, TokenType.LPAREN)
        assert not stream.test_any(TokenType.EOF)


# ---------------------------------------------------------------------------
# Expectations
# ---------------------------------------------------------------------------


class TestExpect:
    def test_expect_consumes_matching_token(self) -> None:
        stream = stream_of("; x")
        tok = stream.expect(TokenType.SEMICOLON)
        assert tok.type is TokenType.SEMICOLON
        assert stream.current().value == "x"

    def test_expect_mismatch_uses_default_message(self) -> None:
        stream = stream_of("x")
        with pytest.raises(ParseError) as exc_info:
            stream.expect(TokenType.SEMICOLON)
        error = exc_info.value
        assert error.message == "Expected SEMICOLON"
        assert error.kind is ParseErrorKind.EXPECTATION_FAILURE
        assert error.expected == (TokenType.SEMICOLON,)
        assert error.found.value == "x"

    def test_expect_mismatch_uses_custom_message(self) -> None:
        stream = stream_of("  x")
        with pytest.raises(ParseError) as exc_info:
            stream.expect(TokenType.RBRACE, "A block must be closed by a brace")
        assert exc_info.value.message == "A block must be closed by a brace"
        assert exc_info.value.position.col == 3

    def test_failed_expect_does_not_consume(self) -> None:
        stream = stream_of("x")
        with pytest.raises(ParseError):
            stream.expect(TokenType.COMMA)
        assert stream.current().value == "x"

    def test_expect_one_of(self) -> None:
        stream = stream_of("--")
        assert stream.expect_one_of(TokenType.INC, TokenType.DEC).type is TokenType.DEC

    def test_expect_one_of_mismatch(self) -> None:
        stream = stream_of("x")
        with pytest.raises(ParseError) as exc_info:
            stream.expect_one_of(TokenType.INC, TokenType.DEC)
        assert exc_info.value.message == "Expected one of INC, DEC"
        assert exc_info.value.expected == (TokenType.INC, TokenType.DEC)

    def test_error_without_found_token(self) -> None:
        error = ParseError(
            message="boom",
            kind=ParseErrorKind.UNEXPECTED_TOKEN,
            position=stream_of("").current().position,
        )
        assert str(error) == "ParseError at 1:1: boom"
        assert error.args == ("ParseError at 1:1: boom",)
