"""Quill Lexer: converts raw source text into a flat list of tokens.

Scanning is driven by one compiled master pattern built from
``_TOKEN_SPEC``: at every offset the first alternative that matches wins,
so the order of the table is significant (comments before the ``/``
operator, two-character operators before their one-character prefixes).
Line and column numbers are derived from offsets as the scan advances.

Token classes:
    - whitespace (including newlines) is skipped
    - ``//`` line comments and ``/* ... */`` block comments are emitted as
      COMMENT tokens; the parser's token stream drops them
    - strings are double- or single-quoted, may not contain a raw newline,
      and support the escapes ``\\n \\t \\r \\\\ \\" \\' \\0``; any other
      escaped character is kept with its backslash
    - numbers are integers or decimals; signs are unary operators
    - identifiers are ``[A-Za-z_][A-Za-z0-9_]*``; there are no reserved
      words, ``true`` / ``false`` / ``null`` are resolved by the parser
"""
from __future__ import annotations

import logging
import re
from typing import Final

from quill.grammar.tokens import OPERATORS, Token, TokenType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Token patterns
# ---------------------------------------------------------------------------

_OPERATOR_PATTERN: Final[str] = "|".join(
    re.escape(symbol) for symbol in sorted(OPERATORS, key=len, reverse=True)
)

_TOKEN_SPEC: Final[list[tuple[str, str]]] = [
    ("SKIP", r"[ \t\r\n]+"),
    ("COMMENT", r"//[^\n]*|/\*.*?\*/"),
    ("BAD_COMMENT", r"/\*"),
    ("STRING", r'"(?:[^"\\\n]|\\.)*"' + r"|'(?:[^'\\\n]|\\.)*'"),
    ("BAD_STRING", r'"(?:[^"\\\n]|\\.)*' + r"|'(?:[^'\\\n]|\\.)*"),
    ("NUMBER", r"[0-9]+(?:\.[0-9]+)?"),
    ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("OPERATOR", _OPERATOR_PATTERN),
]

_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC),
    re.DOTALL,
)

_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(r"\\(.)", re.DOTALL)

_ESCAPE_MAP: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "0": "\0",
}


def _unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPE_MAP.get(m.group(1), m.group(0)), body)


class LexError(Exception):
    """Raised when the lexer encounters invalid input.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    line:
        1-based line number where the error occurred.
    col:
        1-based column number where the error occurred.
    offset:
        0-based character offset in the source where the error occurred.
    """

    def __init__(self, message: str, line: int, col: int, offset: int) -> None:
        super().__init__(f"LexError at {line}:{col}: {message}")
        self.lex_message = message
        self.line = line
        self.col = col
        self.offset = offset


class Lexer:
    """Quill lexer over a single source string.

    Parameters
    ----------
    source:
        The complete Quill source text to tokenize.
    """

    __slots__ = ("_source", "_line", "_line_start")

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._line: int = 1
        self._line_start: int = 0

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return the complete token list.

        Returns
        -------
        list[Token]
            Ordered list of tokens (COMMENT tokens are included), always
            ending with an ``EOF`` token.

        Raises
        ------
        LexError
            On any character that cannot begin a valid token, and on
            unterminated strings or block comments.
        """
        source = self._source
        tokens: list[Token] = []
        pos = 0
        self._line, self._line_start = 1, 0
        while pos < len(source):
            match = _TOKEN_RE.match(source, pos)
            if match is None:
                raise self._error(f"Unexpected character {source[pos]!r}", pos)

            kind = match.lastgroup
            text = match.group()
            if kind == "BAD_COMMENT":
                raise self._error("Unterminated block comment", pos)
            if kind == "BAD_STRING":
                if match.end() < len(source) and source[match.end()] == "\n":
                    raise self._error("Unterminated string literal (newline in string)", pos)
                raise self._error("Unterminated string literal (EOF)", pos)

            if kind == "STRING":
                tokens.append(self._token(TokenType.STRING, _unescape(text[1:-1]), pos))
            elif kind == "OPERATOR":
                tokens.append(self._token(OPERATORS[text], text, pos))
            elif kind != "SKIP":
                tokens.append(self._token(TokenType[kind], text, pos))

            self._track_newlines(text, pos)
            pos = match.end()

        tokens.append(self._token(TokenType.EOF, "", pos))
        logger.debug("Scanned %d token(s) from %d character(s)", len(tokens), len(source))
        return tokens

    def _token(self, token_type: TokenType, value: str, offset: int) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=self._line,
            col=offset - self._line_start + 1,
            offset=offset,
        )

    def _track_newlines(self, text: str, offset: int) -> None:
        newlines = text.count("\n")
        if newlines:
            self._line += newlines
            self._line_start = offset + text.rindex("\n") + 1

    def _error(self, message: str, offset: int) -> LexError:
        return LexError(message, self._line, offset - self._line_start + 1, offset)


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def tokenize(source: str) -> list[Token]:
    """Tokenize a Quill source string and return the complete token list.

    Parameters
    ----------
    source:
        Quill source text.

    Returns
    -------
    list[Token]
        All tokens including COMMENT tokens, terminated by EOF.

    Raises
    ------
    LexError
        If the source contains invalid characters or unterminated literals.

    Example
    -------
    ::

        from quill.lexer import tokenize
        tokens = tokenize('total = price * (1 + rate);')
    """
    return Lexer(source).tokenize()
