"""Quill Recursive-Descent Parser.

Converts a flat list of ``Token`` objects into a ``Block`` AST.

Statements
----------
A program is a sequence of statements, each terminated by ``;`` (the last
statement of the input may omit it).  A statement is an assignment
(``IDENT '=' expression``), a nested ``{ ... }`` block, or a bare
expression.  A ``{`` at statement start opens a block unless it is
immediately closed or the token after next is ``:``; in both of those
cases it begins a map literal instead.

Expressions
-----------
Expression parsing is layered:

    expression   = postfix_expr (binary_op postfix_expr)*
    postfix_expr = primary ( call | .name | [expr] | ++ | -- )*

Binary operators are resolved by precedence climbing over
``BINARY_PRECEDENCE`` rather than by one grammar rule per level.  Unary
operators (``!``, ``+``, ``-``) bind to a single primary expression and
never take part in climbing.

Errors
------
There is no error recovery: the first syntax error raises ``ParseError``
and aborts the parse.
"""
from __future__ import annotations

import logging

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
    Statement,
    Unary,
    UnaryOp,
    Update,
    UpdateOp,
    Variable,
)
from quill.grammar.tokens import Token, TokenType
from quill.lexer.lexer import tokenize
from quill.parser.errors import ParseError, ParseErrorKind
from quill.parser.stream import TokenStream

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Token → operator tables
# ---------------------------------------------------------------------------

_BINOP_MAP: dict[TokenType, BinOp] = {
    TokenType.ADD: BinOp.ADD,
    TokenType.SUB: BinOp.SUB,
    TokenType.MUL: BinOp.MUL,
    TokenType.DIV: BinOp.DIV,
    TokenType.MOD: BinOp.MOD,
    TokenType.EQ: BinOp.EQ,
    TokenType.NEQ: BinOp.NEQ,
    TokenType.LT: BinOp.LT,
    TokenType.GT: BinOp.GT,
    TokenType.LTE: BinOp.LTE,
    TokenType.GTE: BinOp.GTE,
    TokenType.AND: BinOp.AND,
    TokenType.OR: BinOp.OR,
}
_UNARY_MAP: dict[TokenType, UnaryOp] = {
    TokenType.NOT: UnaryOp.NOT,
    TokenType.ADD: UnaryOp.PLUS,
    TokenType.SUB: UnaryOp.MINUS,
}
_UPDATE_MAP: dict[TokenType, UpdateOp] = {
    TokenType.INC: UpdateOp.INC,
    TokenType.DEC: UpdateOp.DEC,
}
_LITERAL_TYPES = frozenset({TokenType.STRING, TokenType.NUMBER})
_KEYWORD_LITERALS: dict[str, bool | None] = {
    "true": True,
    "false": False,
    "null": None,
}


class Parser:
    """Recursive descent parser that produces a ``Block`` from tokens.

    Parameters
    ----------
    tokens:
        The flat token list produced by the lexer, or an already built
        ``TokenStream``.  COMMENT tokens are ignored.
    """

    def __init__(self, tokens: list[Token] | TokenStream) -> None:
        self.tokens: TokenStream = tokens if isinstance(tokens, TokenStream) else TokenStream(tokens)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse(self) -> Block:
        """Parse every statement up to end of input.

        Returns
        -------
        Block
            The root block, positioned at the first token of the stream.

        Raises
        ------
        ParseError
            On the first syntax error.
        """
        start_tok = self.tokens.current()
        body: list[Statement] = []
        while not self.tokens.eof():
            body.append(self.parse_statement())
        logger.debug("Parsed %d top-level statement(s)", len(body))
        return Block(body=tuple(body), position=start_tok.position)

    def parse_statement(self) -> Statement:
        """Parse one statement and its terminator."""
        tok = self.tokens.current()
        stmt: Statement
        if tok.test(TokenType.IDENT) and self.tokens.look().test(TokenType.ASSIGN):
            stmt = self.parse_assign_statement()
        elif (
            tok.test(TokenType.LBRACE)
            and not self.tokens.look().test(TokenType.RBRACE)
            and not self.tokens.look(2).test(TokenType.COLON)
        ):
            stmt = self.parse_block_statement()
        else:
            stmt = ExpressionStatement(expression=self.parse_expression(), position=tok.position)

        if not self.tokens.eof():
            self.tokens.expect(TokenType.SEMICOLON, "A statement must be terminated by a semicolon")
        return stmt

    def parse_block_statement(self) -> Block:
        """Parse: ``'{' statement* '}'``"""
        start_tok = self.tokens.expect(TokenType.LBRACE, "A block must begin with an opening brace")
        body: list[Statement] = []
        while not self.tokens.test_any(TokenType.RBRACE, TokenType.EOF):
            body.append(self.parse_statement())
        self.tokens.expect(TokenType.RBRACE, "A block must be closed by a brace")
        return Block(body=tuple(body), position=start_tok.position)

    def parse_assign_statement(self) -> Assign:
        """Parse: ``IDENT '=' expression``"""
        name_tok = self.tokens.expect(TokenType.IDENT, "An assignment must begin with a variable name")
        self.tokens.expect(TokenType.ASSIGN, "An assignment target must be followed by '='")
        target = Identifier(name=name_tok.value, position=name_tok.position)
        return Assign(target=target, value=self.parse_expression(), position=name_tok.position)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> Expression:
        """Parse a full expression, binary operators included."""
        expr = self.parse_primary_expression()
        if self.tokens.current().is_binary_operator:
            expr = self.parse_binary_expression(expr)
        return expr

    def parse_primary_expression(self) -> Expression:
        """Parse a primary expression and then its postfix chain."""
        tok = self.tokens.current()
        expr: Expression

        if tok.type in _LITERAL_TYPES:
            expr = self.parse_literal_expression()
        elif tok.type == TokenType.IDENT:
            expr = self.parse_identifier_expression()
        elif tok.type == TokenType.LBRACKET:
            expr = self.parse_array_expression()
        elif tok.type == TokenType.LBRACE:
            expr = self.parse_map_expression()
        elif tok.type == TokenType.LPAREN:
            expr = self.parse_paren_expression()
        elif tok.type in _UPDATE_MAP:
            expr = self.parse_update_expression(prefix=True)
        elif tok.type in _UNARY_MAP:
            expr = self.parse_unary_expression()
        else:
            raise ParseError(
                message=f"Unexpected token {tok.type.name} of value {tok.value!r}",
                kind=ParseErrorKind.UNEXPECTED_TOKEN,
                position=tok.position,
                found=tok,
            )
        return self.parse_postfix_expression(expr)

    def parse_literal_expression(self) -> Literal:
        """Parse a STRING or NUMBER token into a ``Literal``."""
        tok = self.tokens.next()
        value: str | int | float = tok.value
        if tok.type == TokenType.NUMBER:
            value = float(tok.value) if "." in tok.value else int(tok.value)
        return Literal(value=value, raw=tok.value, position=tok.position)

    def parse_identifier_expression(self) -> Expression:
        """Parse an identifier: ``true``/``false``/``null`` in any case, else a variable."""
        tok = self.tokens.expect(TokenType.IDENT)
        word = tok.value.lower()
        if word in _KEYWORD_LITERALS:
            return Literal(value=_KEYWORD_LITERALS[word], raw=tok.value, position=tok.position)
        return Variable(name=tok.value, position=tok.position)

    def parse_postfix_expression(self, expr: Expression) -> Expression:
        """Extend ``expr`` with calls, member/index access and postfix updates."""
        while True:
            tok = self.tokens.current()
            if tok.type == TokenType.LPAREN:
                expr = Call(callee=expr, arguments=self.parse_arguments(), position=expr.position)
            elif tok.type == TokenType.DOT:
                expr = self.parse_member_expression(expr)
            elif tok.type == TokenType.LBRACKET:
                expr = self.parse_index_expression(expr)
            elif tok.type in _UPDATE_MAP:
                expr = self.parse_update_expression(prefix=False, argument=expr)
            else:
                return expr

    def parse_member_expression(self, obj: Expression) -> Expression:
        """Parse: ``'.' IDENT [arguments]``; a following call wraps the member."""
        self.tokens.expect(TokenType.DOT)
        name_tok = self.tokens.expect(TokenType.IDENT, "A member name must follow '.'")
        expr: Expression = Member(
            object=obj,
            property=Identifier(name=name_tok.value, position=name_tok.position),
            computed=False,
            position=obj.position,
        )
        if self.tokens.test(TokenType.LPAREN):
            expr = Call(callee=expr, arguments=self.parse_arguments(), position=obj.position)
        return expr

    def parse_index_expression(self, obj: Expression) -> Member:
        """Parse: ``'[' expression ']'``"""
        self.tokens.expect(TokenType.LBRACKET)
        prop = self.parse_expression()
        self.tokens.expect(TokenType.RBRACKET, "A computed member access must be closed by a bracket")
        return Member(object=obj, property=prop, computed=True, position=obj.position)

    # ------------------------------------------------------------------
    # Binary expressions (precedence climbing)
    # ------------------------------------------------------------------

    def parse_binary_expression(self, left: Expression) -> Expression:
        """Fold binary operators onto ``left`` until a non-operator token."""
        # a + b * c - d  →  (a + (b * c)) - d
        while self.tokens.current().is_binary_operator:
            left = self.do_parse_binary(left)
        return left

    def do_parse_binary(self, left: Expression) -> Binary:
        """Consume one operator and its right operand.

        While the operator following the right operand binds tighter than
        the one just consumed, the right operand is climbed first.  Equal
        precedence stops the climb, which makes operators left-associative.
        """
        op_tok = self.tokens.next()
        precedence = op_tok.binary_precedence
        right = self.parse_primary_expression()
        while precedence < self.tokens.current().binary_precedence:
            right = self.do_parse_binary(right)
        return Binary(operator=_BINOP_MAP[op_tok.type], left=left, right=right, position=left.position)

    # ------------------------------------------------------------------
    # Unary and update expressions
    # ------------------------------------------------------------------

    def parse_unary_expression(self) -> Unary:
        """Parse: ``('!' | '+' | '-') primary``"""
        # !-+!x nests through parse_primary_expression
        op_tok = self.tokens.next()
        argument = self.parse_primary_expression()
        return Unary(operator=_UNARY_MAP[op_tok.type], argument=argument, position=op_tok.position)

    def parse_update_expression(self, prefix: bool, argument: Expression | None = None) -> Update:
        """Parse ``++x`` / ``--x`` (prefix) or wrap ``argument`` as ``x++`` / ``x--``."""
        op_tok = self.tokens.expect_one_of(TokenType.INC, TokenType.DEC)
        if prefix:
            argument = self.parse_primary_expression()
        if argument is None or argument.kind not in LVALUE_KINDS:
            raise ParseError(
                message="Invalid left-hand side in update expression",
                kind=ParseErrorKind.INVALID_LVALUE,
                position=argument.position if argument is not None else op_tok.position,
                found=op_tok,
            )
        return Update(
            operator=_UPDATE_MAP[op_tok.type],
            argument=argument,
            prefix=prefix,
            position=op_tok.position if prefix else argument.position,
        )

    # ------------------------------------------------------------------
    # Grouping, containers and argument lists
    # ------------------------------------------------------------------

    def parse_paren_expression(self) -> Expression:
        """Parse: ``'(' expression ')'``"""
        self.tokens.expect(TokenType.LPAREN)
        expr = self.parse_expression()
        self.tokens.expect(TokenType.RPAREN, "A parenthesized expression must be closed by a parenthesis")
        return expr

    def parse_array_expression(self) -> Array:
        """Parse: ``'[' (expression (',' expression)*)? ']'``"""
        start_tok = self.tokens.expect(TokenType.LBRACKET, "An array must begin with an opening bracket")
        elements: list[Expression] = []
        while not self.tokens.test_any(TokenType.RBRACKET, TokenType.EOF):
            if elements:
                self.tokens.expect(TokenType.COMMA, "Array elements must be separated by a comma")
            elements.append(self.parse_expression())
        self.tokens.expect(TokenType.RBRACKET, "An array must be closed by a bracket")
        return Array(elements=tuple(elements), position=start_tok.position)

    def parse_map_expression(self) -> Map:
        """Parse: ``'{' (STRING ':' expression (',' STRING ':' expression)*)? '}'``"""
        start_tok = self.tokens.expect(TokenType.LBRACE, "A map must begin with an opening brace")
        entries: list[tuple[Literal, Expression]] = []
        while not self.tokens.test_any(TokenType.RBRACE, TokenType.EOF):
            if entries:
                self.tokens.expect(TokenType.COMMA, "Map entries must be separated by a comma")
            key_tok = self.tokens.expect(TokenType.STRING, "A map key must be a string")
            self.tokens.expect(TokenType.COLON, "A map key and value must be separated by a colon")
            key = Literal(value=key_tok.value, raw=key_tok.value, position=key_tok.position)
            entries.append((key, self.parse_expression()))
        self.tokens.expect(TokenType.RBRACE, "A map must be closed by a brace")
        return Map(entries=tuple(entries), position=start_tok.position)

    def parse_arguments(self) -> tuple[Expression, ...]:
        """Parse: ``'(' (expression (',' expression)*)? ')'``"""
        # the_func(1, "foo")
        self.tokens.expect(TokenType.LPAREN, "An argument list must begin with an opening parenthesis")
        args: list[Expression] = []
        while not self.tokens.test_any(TokenType.RPAREN, TokenType.EOF):
            if args:
                self.tokens.expect(TokenType.COMMA, "Arguments must be separated by a comma")
            args.append(self.parse_expression())
        self.tokens.expect(TokenType.RPAREN, "An argument list must be closed by a parenthesis")
        return tuple(args)


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def parse(source: str) -> Block:
    """Parse a Quill source string and return the root ``Block``.

    Parameters
    ----------
    source:
        Complete Quill source text.

    Returns
    -------
    Block
        The parsed program.

    Raises
    ------
    LexError
        If the source contains invalid characters or unterminated literals.
    ParseError
        On the first syntax error.

    Example
    -------
    ::

        from quill.parser import parse
        tree = parse('total = price * (1 + rate); log(total);')
    """
    tokens = tokenize(source)
    return Parser(tokens).parse()


def parse_expression(source: str) -> Expression:
    """Parse a source string that holds exactly one expression.

    Raises
    ------
    ParseError
        If the text is not a single complete expression.
    """
    parser = Parser(tokenize(source))
    expr = parser.parse_expression()
    parser.tokens.expect(TokenType.EOF, "Expected end of input after expression")
    return expr
