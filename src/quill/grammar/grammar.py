"""Formal grammar rules for the Quill scripting language.

This module documents the Quill grammar as EBNF-style string constants.
The grammar is implemented as a hand-written recursive-descent parser
(see ``quill.parser``); binary operators are resolved by precedence
climbing over ``quill.grammar.tokens.BINARY_PRECEDENCE`` rather than by a
layered grammar, so the expression rules below list operators flat.

Grammar notation used here:
    ``::=``     production rule
    ``|``       alternation
    ``( )``     grouping
    ``[ ]``     optional (zero or one)
    ``{ }``     zero or more repetitions
    ``STRING``  terminal: quoted string literal
    ``NUMBER``  terminal: integer or decimal literal
    ``IDENT``   terminal: identifier (letter/underscore followed by word chars)
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

GRAMMAR_STATEMENT = """
program ::= { statement } EOF

statement ::= ( assign_stmt | block_stmt | expression ) ( ';' | <EOF> )

assign_stmt ::= IDENT '=' expression

block_stmt ::= '{' { statement } '}'
    (* chosen only when '{' is not followed by '}' and the token
       after next is not ':'; otherwise '{' starts a map literal *)
"""

# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

GRAMMAR_EXPRESSION = """
expression ::= postfix_expr { binary_op postfix_expr }

binary_op ::= '||' | '&&' | '==' | '!=' | '<' | '>' | '<=' | '>='
            | '+' | '-' | '*' | '/' | '%'

postfix_expr ::= primary_expr { call_suffix | member_suffix | index_suffix
                              | '++' | '--' }

call_suffix   ::= argument_list
member_suffix ::= '.' IDENT [ argument_list ]
index_suffix  ::= '[' expression ']'

primary_expr ::=
    STRING
    | NUMBER
    | IDENT
    | array_literal
    | map_literal
    | '(' expression ')'
    | ( '++' | '--' ) postfix_expr
    | ( '!' | '+' | '-' ) primary_expr

array_literal ::= '[' [ expression { ',' expression } ] ']'
map_literal   ::= '{' [ map_entry { ',' map_entry } ] '}'
map_entry     ::= STRING ':' expression
argument_list ::= '(' [ expression { ',' expression } ] ')'
"""

# ---------------------------------------------------------------------------
# Full grammar as one string (for documentation / tooling consumers)
# ---------------------------------------------------------------------------

FULL_GRAMMAR: str = "\n".join([
    "# Quill Formal Grammar (EBNF-like notation)",
    "# ============================================",
    "",
    "# Statements",
    GRAMMAR_STATEMENT,
    "# Expressions",
    GRAMMAR_EXPRESSION,
])
