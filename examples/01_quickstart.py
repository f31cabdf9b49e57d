#!/usr/bin/env python3
"""Example: Quickstart - quill-lang

Minimal working example: tokenize a Quill script, parse it into an AST,
format it to canonical style, and dump the tree as JSON.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install quill-lang
"""
from __future__ import annotations

import quill
from quill.ast import AstSerializer

QUILL_SOURCE = '''
// shopping cart totals
items = [{"price": 4.5, "qty": 2}, {"price": 10, "qty": 1}];
total=0;
{
  first = items[0];
  total = total + first.price*first.qty;
};
count++;
log.info("total", total, {"ok": !failed && total > 0});
'''


def main() -> None:
    print(f"quill-lang version: {quill.__version__}")

    # Step 1: Tokenize
    tokens = quill.tokenize(QUILL_SOURCE)
    print(f"Scanned {len(tokens)} tokens")

    # Step 2: Parse into an AST
    tree = quill.parse(QUILL_SOURCE)
    print(f"Parsed {len(tree.body)} top-level statements:")
    for stmt in tree.body:
        print(f"  {stmt.kind.name:<22} at {stmt.position.line}:{stmt.position.col}")

    # Step 3: Format to canonical style
    canonical = quill.format(tree)
    print("\nFormatted:")
    print(canonical)

    # Step 4: Parse a single expression and serialize it
    expr = quill.parse_expression("a.b[c].d(1 + 2 * 3)")
    print(AstSerializer().to_json(expr)[:300])


if __name__ == "__main__":
    main()
