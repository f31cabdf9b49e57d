"""Quill Formatter module.

Exports the ``QuillFormatter`` class and the ``format_tree`` convenience
function.
"""
from __future__ import annotations

from quill.formatter.formatter import QuillFormatter, format_tree

__all__ = ["QuillFormatter", "format_tree"]
