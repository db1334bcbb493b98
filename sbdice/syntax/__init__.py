"""Syntax layer: tree-sitter parsing into a mutable tree and rendering back.

Supports TypeScript, TSX and JavaScript.
"""

from sbdice.syntax.base import (
    EXTENSION_TO_LANGUAGE,
    SUPPORTED_EXTENSIONS,
    get_parser,
    language_for_path,
)
from sbdice.syntax.decode import decode_string_literal, quote_string
from sbdice.syntax.parser import parse_source
from sbdice.syntax.render import COMMENT_TYPES, render
from sbdice.syntax.tree import (
    Other,
    StringLiteral,
    SyntaxNode,
    SyntaxTree,
    TemplateStatic,
    iter_string_literals,
    walk,
)

__all__ = [
    "COMMENT_TYPES",
    "EXTENSION_TO_LANGUAGE",
    "SUPPORTED_EXTENSIONS",
    "Other",
    "StringLiteral",
    "SyntaxNode",
    "SyntaxTree",
    "TemplateStatic",
    "decode_string_literal",
    "get_parser",
    "iter_string_literals",
    "language_for_path",
    "parse_source",
    "quote_string",
    "render",
    "walk",
]
