"""Parse TypeScript/JavaScript source into a mutable SyntaxTree."""

from tree_sitter import Node

from sbdice.errors import DecodeFailure, ParseError
from sbdice.logging import logger
from sbdice.syntax.base import _find_first_error, get_parser
from sbdice.syntax.decode import decode_string_literal
from sbdice.syntax.tree import Other, StringLiteral, SyntaxNode, SyntaxTree, TemplateStatic

# Children of template_string holding static text
TEMPLATE_STATIC_TYPES = frozenset({"string_fragment", "escape_sequence"})


def parse_source(source: str | bytes, language: str) -> SyntaxTree:
    """Parse source text into a SyntaxTree.

    Args:
        source: UTF-8 source text.
        language: Grammar name ("typescript", "tsx" or "javascript").

    Returns:
        The mutable tree, owning a copy of the source bytes.

    Raises:
        ParseError: If tree-sitter reports any syntax error.
    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    ts_tree = get_parser(language).parse(data)

    error = _find_first_error(ts_tree.root_node)
    if error is not None:
        line = error.start_point[0] + 1
        raise ParseError(f"Syntax error in {language} source at line {line}", line=line)

    return SyntaxTree(root=_convert(ts_tree.root_node), source=data, language=language)


def _convert(root: Node) -> SyntaxNode:
    """Copy a tree-sitter tree into SyntaxNodes.

    Iterative, so deeply nested input (long concatenation chains, nested
    arrays) does not hit the recursion limit. Each stack entry carries the
    list its converted node is appended to; siblings are pushed in reverse
    so every list fills in source order.
    """
    top: list[SyntaxNode] = []
    stack: list[tuple[Node, str, list[SyntaxNode]]] = [(root, "", top)]
    while stack:
        node, parent_type, siblings = stack.pop()

        # The `string` keyword of predefined_type is an anonymous node
        if node.type == "string" and node.is_named:
            siblings.append(_convert_string(node, escapes=parent_type != "jsx_attribute"))
            continue
        if parent_type == "template_string" and node.type in TEMPLATE_STATIC_TYPES:
            siblings.append(TemplateStatic(start_byte=node.start_byte, end_byte=node.end_byte))
            continue

        converted = Other(kind=node.type, start_byte=node.start_byte, end_byte=node.end_byte)
        siblings.append(converted)
        for child in reversed(node.children):
            stack.append((child, node.type, converted.children))

    return top[0]


def _convert_string(node: Node, escapes: bool) -> StringLiteral:
    raw = node.text.decode("utf-8")
    line = node.start_point[0] + 1
    try:
        value: str | None = decode_string_literal(raw, escapes=escapes)
    except DecodeFailure as e:
        logger.debug("Cannot decode string literal at line %d: %s", line, e)
        value = None

    return StringLiteral(
        value=value,
        raw=raw,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        line=line,
        escapes=escapes,
    )
