"""Mutable syntax tree.

tree-sitter trees are read-only, so a parse is copied into these nodes.
There are exactly three node variants: string literals, template static
segments, and everything else. Every node keeps its byte span in the
original source; the renderer copies the text between leaves from there.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class StringLiteral:
    """A quoted, non-template string constant."""

    value: str | None  # Decoded text, None when decoding failed
    raw: str | None  # Original source text with quotes, None once modified
    start_byte: int
    end_byte: int
    line: int = 0  # 1-based
    escapes: bool = True  # False for JSX attribute strings


@dataclass
class TemplateStatic:
    """Literal text between interpolations of a template string."""

    start_byte: int
    end_byte: int


@dataclass
class Other:
    """Any other node; leaves are tokens and have no children."""

    kind: str
    start_byte: int
    end_byte: int
    children: list["SyntaxNode"] = field(default_factory=list)


SyntaxNode = StringLiteral | TemplateStatic | Other


@dataclass
class SyntaxTree:
    """A parsed source file owned by one run."""

    root: SyntaxNode
    source: bytes
    language: str

    def text(self, start_byte: int, end_byte: int) -> str:
        """Source text of a byte span."""
        return self.source[start_byte:end_byte].decode("utf-8")


def walk(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield node and everything below it in source order (pre-order).

    Uses an explicit stack, so tree depth is not bounded by the interpreter
    recursion limit. Long `"a" + "b" + ...` chains nest one level per term.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Other):
            stack.extend(reversed(current.children))


def iter_string_literals(node: SyntaxNode) -> Iterator[StringLiteral]:
    """Yield every StringLiteral below node in source order."""
    for current in walk(node):
        if isinstance(current, StringLiteral):
            yield current
