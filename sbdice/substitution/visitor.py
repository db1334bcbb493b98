"""In-place string literal substitution.

LiteralVisitor walks a SyntaxTree depth-first in source order and replaces
the value of every plain string literal with its sequential index ("0",
"1", ...), recording the original values in the same order. Template static
segments are never touched.

LiteralRestorer is the inverse: it puts the original values back for every
literal whose value is a known placeholder.
"""

from collections.abc import Mapping

from sbdice.logging import logger
from sbdice.syntax.tree import (
    Other,
    StringLiteral,
    SyntaxNode,
    TemplateStatic,
    iter_string_literals,
    walk,
)


class LiteralVisitor:
    """Replaces string literals with placeholders and records the originals.

    One visitor serves one traversal; its counter and record are never
    shared between runs.

    Attributes:
        counter: Next placeholder index.
        originals: Original value of each substituted literal, by index.
    """

    def __init__(self) -> None:
        self.counter = 0
        self.originals: list[str] = []

    def visit(self, node: SyntaxNode) -> None:
        """Substitute every string literal at or below node."""
        for current in walk(node):
            match current:
                case StringLiteral():
                    self._substitute(current)
                case TemplateStatic() | Other():
                    pass

    def _substitute(self, node: StringLiteral) -> None:
        original = getattr(node, "value", None)
        if not isinstance(original, str):
            logger.warning(
                "Undecodable string literal at line %s, recording it as empty",
                getattr(node, "line", "?"),
            )
            original = ""

        self.originals.append(original)
        node.value = str(self.counter)
        # Force the renderer to quote the new value
        node.raw = None
        self.counter += 1


class LiteralRestorer:
    """Puts original values back in place of placeholders.

    Attributes:
        restored: Number of literals given back their original value.
        unknown: Literal values that are not keys of the mapping, in order.
        used: Mapping keys that were restored at least once.
    """

    def __init__(self, mapping: Mapping[str, str]):
        self.mapping = mapping
        self.restored = 0
        self.unknown: list[str] = []
        self.used: set[str] = set()

    def visit(self, node: SyntaxNode) -> None:
        """Restore every placeholder literal at or below node."""
        for current in iter_string_literals(node):
            match current.value:
                case str(value) if value in self.mapping:
                    current.value = self.mapping[value]
                    current.raw = None
                    self.used.add(value)
                    self.restored += 1
                case value:
                    self.unknown.append(value or "")

    @property
    def unused(self) -> list[str]:
        """Mapping keys never seen in the tree, in numeric order."""
        return sorted(set(self.mapping) - self.used, key=int)
