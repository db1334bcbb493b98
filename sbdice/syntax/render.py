"""Regenerate source text from a SyntaxTree.

Leaves are emitted in source order and the text between two leaves is
copied from the original source, so layout is kept as written. Only string
literals whose raw text was cleared are re-quoted from their value.
"""

from collections.abc import Iterator

from sbdice.syntax.decode import quote_string
from sbdice.syntax.tree import Other, StringLiteral, SyntaxNode, SyntaxTree, walk

COMMENT_TYPES = frozenset({"comment", "html_comment"})

_HSPACE = " \t"


def _iter_leaves(node: SyntaxNode) -> Iterator[SyntaxNode]:
    for current in walk(node):
        if not (isinstance(current, Other) and current.children):
            yield current


def _is_comment(node: SyntaxNode) -> bool:
    return isinstance(node, Other) and node.kind in COMMENT_TYPES


class _Renderer:
    """Single-use writer accumulating output chunks."""

    def __init__(self, tree: SyntaxTree, strip_comments: bool):
        self.tree = tree
        self.strip_comments = strip_comments
        self.chunks: list[str] = []
        self.at_line_start = True

    def emit(self, text: str) -> None:
        if text:
            self.chunks.append(text)
            self.at_line_start = text.endswith("\n")

    def leaf_text(self, leaf: SyntaxNode) -> str:
        if isinstance(leaf, StringLiteral) and leaf.raw is None:
            return quote_string(leaf.value or "", escapes=leaf.escapes)
        return self.tree.text(leaf.start_byte, leaf.end_byte)

    def run(self) -> str:
        source = self.tree.source
        leaves = list(_iter_leaves(self.tree.root))
        pos = 0

        for index, leaf in enumerate(leaves):
            gap = self.tree.text(pos, leaf.start_byte) if leaf.start_byte > pos else ""

            if not (self.strip_comments and _is_comment(leaf)):
                self.emit(gap)
                self.emit(self.leaf_text(leaf))
                pos = max(pos, leaf.end_byte)
                continue

            next_start = leaves[index + 1].start_byte if index + 1 < len(leaves) else len(source)
            pos = self._drop_comment(leaf, gap, next_start)

        if pos < len(source):
            self.emit(self.tree.text(pos, len(source)))
        return "".join(self.chunks)

    def _drop_comment(self, comment: SyntaxNode, gap: str, next_start: int) -> int:
        """Emit what replaces a comment and return the new source position."""
        source = self.tree.source
        end = comment.end_byte

        newline_at = gap.rfind("\n")
        starts_line = (newline_at != -1 or self.at_line_start) and not gap[newline_at + 1:].strip()

        line_end = source.find(b"\n", end)
        trailing = source[end:] if line_end == -1 else source[end:line_end]
        if starts_line and not trailing.strip():
            # Comment alone on its line: drop the whole line
            self.emit(gap[:newline_at + 1])
            return len(source) if line_end == -1 else line_end + 1

        after_gap = self.tree.text(end, next_start) if next_start > end else ""
        rest = after_gap.lstrip(_HSPACE)
        if rest[:1] in ("\r", "\n") or (not rest and next_start >= len(source)):
            # Comment ended the line: drop the space before it too
            gap = gap.rstrip(_HSPACE)
        self.emit(gap)

        comment_text = self.tree.text(comment.start_byte, end)
        if "\n" in comment_text and "\n" not in gap and "\n" not in after_gap:
            self.emit("\n")
        elif not gap and not after_gap and self.chunks and next_start < len(source):
            self.emit(" ")
        return end


def render(tree: SyntaxTree, strip_comments: bool = True) -> str:
    """Render a tree back to source text.

    Args:
        tree: The (possibly mutated) tree.
        strip_comments: Drop comment nodes from the output.

    Returns:
        The source text. The tree is not modified, so rendering twice
        yields the same text.
    """
    return _Renderer(tree, strip_comments).run()

