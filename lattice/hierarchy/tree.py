"""
Document tree utilities.

Wraps the forest returned by the hierarchy builder and provides the
operations the outline renderer and the API need: traversal,
expand/collapse state and a plain-text outline.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from lattice.core.document import ContentNode, NodeKind

EXPANDED_MARKER = "[-] "
COLLAPSED_MARKER = "[+] "


@dataclass
class DocumentTree:
    """A parsed document forest."""

    roots: list[ContentNode]

    def iter_with_depth(self) -> Iterator[tuple[ContentNode, int]]:
        """Pre-order (document order) walk yielding (node, depth)."""
        stack: list[tuple[ContentNode, int]] = [
            (root, 0) for root in reversed(self.roots)
        ]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            for child in reversed(node.children):
                stack.append((child, depth + 1))

    def iter_nodes(self) -> Iterator[ContentNode]:
        """All nodes in document order."""
        for node, _ in self.iter_with_depth():
            yield node

    @property
    def total_nodes(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    @property
    def max_depth(self) -> int:
        """Deepest nesting (roots are depth 0); -1 for an empty tree."""
        return max((depth for _, depth in self.iter_with_depth()), default=-1)

    @property
    def leaf_count(self) -> int:
        return sum(1 for node in self.iter_nodes() if node.is_leaf)

    def texts(self) -> list[str]:
        """Node texts in document order."""
        return [node.text for node in self.iter_nodes()]

    def initial_expanded_state(self) -> dict[str, bool]:
        """Top-level headings start expanded; everything else collapsed."""
        return {
            node.id: True
            for node in self.roots
            if node.kind == NodeKind.HEADING and node.level == 1
        }

    def render_outline(self, expanded: dict[str, bool] | None = None) -> str:
        """
        Render the tree as an indented text outline.

        Headings with children show a collapse marker and hide their
        subtree unless ``expanded`` maps their id to True. Children of
        list items and paragraphs are always shown.

        Args:
            expanded: Expand/collapse state keyed by node id. Defaults to
                initial_expanded_state().
        """
        state = self.initial_expanded_state() if expanded is None else expanded
        lines: list[str] = []

        stack: list[tuple[ContentNode, int]] = [
            (root, 0) for root in reversed(self.roots)
        ]
        while stack:
            node, depth = stack.pop()
            indent = "  " * depth
            is_open = True

            if node.kind == NodeKind.HEADING:
                marker = ""
                if node.children:
                    is_open = state.get(node.id, False)
                    marker = EXPANDED_MARKER if is_open else COLLAPSED_MARKER
                number = f"{node.numbering} " if node.numbering else ""
                lines.append(f"{indent}{marker}{number}{node.text}")
            elif node.kind == NodeKind.LIST_ITEM:
                lines.append(f"{indent}{node.numbering or '•'} {node.text}")
            else:
                lines.append(f"{indent}{node.text}")

            if is_open:
                for child in reversed(node.children):
                    stack.append((child, depth + 1))

        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<DocumentTree roots={len(self.roots)} nodes={self.total_nodes}>"
