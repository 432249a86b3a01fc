"""
Hierarchy builder.

Rebuilds a forest from the flat, level-tagged node sequence produced by
extraction.
"""

from __future__ import annotations

import logging

from lattice.core.document import ContentNode

logger = logging.getLogger(__name__)


class HierarchyBuilder:
    """
    Builds a forest of ContentNodes from a flat sequence.

    Nodes are re-parented in place, never copied. A node's parent is the
    nearest preceding open node with a strictly lower level; a level-0
    node closes everything that is open and starts a new root.
    """

    @staticmethod
    def build(nodes: list[ContentNode]) -> list[ContentNode]:
        """Build the forest.

        Strategy:
        1. Walk nodes left to right, keeping a stack of open ancestors
        2. A level-0 node (or any node when nothing is open) becomes a
           root and clears the stack
        3. Otherwise pop ancestors at the same or a deeper level and
           attach to whatever is left on top, or make a root
        4. Push every node so later nodes can nest under it

        Args:
            nodes: Flat node sequence in document order.

        Returns:
            Root nodes in document order.
        """
        roots: list[ContentNode] = []
        stack: list[ContentNode] = []

        for node in nodes:
            if node.level == 0 or not stack:
                roots.append(node)
                stack.clear()
                stack.append(node)
                continue

            while stack and stack[-1].level >= node.level:
                stack.pop()

            if stack:
                stack[-1].add_child(node)
            else:
                roots.append(node)

            stack.append(node)

        logger.debug("Built %d roots from %d nodes", len(roots), len(nodes))
        return roots


def build_hierarchy(nodes: list[ContentNode]) -> list[ContentNode]:
    """Convenience wrapper around HierarchyBuilder.build()."""
    return HierarchyBuilder.build(nodes)
